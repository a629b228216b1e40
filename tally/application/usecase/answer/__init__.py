"""Answer use cases."""

from .list_topic_answers import (
    ListTopicAnswersRequest,
    ListTopicAnswersResponse,
    ListTopicAnswersUseCase,
)
from .payload import AnswerPayload, CommentPayload, VoteTallyPayload

__all__ = [
    "AnswerPayload",
    "CommentPayload",
    "ListTopicAnswersRequest",
    "ListTopicAnswersResponse",
    "ListTopicAnswersUseCase",
    "VoteTallyPayload",
]
