"""Answer action use cases."""

from .handle_answer_action import (
    AnswerActionRequest,
    AnswerActionResponse,
    HandleAnswerActionUseCase,
    parse_answer_id,
    parse_level,
    resolve_intent,
)

__all__ = [
    "AnswerActionRequest",
    "AnswerActionResponse",
    "HandleAnswerActionUseCase",
    "parse_answer_id",
    "parse_level",
    "resolve_intent",
]
