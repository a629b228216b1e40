"""List topic answers use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from tally.domain.service import AnswerService
from tally.domain.value import TopicId, VoterId

from .payload import AnswerPayload


class ListTopicAnswersRequest(BaseModel):
    """List topic answers request."""

    topic_id: int
    cursor: datetime | None = None
    page_size: int = Field(default=20, ge=1, le=100)
    viewer_id: str | None = None


class ListTopicAnswersResponse(BaseModel):
    """List topic answers response."""

    answers: list[AnswerPayload]
    next_cursor: datetime | None


class ListTopicAnswersUseCase:
    """Use case for paging through a topic's answers with their aggregates."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: ListTopicAnswersRequest) -> ListTopicAnswersResponse:
        viewer_id = VoterId(request.viewer_id) if request.viewer_id else None
        answers, next_cursor = await self.answer_service.get_topic_page(
            TopicId(request.topic_id),
            cursor=request.cursor,
            page_size=request.page_size,
            viewer_id=viewer_id,
        )
        return ListTopicAnswersResponse(
            answers=[AnswerPayload.from_answer(a) for a in answers],
            next_cursor=next_cursor,
        )
