"""List favorite answers use case."""

from pydantic import BaseModel, Field

from tally.domain.service import AnswerService
from tally.domain.value import VoterId

from ..answer.payload import AnswerPayload


class ListFavoriteAnswersRequest(BaseModel):
    """List favorite answers request."""

    voter_id: str
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class ListFavoriteAnswersResponse(BaseModel):
    """List favorite answers response."""

    answers: list[AnswerPayload]
    total: int
    page: int
    page_size: int
    has_more: bool


class ListFavoriteAnswersUseCase:
    """Use case for listing the answers a voter has favorited."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(
        self, request: ListFavoriteAnswersRequest
    ) -> ListFavoriteAnswersResponse:
        answers, total = await self.answer_service.get_favorite_answers(
            VoterId(request.voter_id), page=request.page, page_size=request.page_size
        )
        return ListFavoriteAnswersResponse(
            answers=[AnswerPayload.from_answer(a) for a in answers],
            total=total,
            page=request.page,
            page_size=request.page_size,
            has_more=request.page * request.page_size < total,
        )
