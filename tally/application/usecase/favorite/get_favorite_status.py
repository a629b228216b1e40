"""Get favorite status use case."""

from pydantic import BaseModel

from tally.domain.service import FavoriteService
from tally.domain.value import AnswerId, VoterId


class GetFavoriteStatusRequest(BaseModel):
    """Get favorite status request."""

    answer_id: int
    voter_id: str


class GetFavoriteStatusResponse(BaseModel):
    """Get favorite status response."""

    favorited: bool


class GetFavoriteStatusUseCase:
    """Use case for the non-mutating favorite status check."""

    def __init__(self, favorite_service: FavoriteService) -> None:
        self.favorite_service = favorite_service

    async def execute(
        self, request: GetFavoriteStatusRequest
    ) -> GetFavoriteStatusResponse:
        state = await self.favorite_service.is_favorited(
            AnswerId(request.answer_id), VoterId(request.voter_id)
        )
        return GetFavoriteStatusResponse(favorited=state.favorited)
