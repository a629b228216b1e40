"""Toggle favorite use case."""

from pydantic import BaseModel

from tally.domain.service import FavoriteService
from tally.domain.value import AnswerId, VoterId


class ToggleFavoriteRequest(BaseModel):
    """Toggle favorite request."""

    answer_id: int
    voter_id: str


class ToggleFavoriteResponse(BaseModel):
    """Toggle favorite response."""

    favorited: bool


class ToggleFavoriteUseCase:
    """Use case for flipping a voter's favorite on an answer."""

    def __init__(self, favorite_service: FavoriteService) -> None:
        self.favorite_service = favorite_service

    async def execute(self, request: ToggleFavoriteRequest) -> ToggleFavoriteResponse:
        state = await self.favorite_service.toggle(
            AnswerId(request.answer_id), VoterId(request.voter_id)
        )
        return ToggleFavoriteResponse(favorited=state.favorited)
