"""Get user answer data use case (bulk hydration read)."""

from pydantic import BaseModel, Field

from tally.domain.service import UserDataService
from tally.domain.value import AnswerId, VoterId


class GetUserAnswerDataRequest(BaseModel):
    """Get user answer data request.

    A missing voter means anonymous browsing and yields empty data.
    """

    voter_id: str | None = None
    answer_ids: list[int] = Field(default_factory=list)


class GetUserAnswerDataResponse(BaseModel):
    """Voter's levels keyed by answer id string, and favorited answer ids."""

    votes: dict[str, int] = Field(default_factory=dict)
    favorites: list[int] = Field(default_factory=list)


class GetUserAnswerDataUseCase:
    """Use case for reading a voter's votes and favorites over a list of answers."""

    def __init__(self, user_data_service: UserDataService) -> None:
        self.user_data_service = user_data_service

    async def execute(
        self, request: GetUserAnswerDataRequest
    ) -> GetUserAnswerDataResponse:
        voter_id = VoterId(request.voter_id) if request.voter_id else None
        data = await self.user_data_service.get_user_answer_data(
            voter_id, [AnswerId(i) for i in request.answer_ids]
        )
        return GetUserAnswerDataResponse(
            votes={str(aid): level for aid, level in sorted(data.votes.items())},
            favorites=sorted(int(aid) for aid in data.favorites),
        )
