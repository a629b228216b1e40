"""Cast vote use case."""

from pydantic import BaseModel

from tally.domain.service import AnswerService, VoteService
from tally.domain.value import AnswerId, VoterId

from ..answer.payload import AnswerPayload


class CastVoteRequest(BaseModel):
    """Cast vote request.

    `level` 0 removes the voter's vote; 1..3 sets it.
    """

    answer_id: int
    voter_id: str
    level: int
    previous_level: int | None = None


class CastVoteResponse(BaseModel):
    """Cast vote response carrying the answer's authoritative vote state."""

    answer: AnswerPayload


class CastVoteUseCase:
    """Use case for casting, changing or removing a vote on an answer."""

    def __init__(self, vote_service: VoteService, answer_service: AnswerService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            answer_service: Answer domain service (answer body for the response)
        """
        self.vote_service = vote_service
        self.answer_service = answer_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Steps:
        1. Write the vote (upsert or delete) and recompute the tally
        2. Read the answer body and attach the recomputed tally and voters map

        Raises:
            ValidationError: If any input is malformed
            NotFoundError: If the answer does not exist
        """
        result = await self.vote_service.cast_vote(
            AnswerId(request.answer_id),
            VoterId(request.voter_id),
            request.level,
            previous_level=request.previous_level,
        )

        answer = await self.answer_service.get_answer(result.answer_id)
        answer = answer.model_copy(
            update={"votes": result.tally, "votes_by": result.voters_map}
        )
        return CastVoteResponse(answer=AnswerPayload.from_answer(answer))
