"""Vote domain service."""

from typing import Sequence

import logfire

from tally.domain.error import NotFoundError, ValidationError
from tally.domain.model.vote import VoteRecord, VoteResult, VoteTally
from tally.domain.repository import AnswerRepository, VoteRepository
from tally.domain.value import CAST_LEVELS, AnswerId, VoteLevel, VoterId

from .base import Service, normalize_answer_ids


class VoteService(Service):
    """Domain service for three-level votes.

    Every cast writes exactly one row (upsert or delete) and then recomputes
    the answer's tally from a fresh listing, so concurrent casts by different
    voters converge without any counter bookkeeping.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        answer_repository: AnswerRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            answer_repository: Answer repository (existence checks)
        """
        self.vote_repository = vote_repository
        self.answer_repository = answer_repository

    async def cast_vote(
        self,
        answer_id: AnswerId,
        voter_id: VoterId,
        level: int,
        previous_level: int | None = None,
    ) -> VoteResult:
        """Cast, change or remove a vote and return the answer's vote state.

        Args:
            answer_id: Answer ID
            voter_id: Voter ID
            level: 1..3 to set the vote, 0 to remove it
            previous_level: Client's view of its prior level (diagnostic only)

        Returns:
            Recomputed tally and per-voter map for the answer

        Raises:
            ValidationError: If any input is malformed
            NotFoundError: If the answer does not exist
        """
        answer_id = self.require_answer_id(answer_id)
        voter_id = self.require_voter_id(voter_id)
        if isinstance(level, bool) or level not in CAST_LEVELS:
            raise ValidationError(f"level must be 0, 1, 2 or 3, got {level!r}")

        with logfire.span(
            "vote_service.cast_vote",
            answer_id=answer_id,
            voter_id=voter_id,
            level=level,
            previous_level=previous_level,
        ):
            if not await self.answer_repository.exists(answer_id):
                logfire.warn("Vote on non-existent answer", answer_id=answer_id)
                raise NotFoundError("Answer", str(answer_id))

            if level == 0:
                removed = await self.vote_repository.delete(answer_id, voter_id)
                if not removed:
                    logfire.info(
                        "No vote to remove",
                        answer_id=answer_id,
                        voter_id=voter_id,
                    )
            else:
                await self.vote_repository.upsert(
                    answer_id, voter_id, VoteLevel(level)
                )

            records = await self.vote_repository.list_by_answer(answer_id)
            result = VoteResult.from_records(answer_id, records)

            logfire.info(
                "Vote recorded",
                answer_id=answer_id,
                voter_id=voter_id,
                level=level,
                tally=result.tally.model_dump(),
            )
            return result

    async def get_vote_result(self, answer_id: AnswerId) -> VoteResult:
        """Read the current vote state of an answer without writing."""
        records = await self.vote_repository.list_by_answer(answer_id)
        return VoteResult.from_records(answer_id, records)

    async def tallies_for_answers(
        self, answer_ids: Sequence[AnswerId]
    ) -> dict[AnswerId, VoteTally]:
        """Compute tallies for several answers from one batched read.

        Answers without votes map to an all-zero tally.
        """
        ids = normalize_answer_ids(answer_ids)
        if not ids:
            return {}

        records = await self.vote_repository.list_by_answers(ids)
        grouped = _group_by_answer(records)
        return {aid: VoteTally.from_records(grouped.get(aid, [])) for aid in ids}

    async def votes_by_for_answers(
        self, answer_ids: Sequence[AnswerId]
    ) -> dict[AnswerId, dict[str, int]]:
        """Build per-voter level maps for several answers (batch query)."""
        ids = normalize_answer_ids(answer_ids)
        if not ids:
            return {}

        records = await self.vote_repository.list_by_answers(ids)
        result: dict[AnswerId, dict[str, int]] = {aid: {} for aid in ids}
        for record in records:
            result.setdefault(record.answer_id, {})[str(record.voter_id)] = int(
                record.level
            )
        return result

    async def votes_for_voter(
        self, voter_id: VoterId, answer_ids: Sequence[AnswerId]
    ) -> dict[AnswerId, int]:
        """Map each answer the voter has rated to their level."""
        ids = normalize_answer_ids(answer_ids)
        if not voter_id or not ids:
            return {}

        records = await self.vote_repository.list_by_voter(voter_id, ids)
        return {record.answer_id: int(record.level) for record in records}


def _group_by_answer(records: Sequence[VoteRecord]) -> dict[AnswerId, list[VoteRecord]]:
    grouped: dict[AnswerId, list[VoteRecord]] = {}
    for record in records:
        grouped.setdefault(record.answer_id, []).append(record)
    return grouped
