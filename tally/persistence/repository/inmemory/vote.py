"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from tally.domain.model import VoteRecord
from tally.domain.repository import VoteRepository
from tally.domain.value import AnswerId, VoteLevel, VoterId
from tally.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def upsert(
        self, answer_id: AnswerId, voter_id: VoterId, level: VoteLevel
    ) -> VoteRecord:
        """Insert or replace the voter's level for an answer."""
        self._db.votes[(answer_id, voter_id)] = VoteLevel(level)
        return VoteRecord(answer_id=answer_id, voter_id=voter_id, level=level)

    async def delete(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Delete the voter's row for an answer."""
        return self._db.votes.pop((answer_id, voter_id), None) is not None

    async def list_by_answer(self, answer_id: AnswerId) -> list[VoteRecord]:
        """List every voter's row for an answer."""
        return await self.list_by_answers([answer_id])

    async def list_by_answers(self, answer_ids: Sequence[AnswerId]) -> list[VoteRecord]:
        """List rows for several answers (batch query)."""
        wanted = set(answer_ids)
        return [
            VoteRecord(answer_id=aid, voter_id=vid, level=level)
            for (aid, vid), level in self._db.votes.items()
            if aid in wanted
        ]

    async def list_by_voter(
        self, voter_id: VoterId, answer_ids: Sequence[AnswerId]
    ) -> list[VoteRecord]:
        """List a voter's rows restricted to the given answers."""
        wanted = set(answer_ids)
        return [
            VoteRecord(answer_id=aid, voter_id=vid, level=level)
            for (aid, vid), level in self._db.votes.items()
            if vid == voter_id and aid in wanted
        ]
