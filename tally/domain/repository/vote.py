"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from tally.domain.model.vote import VoteRecord
from tally.domain.value import AnswerId, VoteLevel, VoterId


class VoteRepository(ABC):
    """Repository for vote rows.

    The store holds at most one row per (answer_id, voter_id). Writes are
    single-statement upserts or deletes, so no explicit locking is needed.
    """

    @abstractmethod
    async def upsert(
        self, answer_id: AnswerId, voter_id: VoterId, level: VoteLevel
    ) -> VoteRecord:
        """Insert or update the voter's row for an answer.

        Args:
            answer_id: Answer being rated
            voter_id: Voter casting the vote
            level: New level (replaces any prior level)

        Returns:
            The stored vote

        Raises:
            ConflictError: On transient write conflicts
        """
        pass

    @abstractmethod
    async def delete(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Delete the voter's row for an answer.

        Deleting a row that does not exist is not an error.

        Returns:
            True if a row was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def list_by_answer(self, answer_id: AnswerId) -> list[VoteRecord]:
        """List every voter's row for an answer."""
        pass

    @abstractmethod
    async def list_by_answers(
        self, answer_ids: Sequence[AnswerId]
    ) -> list[VoteRecord]:
        """List rows for several answers (batch query)."""
        pass

    @abstractmethod
    async def list_by_voter(
        self, voter_id: VoterId, answer_ids: Sequence[AnswerId]
    ) -> list[VoteRecord]:
        """List a voter's rows restricted to the given answers (batch query)."""
        pass
