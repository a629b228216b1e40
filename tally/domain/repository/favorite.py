"""Favorite repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from tally.domain.model import FavoriteRecord
from tally.domain.value import AnswerId, VoterId


class FavoriteRepository(ABC):
    """Repository for favorite rows (existence-only)."""

    @abstractmethod
    async def exists(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Check whether the voter has favorited the answer."""
        pass

    @abstractmethod
    async def save(self, answer_id: AnswerId, voter_id: VoterId) -> FavoriteRecord:
        """Insert a favorite row.

        Returns:
            The created record

        Raises:
            ConflictError: If the row already exists (unique constraint)
        """
        pass

    @abstractmethod
    async def delete(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Delete a favorite row. Idempotent.

        Returns:
            True if a row was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def list_by_voter(
        self, voter_id: VoterId, answer_ids: Optional[Sequence[AnswerId]] = None
    ) -> list[AnswerId]:
        """List answer ids the voter has favorited.

        Args:
            voter_id: The voter
            answer_ids: Restrict to these answers; None or empty means all
        """
        pass

    @abstractmethod
    async def list_page_for_voter(
        self, voter_id: VoterId, offset: int, limit: int
    ) -> tuple[list[AnswerId], int]:
        """Page through a voter's favorites, newest first.

        Returns:
            Tuple of (answer ids on this page, total favorites)
        """
        pass
