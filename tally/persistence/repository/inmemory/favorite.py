"""In-memory favorite repository for testing."""

from typing import Optional, Sequence

from tally.domain.error import ConflictError
from tally.domain.model import FavoriteRecord
from tally.domain.repository import FavoriteRepository
from tally.domain.value import AnswerId, VoterId
from tally.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory implementation of FavoriteRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def exists(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        return (answer_id, voter_id) in self._db.favorites

    async def save(self, answer_id: AnswerId, voter_id: VoterId) -> FavoriteRecord:
        """Insert a favorite row.

        Raises:
            ConflictError: If the row already exists
        """
        key = (answer_id, voter_id)
        if key in self._db.favorites:
            raise ConflictError("Already favorited")
        self._db.favorites[key] = self._db.next_id()
        return FavoriteRecord(answer_id=answer_id, voter_id=voter_id)

    async def delete(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        return self._db.favorites.pop((answer_id, voter_id), None) is not None

    async def list_by_voter(
        self, voter_id: VoterId, answer_ids: Optional[Sequence[AnswerId]] = None
    ) -> list[AnswerId]:
        wanted = set(answer_ids) if answer_ids else None
        return [
            aid
            for (aid, vid) in self._db.favorites
            if vid == voter_id and (wanted is None or aid in wanted)
        ]

    async def list_page_for_voter(
        self, voter_id: VoterId, offset: int, limit: int
    ) -> tuple[list[AnswerId], int]:
        """Page through a voter's favorites, newest first."""
        mine = sorted(
            ((seq, aid) for (aid, vid), seq in self._db.favorites.items() if vid == voter_id),
            reverse=True,
        )
        page = [aid for _, aid in mine[offset : offset + limit]]
        return page, len(mine)
