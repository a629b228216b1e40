"""PostgreSQL implementation of Favorite repository."""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.error import ConflictError
from tally.domain.model import FavoriteRecord
from tally.domain.repository import FavoriteRepository
from tally.domain.value import AnswerId, VoterId
from tally.persistence.tables import favorites_table


class PostgresFavoriteRepository(FavoriteRepository):
    """PostgreSQL implementation of FavoriteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _pair(self, answer_id: AnswerId, voter_id: VoterId):
        return and_(
            favorites_table.c.answer_id == answer_id,
            favorites_table.c.profile_id == voter_id,
        )

    async def exists(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Check whether the voter has favorited the answer."""
        stmt = select(favorites_table.c.id).where(self._pair(answer_id, voter_id))
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, answer_id: AnswerId, voter_id: VoterId) -> FavoriteRecord:
        """Insert a favorite row.

        The insert runs in a savepoint so a unique violation leaves the
        surrounding transaction usable.
        """
        stmt = insert(favorites_table).values(answer_id=answer_id, profile_id=voter_id)
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError("Already favorited") from e
        return FavoriteRecord(answer_id=answer_id, voter_id=voter_id)

    async def delete(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Delete a favorite row."""
        stmt = delete(favorites_table).where(self._pair(answer_id, voter_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def list_by_voter(
        self, voter_id: VoterId, answer_ids: Optional[Sequence[AnswerId]] = None
    ) -> list[AnswerId]:
        """List answer ids the voter has favorited."""
        stmt = select(favorites_table.c.answer_id).where(
            favorites_table.c.profile_id == voter_id
        )
        if answer_ids:
            stmt = stmt.where(favorites_table.c.answer_id.in_(answer_ids))
        result = await self.session.execute(stmt)
        return [AnswerId(int(row.answer_id)) for row in result.fetchall()]

    async def list_page_for_voter(
        self, voter_id: VoterId, offset: int, limit: int
    ) -> tuple[list[AnswerId], int]:
        """Page through a voter's favorites, newest first."""
        count_stmt = select(func.count()).where(favorites_table.c.profile_id == voter_id)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(favorites_table.c.answer_id)
            .where(favorites_table.c.profile_id == voter_id)
            .order_by(favorites_table.c.created_at.desc(), favorites_table.c.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [AnswerId(int(row.answer_id)) for row in result.fetchall()], int(total)
