"""PostgreSQL implementation of Vote repository."""

from typing import Sequence

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.error import ConflictError, StoreError
from tally.domain.model import VoteRecord
from tally.domain.repository import VoteRepository
from tally.domain.value import AnswerId, VoteLevel, VoterId
from tally.persistence.mappers import row_to_vote
from tally.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(
        self, answer_id: AnswerId, voter_id: VoterId, level: VoteLevel
    ) -> VoteRecord:
        """Insert or update the voter's row, keyed on (answer_id, profile_id)."""
        stmt = insert(votes_table).values(
            answer_id=answer_id, profile_id=voter_id, level=int(level)
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[votes_table.c.answer_id, votes_table.c.profile_id],
            set_={"level": stmt.excluded.level, "updated_at": func.now()},
        )
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"Vote upsert conflicted: {e.orig}") from e
        except DBAPIError as e:
            raise StoreError(f"Vote upsert failed: {e.orig}") from e
        return VoteRecord(answer_id=answer_id, voter_id=voter_id, level=level)

    async def delete(self, answer_id: AnswerId, voter_id: VoterId) -> bool:
        """Delete the voter's row for an answer."""
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.answer_id == answer_id,
                votes_table.c.profile_id == voter_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def list_by_answer(self, answer_id: AnswerId) -> list[VoteRecord]:
        """List every voter's row for an answer."""
        stmt = select(votes_table).where(votes_table.c.answer_id == answer_id)
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def list_by_answers(self, answer_ids: Sequence[AnswerId]) -> list[VoteRecord]:
        """List rows for several answers (batch query)."""
        if not answer_ids:
            return []

        stmt = select(votes_table).where(votes_table.c.answer_id.in_(answer_ids))
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def list_by_voter(
        self, voter_id: VoterId, answer_ids: Sequence[AnswerId]
    ) -> list[VoteRecord]:
        """List a voter's rows restricted to the given answers (batch query)."""
        if not answer_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.profile_id == voter_id,
                votes_table.c.answer_id.in_(answer_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]
