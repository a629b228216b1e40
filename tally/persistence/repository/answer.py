"""PostgreSQL implementation of Answer repository."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.model import Answer
from tally.domain.repository import AnswerRepository
from tally.domain.value import AnswerId, TopicId
from tally.persistence.mappers import row_to_answer
from tally.persistence.tables import answers_table


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, answer_id: AnswerId) -> bool:
        """Check whether an answer exists."""
        stmt = select(answers_table.c.id).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by id."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_by_ids(self, answer_ids: Sequence[AnswerId]) -> list[Answer]:
        """Find several answers (batch query)."""
        if not answer_ids:
            return []

        stmt = select(answers_table).where(answers_table.c.id.in_(answer_ids))
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def find_page_by_topic(
        self,
        topic_id: TopicId,
        cursor: Optional[datetime] = None,
        limit: int = 20,
    ) -> list[Answer]:
        """Find a page of a topic's answers, newest first."""
        stmt = (
            select(answers_table)
            .where(answers_table.c.topic_id == topic_id)
            .order_by(answers_table.c.created_at.desc())
            .limit(limit)
        )
        if cursor is not None:
            stmt = stmt.where(answers_table.c.created_at < cursor)
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]
