"""PostgreSQL implementation of Comment repository."""

from typing import Sequence

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from tally.domain.model import Comment
from tally.domain.repository import CommentRepository
from tally.domain.value import AnswerId
from tally.persistence.mappers import comment_to_dict, row_to_comment
from tally.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment and return it with the assigned id."""
        stmt = (
            insert(comments_table)
            .values(**comment_to_dict(comment))
            .returning(*comments_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict())

    async def count_by_answers(
        self, answer_ids: Sequence[AnswerId]
    ) -> dict[AnswerId, int]:
        """Count comments per answer (batch query)."""
        if not answer_ids:
            return {}

        stmt = (
            select(comments_table.c.answer_id, func.count().label("comment_count"))
            .where(comments_table.c.answer_id.in_(answer_ids))
            .group_by(comments_table.c.answer_id)
        )
        result = await self.session.execute(stmt)
        counts = {AnswerId(int(row.answer_id)): int(row.comment_count) for row in result}
        return {aid: counts.get(aid, 0) for aid in answer_ids}
