"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from tally.domain.model import Comment
from tally.domain.repository import CommentRepository
from tally.domain.value import AnswerId, CommentId
from tally.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def save(self, comment: Comment) -> Comment:
        """Store a comment, assigning an id."""
        stored = comment.model_copy(update={"id": CommentId(self._db.next_id())})
        self._db.comments.append(stored)
        return stored

    async def count_by_answers(
        self, answer_ids: Sequence[AnswerId]
    ) -> dict[AnswerId, int]:
        counts = {aid: 0 for aid in answer_ids}
        for comment in self._db.comments:
            if comment.answer_id in counts:
                counts[comment.answer_id] += 1
        return counts
