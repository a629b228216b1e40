"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from tally.domain.model.comment import Comment
from tally.domain.value import AnswerId


class CommentRepository(ABC):
    """Repository for comments on answers."""

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a comment.

        Returns:
            The stored comment with its id assigned
        """
        pass

    @abstractmethod
    async def count_by_answers(
        self, answer_ids: Sequence[AnswerId]
    ) -> dict[AnswerId, int]:
        """Count comments per answer (batch query). Missing answers count 0."""
        pass
