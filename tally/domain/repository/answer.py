"""Answer repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from tally.domain.model.answer import Answer
from tally.domain.value import AnswerId, TopicId


class AnswerRepository(ABC):
    """Read access to answers owned by the topic/answer collaborator.

    Answers come back without vote/favorite/comment aggregates; services
    attach those.
    """

    @abstractmethod
    async def exists(self, answer_id: AnswerId) -> bool:
        """Check whether an answer exists."""
        pass

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by id."""
        pass

    @abstractmethod
    async def find_by_ids(self, answer_ids: Sequence[AnswerId]) -> list[Answer]:
        """Find several answers (order not guaranteed)."""
        pass

    @abstractmethod
    async def find_page_by_topic(
        self,
        topic_id: TopicId,
        cursor: Optional[datetime] = None,
        limit: int = 20,
    ) -> list[Answer]:
        """Find a page of a topic's answers, newest first.

        Args:
            topic_id: Topic to list
            cursor: Only answers created strictly before this instant
            limit: Page size
        """
        pass
