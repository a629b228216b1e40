"""In-memory answer repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from tally.domain.model import Answer
from tally.domain.repository import AnswerRepository
from tally.domain.value import AnswerId, TopicId
from tally.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing.

    Answers are owned elsewhere in production; `save` exists so tests can
    seed them.
    """

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self._db = db or InMemoryDatabase()

    async def save(self, answer: Answer) -> Answer:
        """Seed an answer."""
        self._db.answers[answer.id] = answer
        return answer

    async def exists(self, answer_id: AnswerId) -> bool:
        return answer_id in self._db.answers

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        return self._db.answers.get(answer_id)

    async def find_by_ids(self, answer_ids: Sequence[AnswerId]) -> list[Answer]:
        return [self._db.answers[aid] for aid in answer_ids if aid in self._db.answers]

    async def find_page_by_topic(
        self,
        topic_id: TopicId,
        cursor: Optional[datetime] = None,
        limit: int = 20,
    ) -> list[Answer]:
        """Find a page of a topic's answers, newest first."""
        answers = [
            a
            for a in self._db.answers.values()
            if a.topic_id == topic_id and (cursor is None or a.created_at < cursor)
        ]
        answers.sort(key=lambda a: a.created_at, reverse=True)
        return answers[:limit]
