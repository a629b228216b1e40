"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

from tally.domain.model import Answer
from tally.domain.value import AnswerId, TopicId

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_answer(
    answer_id: int,
    topic_id: int | None = 1,
    text: str | None = None,
    profile_id: str | None = "author",
    minutes: int = 0,
) -> Answer:
    """Build an answer for seeding in-memory repositories.

    Args:
        answer_id: Answer id
        topic_id: Owning topic
        text: Body; defaults to a generated one
        profile_id: Author
        minutes: Offset from a fixed base time, for ordering
    """
    return Answer(
        id=AnswerId(answer_id),
        text=text or f"Answer {answer_id}",
        profile_id=profile_id,
        topic_id=TopicId(topic_id) if topic_id is not None else None,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


class FakeClock:
    """Manually advanced monotonic clock for admission tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
