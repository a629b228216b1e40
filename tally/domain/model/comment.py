"""Comment entity."""

from datetime import datetime, timezone

from pydantic import Field

from tally.domain.model.common import DomainModel
from tally.domain.value import AnswerId, CommentId


class Comment(DomainModel):
    """Comment attached to an answer.

    `id` is None until the store assigns one.
    """

    id: CommentId | None = None
    answer_id: AnswerId
    text: str = Field(min_length=1, max_length=500)
    profile_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
