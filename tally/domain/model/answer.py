"""Answer entity.

Answers are owned by the topic/answer collaborator; this system only reads
them. The vote and favorite fields carried here are hydration hints for the
first render and never the authority for vote state.
"""

from datetime import datetime

from pydantic import Field

from tally.domain.model.common import DomainModel
from tally.domain.model.vote import VoteTally
from tally.domain.value import AnswerId, TopicId


class Answer(DomainModel):
    """Answer with denormalized vote/favorite/comment aggregates."""

    id: AnswerId
    text: str = Field(min_length=1, max_length=1000)
    profile_id: str | None = None
    topic_id: TopicId | None = None
    created_at: datetime
    votes: VoteTally = Field(default_factory=VoteTally)
    votes_by: dict[str, int] = Field(default_factory=dict)
    favorited: bool | None = None
    comment_count: int = Field(default=0, ge=0)
