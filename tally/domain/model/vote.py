"""Vote entities.

Votes are three-level ratings on an answer. Each voter holds at most one
vote row per answer; changing the level replaces the row, removing the vote
deletes it. Tallies are always derived by counting rows.
"""

from collections.abc import Iterable

from pydantic import Field

from tally.domain.model.common import DomainModel
from tally.domain.value import AnswerId, VoteLevel, VoterId


class VoteRecord(DomainModel):
    """A single voter's vote on an answer."""

    answer_id: AnswerId
    voter_id: VoterId
    level: VoteLevel


class VoteTally(DomainModel):
    """Per-level vote counts for one answer."""

    level1: int = Field(default=0, ge=0)
    level2: int = Field(default=0, ge=0)
    level3: int = Field(default=0, ge=0)

    @classmethod
    def from_records(cls, records: Iterable[VoteRecord]) -> "VoteTally":
        """Count records grouped by level."""
        counts = {1: 0, 2: 0, 3: 0}
        for record in records:
            counts[int(record.level)] += 1
        return cls(level1=counts[1], level2=counts[2], level3=counts[3])

    @property
    def total(self) -> int:
        """Number of voters."""
        return self.level1 + self.level2 + self.level3

    @property
    def score(self) -> int:
        """Weighted score shown to readers: 1*level1 + 2*level2 + 3*level3."""
        return self.level1 + 2 * self.level2 + 3 * self.level3

    def count_for(self, level: int) -> int:
        """Return the bucket count for a level (1..3)."""
        return getattr(self, f"level{level}")

    def adjusted(self, level: int, delta: int) -> "VoteTally":
        """Return a copy with one bucket shifted by delta, floored at zero."""
        current = self.count_for(level)
        return self.model_copy(update={f"level{level}": max(0, current + delta)})


class VoteResult(DomainModel):
    """Authoritative vote state for an answer after a cast."""

    answer_id: AnswerId
    tally: VoteTally
    voters_map: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_records(
        cls, answer_id: AnswerId, records: list[VoteRecord]
    ) -> "VoteResult":
        """Build tally and voters map from the same listing."""
        return cls(
            answer_id=answer_id,
            tally=VoteTally.from_records(records),
            voters_map={str(r.voter_id): int(r.level) for r in records},
        )
