"""Unit tests for vote models."""

import pytest

from tally.domain.model import VoteRecord, VoteResult, VoteTally
from tally.domain.value import AnswerId, VoteLevel, VoterId


def _record(voter: str, level: int) -> VoteRecord:
    return VoteRecord(answer_id=AnswerId(1), voter_id=VoterId(voter), level=VoteLevel(level))


class TestVoteTally:
    """Tests for VoteTally."""

    def test_from_records_counts_levels(self):
        """Buckets count records per level."""
        tally = VoteTally.from_records([_record("a", 1), _record("b", 3), _record("c", 3)])

        assert tally == VoteTally(level1=1, level2=0, level3=2)
        assert tally.total == 3

    def test_score_is_weighted_sum(self):
        """score = 1*level1 + 2*level2 + 3*level3."""
        assert VoteTally(level1=4, level2=2, level3=1).score == 4 + 4 + 3

    def test_adjusted_floors_at_zero(self):
        """Decrementing an empty bucket stays at zero."""
        tally = VoteTally(level1=0, level2=1)

        assert tally.adjusted(1, -1).level1 == 0
        assert tally.adjusted(2, -1).level2 == 0
        assert tally.adjusted(3, +1).level3 == 1

    def test_negative_counts_rejected(self):
        """Counts are non-negative at the model boundary."""
        with pytest.raises(ValueError):
            VoteTally(level1=-1)


class TestVoteResult:
    """Tests for VoteResult."""

    def test_tally_and_map_from_same_listing(self):
        """The voters map mirrors the listing used for the tally."""
        result = VoteResult.from_records(AnswerId(1), [_record("a", 2), _record("b", 1)])

        assert result.tally == VoteTally(level1=1, level2=1)
        assert result.voters_map == {"a": 2, "b": 1}
