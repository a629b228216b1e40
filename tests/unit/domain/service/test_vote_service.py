"""Unit tests for VoteService."""

import pytest

from tally.domain.error import NotFoundError, ValidationError
from tally.domain.model import VoteTally
from tally.domain.repository import AnswerRepository, VoteRepository
from tally.domain.service import VoteService
from tally.domain.value import AnswerId, VoterId
from tests.conftest import make_answer
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _seed(env, *answer_ids: int) -> None:
    answer_repo = await env.get(AnswerRepository)
    for answer_id in answer_ids:
        await answer_repo.save(make_answer(answer_id))


class TestCastVote:
    """Tests for cast_vote."""

    @pytest.mark.asyncio
    async def test_cast_then_toggle_off(self, unit_env):
        """Casting level 2 then level 0 should add then remove the row."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)

        # Act
        first = await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 2)
        second = await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 0)

        # Assert
        assert first.tally == VoteTally(level1=0, level2=1, level3=0)
        assert first.voters_map == {"v1": 2}
        assert second.tally == VoteTally()
        assert second.voters_map == {}

    @pytest.mark.asyncio
    async def test_changing_level_replaces_row(self, unit_env):
        """Casting 1 then 3 should leave one row at level 3."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        # Act
        await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 1)
        result = await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 3)

        # Assert
        rows = await vote_repo.list_by_answer(AnswerId(1))
        assert [(r.voter_id, int(r.level)) for r in rows] == [("v1", 3)]
        assert result.tally == VoteTally(level1=0, level2=0, level3=1)

    @pytest.mark.asyncio
    async def test_at_most_one_row_per_voter(self, unit_env):
        """Any sequence of casts leaves at most one row holding the last non-zero level."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        # Act
        for level in [1, 2, 2, 0, 3, 1, 1, 2]:
            await vote_service.cast_vote(AnswerId(1), VoterId("v1"), level)

        # Assert
        rows = [r for r in await vote_repo.list_by_answer(AnswerId(1)) if r.voter_id == "v1"]
        assert len(rows) == 1
        assert int(rows[0].level) == 2

    @pytest.mark.asyncio
    async def test_tally_matches_rows(self, unit_env):
        """Each bucket should equal the number of voters at that level."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        casts = {"a": 1, "b": 3, "c": 3, "d": 2, "e": 1, "f": 3}

        # Act
        result = None
        for voter, level in casts.items():
            result = await vote_service.cast_vote(AnswerId(1), VoterId(voter), level)

        # Assert
        rows = await vote_repo.list_by_answer(AnswerId(1))
        assert result.tally.total == len(rows) == 6
        assert result.tally.level1 == 2
        assert result.tally.level2 == 1
        assert result.tally.level3 == 3
        assert result.voters_map == casts

    @pytest.mark.asyncio
    async def test_score_independent_of_cast_order(self, unit_env):
        """The weighted score should depend only on the final vote set."""
        # Arrange
        await _seed(unit_env, 1, 2)
        vote_service = await unit_env.get(VoteService)
        sequence = [("a", 3), ("b", 1), ("a", 2), ("c", 3), ("b", 0), ("d", 1)]

        # Act
        for voter, level in sequence:
            forward = await vote_service.cast_vote(AnswerId(1), VoterId(voter), level)
        for voter, level in [("c", 3), ("d", 1), ("b", 1), ("b", 0), ("a", 2)]:
            backward = await vote_service.cast_vote(AnswerId(2), VoterId(voter), level)

        # Assert
        assert forward.tally == backward.tally
        assert forward.tally.score == backward.tally.score == 1 * 1 + 2 * 1 + 3 * 1

    @pytest.mark.asyncio
    async def test_different_voters_both_counted(self, unit_env):
        """Votes from different voters should land as separate rows."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)

        # Act
        await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 2)
        result = await vote_service.cast_vote(AnswerId(1), VoterId("v2"), 2)

        # Assert
        assert result.tally.level2 == 2
        assert result.voters_map == {"v1": 2, "v2": 2}

    @pytest.mark.asyncio
    async def test_removing_missing_vote_is_not_an_error(self, unit_env):
        """Level 0 without a stored vote should succeed with an empty tally."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)

        # Act
        result = await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 0)

        # Assert
        assert result.tally.total == 0

    @pytest.mark.asyncio
    async def test_missing_answer_raises_not_found(self, unit_env):
        """Voting on an unknown answer should raise NotFoundError."""
        # Arrange
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(AnswerId(999), VoterId("v1"), 1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "answer_id, voter_id, level",
        [
            (1, "v1", 4),
            (1, "v1", -1),
            (1, "v1", True),
            (0, "v1", 1),
            (-3, "v1", 1),
            (1, "", 1),
            (1, "   ", 1),
        ],
    )
    async def test_invalid_input_raises_validation_error(
        self, unit_env, answer_id, voter_id, level
    ):
        """Malformed input should be rejected before any read or write."""
        # Arrange
        await _seed(unit_env, 1)
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await vote_service.cast_vote(answer_id, voter_id, level)


class TestBatchReads:
    """Tests for the batched read helpers."""

    @pytest.mark.asyncio
    async def test_tallies_for_answers_include_unvoted(self, unit_env):
        """Answers without votes should map to a zero tally."""
        # Arrange
        await _seed(unit_env, 1, 2)
        vote_service = await unit_env.get(VoteService)
        await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 3)

        # Act
        tallies = await vote_service.tallies_for_answers([AnswerId(2), AnswerId(1), AnswerId(1)])

        # Assert
        assert tallies == {1: VoteTally(level3=1), 2: VoteTally()}

    @pytest.mark.asyncio
    async def test_batch_matches_single_reads(self, unit_env):
        """Bulk reads should return what a loop of single reads returns."""
        # Arrange
        await _seed(unit_env, 1, 2, 3)
        vote_service = await unit_env.get(VoteService)
        for answer_id, voter, level in [(1, "a", 1), (1, "b", 2), (2, "a", 3), (3, "c", 2)]:
            await vote_service.cast_vote(AnswerId(answer_id), VoterId(voter), level)

        # Act
        votes_by = await vote_service.votes_by_for_answers([1, 2, 3])
        singles = {
            aid: (await vote_service.get_vote_result(AnswerId(aid))).voters_map
            for aid in (1, 2, 3)
        }

        # Assert
        assert votes_by == singles

    @pytest.mark.asyncio
    async def test_votes_for_voter(self, unit_env):
        """A voter's map should only include answers they rated."""
        # Arrange
        await _seed(unit_env, 1, 2, 3)
        vote_service = await unit_env.get(VoteService)
        await vote_service.cast_vote(AnswerId(1), VoterId("v1"), 2)
        await vote_service.cast_vote(AnswerId(3), VoterId("v1"), 1)
        await vote_service.cast_vote(AnswerId(2), VoterId("other"), 3)

        # Act
        votes = await vote_service.votes_for_voter(VoterId("v1"), [1, 2, 3])

        # Assert
        assert votes == {1: 2, 3: 1}
