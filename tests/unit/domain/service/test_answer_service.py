"""Unit tests for AnswerService."""

import pytest

from tally.domain.error import NotFoundError, ValidationError
from tally.domain.repository import AnswerRepository
from tally.domain.service import (
    AnswerService,
    CommentService,
    FavoriteService,
    VoteService,
)
from tally.domain.value import AnswerId, TopicId, VoterId
from tests.conftest import make_answer
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetTopicPage:
    """Tests for get_topic_page."""

    @pytest.mark.asyncio
    async def test_pages_newest_first_with_cursor(self, unit_env):
        """Pages run newest first; the cursor continues where the page ended."""
        # Arrange
        answer_repo = await unit_env.get(AnswerRepository)
        for answer_id in range(1, 6):
            await answer_repo.save(make_answer(answer_id, topic_id=7, minutes=answer_id))
        await answer_repo.save(make_answer(99, topic_id=8))
        answer_service = await unit_env.get(AnswerService)

        # Act
        first, cursor = await answer_service.get_topic_page(TopicId(7), page_size=2)
        second, cursor2 = await answer_service.get_topic_page(TopicId(7), cursor=cursor, page_size=2)
        third, cursor3 = await answer_service.get_topic_page(TopicId(7), cursor=cursor2, page_size=2)

        # Assert
        assert [a.id for a in first] == [5, 4]
        assert [a.id for a in second] == [3, 2]
        assert [a.id for a in third] == [1]
        assert cursor3 is None

    @pytest.mark.asyncio
    async def test_attaches_aggregates(self, unit_env):
        """Answers carry tallies, votes_by, comment counts and the viewer's favorite flag."""
        # Arrange
        answer_repo = await unit_env.get(AnswerRepository)
        await answer_repo.save(make_answer(1, topic_id=7))
        await answer_repo.save(make_answer(2, topic_id=7, minutes=1))
        vote_service = await unit_env.get(VoteService)
        favorite_service = await unit_env.get(FavoriteService)
        comment_service = await unit_env.get(CommentService)
        await vote_service.cast_vote(AnswerId(1), VoterId("a"), 2)
        await vote_service.cast_vote(AnswerId(1), VoterId("b"), 3)
        await favorite_service.toggle(AnswerId(1), VoterId("a"))
        await comment_service.add_comment(AnswerId(1), "first", "c")
        answer_service = await unit_env.get(AnswerService)

        # Act
        answers, _ = await answer_service.get_topic_page(TopicId(7), viewer_id=VoterId("a"))

        # Assert
        by_id = {a.id: a for a in answers}
        assert by_id[1].votes.level2 == 1
        assert by_id[1].votes.level3 == 1
        assert by_id[1].votes_by == {"a": 2, "b": 3}
        assert by_id[1].favorited is True
        assert by_id[1].comment_count == 1
        assert by_id[2].votes.total == 0
        assert by_id[2].favorited is False

    @pytest.mark.asyncio
    async def test_anonymous_viewer_has_no_favorite_flag(self, unit_env):
        """Without a viewer the favorite flag stays unknown."""
        # Arrange
        answer_repo = await unit_env.get(AnswerRepository)
        await answer_repo.save(make_answer(1, topic_id=7))
        answer_service = await unit_env.get(AnswerService)

        # Act
        answers, _ = await answer_service.get_topic_page(TopicId(7))

        # Assert
        assert answers[0].favorited is None


class TestGetAnswer:
    """Tests for get_answer."""

    @pytest.mark.asyncio
    async def test_missing_answer_raises_not_found(self, unit_env):
        """An unknown id raises NotFoundError."""
        # Arrange
        answer_service = await unit_env.get(AnswerService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await answer_service.get_answer(AnswerId(404))


class TestGetFavoriteAnswers:
    """Tests for get_favorite_answers."""

    @pytest.mark.asyncio
    async def test_lists_favorites_most_recent_first(self, unit_env):
        """Favorited answers come back in reverse favoriting order, flagged."""
        # Arrange
        answer_repo = await unit_env.get(AnswerRepository)
        for answer_id in (1, 2, 3):
            await answer_repo.save(make_answer(answer_id))
        favorite_service = await unit_env.get(FavoriteService)
        await favorite_service.toggle(AnswerId(2), VoterId("v1"))
        await favorite_service.toggle(AnswerId(1), VoterId("v1"))
        answer_service = await unit_env.get(AnswerService)

        # Act
        answers, total = await answer_service.get_favorite_answers(VoterId("v1"))

        # Assert
        assert [a.id for a in answers] == [1, 2]
        assert all(a.favorited for a in answers)
        assert total == 2

    @pytest.mark.asyncio
    async def test_requires_voter(self, unit_env):
        """An empty voter id is a validation error."""
        # Arrange
        answer_service = await unit_env.get(AnswerService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await answer_service.get_favorite_answers(VoterId(""))
