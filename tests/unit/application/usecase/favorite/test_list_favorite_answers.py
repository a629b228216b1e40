"""Unit tests for ListFavoriteAnswersUseCase."""

import pytest

from tally.application.usecase.favorite import (
    ListFavoriteAnswersRequest,
    ListFavoriteAnswersUseCase,
    ToggleFavoriteRequest,
    ToggleFavoriteUseCase,
)
from tally.domain.error import ValidationError
from tally.domain.repository import AnswerRepository
from tests.conftest import make_answer
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed_favorites(env, voter_id: str, answer_ids: list[int]) -> None:
    answer_repo = await env.get(AnswerRepository)
    toggle = await env.get(ToggleFavoriteUseCase)
    for answer_id in answer_ids:
        await answer_repo.save(make_answer(answer_id, minutes=answer_id))
        await toggle.execute(ToggleFavoriteRequest(answer_id=answer_id, voter_id=voter_id))


class TestListFavoriteAnswersUseCase:
    """Tests for ListFavoriteAnswersUseCase."""

    @pytest.mark.asyncio
    async def test_most_recently_favorited_first(self, unit_env):
        """Answers come back in reverse order of favoriting."""
        # Arrange
        await _seed_favorites(unit_env, "v1", [3, 1, 2])
        use_case = await unit_env.get(ListFavoriteAnswersUseCase)

        # Act
        response = await use_case.execute(ListFavoriteAnswersRequest(voter_id="v1"))

        # Assert
        assert [a.id for a in response.answers] == [2, 1, 3]
        assert all(a.favorited is True for a in response.answers)
        assert response.total == 3
        assert response.has_more is False

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        """Pages are sliced by page and page_size with a has_more flag."""
        # Arrange
        await _seed_favorites(unit_env, "v1", [1, 2, 3, 4, 5])
        use_case = await unit_env.get(ListFavoriteAnswersUseCase)

        # Act
        first = await use_case.execute(
            ListFavoriteAnswersRequest(voter_id="v1", page=1, page_size=2)
        )
        last = await use_case.execute(
            ListFavoriteAnswersRequest(voter_id="v1", page=3, page_size=2)
        )

        # Assert
        assert [a.id for a in first.answers] == [5, 4]
        assert first.has_more is True
        assert [a.id for a in last.answers] == [1]
        assert last.has_more is False
        assert last.total == 5

    @pytest.mark.asyncio
    async def test_other_voters_favorites_excluded(self, unit_env):
        """Only the requesting voter's favorites are listed."""
        # Arrange
        await _seed_favorites(unit_env, "v1", [1])
        await _seed_favorites(unit_env, "v2", [2])
        use_case = await unit_env.get(ListFavoriteAnswersUseCase)

        # Act
        response = await use_case.execute(ListFavoriteAnswersRequest(voter_id="v2"))

        # Assert
        assert [a.id for a in response.answers] == [2]

    @pytest.mark.asyncio
    async def test_blank_voter_rejected(self, unit_env):
        """A blank voter id is a validation error."""
        # Arrange
        use_case = await unit_env.get(ListFavoriteAnswersUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(ListFavoriteAnswersRequest(voter_id=""))
