"""End-to-end tests for the optimistic client engine against the real app."""

import httpx
import pytest_asyncio
import pytest

from tally.client import (
    ActionClient,
    FavoriteController,
    Hydrator,
    OptimisticActionRunner,
    SyncStore,
    VoteController,
)
from tally.config import ClientSettings, ObservabilitySettings, Settings
from tally.domain.model import VoteTally
from tally.domain.value import AnswerId, VoterId
from tally.interface.api.app import create_app
from tally.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_answer
from tests.di import build_test_container

VIEWER = "v1"


@pytest_asyncio.fixture
async def app():
    """App over in-memory repositories with answers 1 and 5 seeded."""
    application = create_app(
        settings=Settings(observability=ObservabilitySettings(instrument=False)),
        container=build_test_container(),
    )
    container = application.state.dishka_container
    database = await container.get(InMemoryDatabase)
    database.answers[AnswerId(1)] = make_answer(1)
    database.answers[AnswerId(5)] = make_answer(5)

    yield application

    await container.close()


@pytest_asyncio.fixture
async def action_client(app):
    """ActionClient talking to the app in-process."""
    client = ActionClient.from_settings(
        ClientSettings(base_url="http://testserver"),
        transport=httpx.ASGITransport(app=app),
    )
    yield client
    await client.aclose()


class TestClientSync:
    """Client engine round trips through the HTTP surface."""

    @pytest.mark.asyncio
    async def test_favorite_survives_reload(self, action_client):
        """A favorite made on one page shows up when a fresh page hydrates."""
        # Arrange
        store = SyncStore()
        runner = OptimisticActionRunner(store, identity=lambda: VIEWER)
        favorites = FavoriteController(runner, action_client)

        # Act
        await favorites.toggle(AnswerId(5))

        # Assert
        assert store.get(AnswerId(5), VoterId(VIEWER)).favorited is True

        # Act
        reloaded = SyncStore()
        data = await Hydrator(reloaded, action_client).hydrate(VIEWER, [1, 5])

        # Assert
        assert AnswerId(5) in data.favorites
        assert reloaded.get(AnswerId(5), VoterId(VIEWER)).favorited is True
        assert reloaded.get(AnswerId(1), VoterId(VIEWER)).favorited is False

    @pytest.mark.asyncio
    async def test_vote_click_and_toggle_off(self, action_client):
        """Clicking a level and clicking it again ends with no vote."""
        # Arrange
        store = SyncStore()
        runner = OptimisticActionRunner(store, identity=lambda: VIEWER)
        votes = VoteController(runner, action_client)

        # Act
        await votes.click(AnswerId(1), 2)

        # Assert
        state = votes.state(AnswerId(1))
        assert state.selection == 2
        assert state.counts == VoteTally(level2=1)

        # Act
        await votes.click(AnswerId(1), 2)

        # Assert
        state = votes.state(AnswerId(1))
        assert state.selection is None
        assert state.counts == VoteTally()

    @pytest.mark.asyncio
    async def test_switching_levels_counts_one_vote(self, action_client):
        """Switching from level 1 to 3 leaves a single level-3 vote."""
        # Arrange
        store = SyncStore()
        runner = OptimisticActionRunner(store, identity=lambda: VIEWER)
        votes = VoteController(runner, action_client)

        # Act
        await votes.click(AnswerId(1), 1)
        await votes.click(AnswerId(1), 3)
        data = await action_client.fetch_user_data(VIEWER, [1])

        # Assert
        assert votes.state(AnswerId(1)).counts == VoteTally(level3=1)
        assert data.votes == {AnswerId(1): 3}

    @pytest.mark.asyncio
    async def test_missing_answer_rolls_back(self, action_client):
        """A 404 from the server restores the pre-click state."""
        # Arrange
        store = SyncStore()
        errors = []
        runner = OptimisticActionRunner(
            store,
            identity=lambda: VIEWER,
            on_error=lambda answer_id, error: errors.append(error.status_code),
        )
        votes = VoteController(runner, action_client)

        # Act
        await votes.click(AnswerId(404), 3)

        # Assert
        assert votes.state(AnswerId(404)).selection is None
        assert errors == [404]
