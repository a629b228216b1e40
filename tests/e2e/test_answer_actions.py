"""End-to-end tests for the answer action, listing and user data endpoints."""

import pytest
from fastapi.testclient import TestClient

from tally.config import ObservabilitySettings, Settings
from tally.domain.value import AnswerId, VoterId
from tally.interface.api.app import create_app
from tally.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_answer
from tests.di import build_test_container

ACTIONS = "/answers/actions"


@pytest.fixture
def client():
    """Create test client over an app backed by in-memory repositories."""
    app = create_app(
        settings=Settings(observability=ObservabilitySettings(instrument=False)),
        container=build_test_container(),
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client) -> InMemoryDatabase:
    """The in-memory tables behind the app, seeded with a few answers."""
    container = client.app.state.dishka_container
    database = client.portal.call(container.get, InMemoryDatabase)
    for answer_id in range(1, 6):
        database.answers[AnswerId(answer_id)] = make_answer(answer_id, minutes=answer_id)
    database.answers[AnswerId(9)] = make_answer(9, topic_id=2)
    return database


class TestVoteActions:
    """End-to-end tests for voting."""

    def test_cast_then_toggle_off(self, client, db):
        """Level 2 then level 0 leaves no vote behind."""
        # Act
        first = client.post(ACTIONS, data={"answerId": "1", "userId": "v1", "level": "2"})

        # Assert
        assert first.status_code == 200
        answer = first.json()["answer"]
        assert answer["votes"] == {"level1": 0, "level2": 1, "level3": 0, "score": 2}
        assert answer["votes_by"] == {"v1": 2}

        # Act
        second = client.post(
            ACTIONS,
            data={"answerId": "1", "userId": "v1", "level": "0", "previousLevel": "2"},
        )

        # Assert
        assert second.status_code == 200
        answer = second.json()["answer"]
        assert answer["votes"] == {"level1": 0, "level2": 0, "level3": 0, "score": 0}
        assert answer["votes_by"] == {}
        assert db.votes == {}

    def test_switching_level_replaces_row(self, client, db):
        """Casting 1 then 3 keeps exactly one row at level 3."""
        # Act
        client.post(ACTIONS, data={"answerId": "1", "userId": "v1", "level": "1"})
        response = client.post(
            ACTIONS,
            data={"answerId": "1", "userId": "v1", "level": "3", "previousLevel": "1"},
        )

        # Assert
        assert response.json()["answer"]["votes"] == {
            "level1": 0,
            "level2": 0,
            "level3": 1,
            "score": 3,
        }
        assert db.votes == {(AnswerId(1), VoterId("v1")): 3}

    def test_topic_scoped_endpoint(self, client, db):
        """The topic-mounted endpoint behaves the same."""
        # Act
        response = client.post(
            "/topics/1/actions", data={"answerId": "2", "userId": "v1", "level": "3"}
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["answer"]["votes_by"] == {"v1": 3}

    def test_missing_answer(self, client, db):
        """Voting on an unknown answer is a 404."""
        # Act
        response = client.post(ACTIONS, data={"answerId": "404", "userId": "v1", "level": "1"})

        # Assert
        assert response.status_code == 404
        assert response.json()["ok"] is False

    @pytest.mark.parametrize(
        "data",
        [
            {"answerId": "1", "level": "2"},
            {"answerId": "1", "userId": "v1", "level": "5"},
            {"answerId": "one", "userId": "v1", "level": "1"},
        ],
    )
    def test_invalid_vote(self, client, db, data):
        """Malformed votes are rejected with 400."""
        # Act
        response = client.post(ACTIONS, data=data)

        # Assert
        assert response.status_code == 400
        assert response.json()["ok"] is False


class TestFavoriteActions:
    """End-to-end tests for favorites."""

    def test_toggle_and_status(self, client, db):
        """Toggle flips the flag; status reads it."""
        # Act
        toggled = client.post(ACTIONS, data={"op": "toggle", "answerId": "5", "profileId": "v1"})
        status = client.post(ACTIONS, data={"op": "status", "answerId": "5", "profileId": "v1"})

        # Assert
        assert toggled.status_code == 200
        assert toggled.json() == {"favorited": True}
        assert status.json() == {"favorited": True}

    def test_duplicate_toggle_is_deduped(self, client, db):
        """An identical toggle inside the window is answered without a write."""
        # Act
        first = client.post(ACTIONS, data={"op": "toggle", "answerId": "5", "profileId": "v1"})
        second = client.post(ACTIONS, data={"op": "toggle", "answerId": "5", "profileId": "v1"})

        # Assert
        assert first.json() == {"favorited": True}
        assert second.status_code == 200
        assert second.json() == {"favorited": True, "ok": True, "deduped": True}
        assert list(db.favorites) == [(AnswerId(5), VoterId("v1"))]

    def test_missing_profile(self, client, db):
        """op=toggle without profileId is a 400."""
        # Act
        response = client.post(ACTIONS, data={"op": "toggle", "answerId": "5"})

        # Assert
        assert response.status_code == 400


class TestAdmission:
    """End-to-end tests for rate limiting and ignored requests."""

    def test_sixth_request_is_rate_limited(self, client, db):
        """Five requests pass, the sixth in the same second gets 429."""
        # Act
        statuses = [
            client.post(
                ACTIONS, data={"op": "status", "answerId": str(i), "profileId": "v1"}
            ).status_code
            for i in range(1, 6)
        ]
        rejected = client.post(ACTIONS, data={"op": "status", "answerId": "9", "profileId": "v1"})

        # Assert
        assert statuses == [200] * 5
        assert rejected.status_code == 429
        assert rejected.json() == {
            "ok": False,
            "error": "Too Many Requests",
            "rate_key": "p:v1",
        }

    def test_invalid_requests_still_consume_tokens(self, client, db):
        """Anonymous callers are limited by forwarded address even when invalid."""
        # Arrange
        headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}

        # Act
        statuses = [
            client.post(
                ACTIONS, data={"answerId": "1", "text": "hi"}, headers=headers
            ).status_code
            for _ in range(6)
        ]

        # Assert
        assert statuses == [400] * 5 + [429]

    def test_other_voter_has_own_bucket(self, client, db):
        """One voter's exhaustion does not affect another."""
        # Arrange
        for i in range(1, 7):
            client.post(ACTIONS, data={"op": "status", "answerId": str(i), "profileId": "v1"})

        # Act
        response = client.post(ACTIONS, data={"op": "status", "answerId": "1", "profileId": "v2"})

        # Assert
        assert response.status_code == 200

    @pytest.mark.parametrize("data", [{}, {"foo": "bar"}, {"answerId": "1"}])
    def test_unrecognized_form_is_ignored(self, client, db, data):
        """Forms without an operation are acknowledged and ignored."""
        # Act
        response = client.post(ACTIONS, data=data)

        # Assert
        assert response.status_code == 200
        assert response.json() == {"ok": True, "ignored": True}


class TestComments:
    """End-to-end tests for comments."""

    def test_add_comment_counts_on_listing(self, client, db):
        """A comment is stored and shows up in the answer's comment count."""
        # Act
        response = client.post(
            ACTIONS, data={"answerId": "3", "text": "Nice one", "profileId": "p1"}
        )
        listing = client.get("/topics/1/answers")

        # Assert
        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert response.json()["comment"]["text"] == "Nice one"
        counts = {a["id"]: a["comment_count"] for a in listing.json()["answers"]}
        assert counts[3] == 1
        assert counts[1] == 0


class TestListings:
    """End-to-end tests for answer listings and the bulk user data read."""

    def test_topic_answers_paged_with_viewer_hints(self, client, db):
        """Topic pages are newest first and carry the viewer's hints."""
        # Arrange
        client.post(ACTIONS, data={"answerId": "4", "userId": "v1", "level": "3"})
        client.post(ACTIONS, data={"op": "toggle", "answerId": "5", "profileId": "v1"})

        # Act
        first = client.get("/topics/1/answers", params={"pageSize": 2, "profileId": "v1"})

        # Assert
        body = first.json()
        assert [a["id"] for a in body["answers"]] == [5, 4]
        assert body["answers"][0]["favorited"] is True
        assert body["answers"][1]["votes_by"] == {"v1": 3}
        assert body["next_cursor"] is not None

        # Act
        rest = client.get(
            "/topics/1/answers", params={"pageSize": 5, "cursor": body["next_cursor"]}
        )

        # Assert
        assert [a["id"] for a in rest.json()["answers"]] == [3, 2, 1]
        assert rest.json()["next_cursor"] is None

    def test_favorite_answers_listing(self, client, db):
        """The favorites page lists favorited answers, newest favorite first."""
        # Arrange
        client.post(ACTIONS, data={"op": "toggle", "answerId": "2", "profileId": "v1"})
        client.post(ACTIONS, data={"op": "toggle", "answerId": "9", "profileId": "v1"})

        # Act
        response = client.get("/answers/favorites", params={"profileId": "v1"})

        # Assert
        body = response.json()
        assert response.status_code == 200
        assert [a["id"] for a in body["answers"]] == [9, 2]
        assert body["total"] == 2
        assert body["has_more"] is False

    def test_favorite_answers_requires_profile(self, client, db):
        """A blank profile is a 400."""
        # Act
        response = client.get("/answers/favorites", params={"profileId": ""})

        # Assert
        assert response.status_code == 400

    def test_user_data(self, client, db):
        """Bulk read returns the viewer's levels and favorites."""
        # Arrange
        client.post(ACTIONS, data={"answerId": "1", "userId": "v1", "level": "2"})
        client.post(ACTIONS, data={"answerId": "2", "userId": "v2", "level": "1"})
        client.post(ACTIONS, data={"op": "toggle", "answerId": "5", "profileId": "v1"})

        # Act
        response = client.get(
            "/api/user-data",
            params=[("profileId", "v1"), ("answerIds", "1,2"), ("answerIds", "5")],
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"votes": {"1": 2}, "favorites": [5]}

    def test_user_data_anonymous(self, client, db):
        """No profile yields empty data."""
        # Act
        response = client.get("/api/user-data", params={"answerIds": "1,2"})

        # Assert
        assert response.json() == {"votes": {}, "favorites": []}


class TestHealth:
    """End-to-end tests for the health check."""

    def test_health(self, client):
        """Health reports the service as up."""
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
