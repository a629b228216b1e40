"""HTTP transport for the action endpoint and the bulk user data read."""

from typing import Any, Mapping, Optional, Sequence

import httpx

from tally.client.error import ActionFailedError, ActionTransportError
from tally.config import ClientSettings
from tally.domain.model import UserAnswerData
from tally.domain.value import AnswerId
from tally.util.logging import get_logger
from tally.util.observability import instrument_httpx

logger = get_logger(__name__)


class ActionClient:
    """Talks to the answer action endpoint over an httpx.AsyncClient.

    Every mutation is a form-encoded POST; responses are JSON objects.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        action_path: str = "/answers/actions",
        user_data_path: str = "/api/user-data",
    ) -> None:
        self.http = http
        self.action_path = action_path
        self.user_data_path = user_data_path

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ActionClient":
        """Build a client with its own connection pool.

        Args:
            settings: Client settings (base URL, paths, timeout)
            transport: Optional transport override (tests, ASGI apps)
        """
        http = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            transport=transport,
        )
        if settings.instrument:
            instrument_httpx(http)
        return cls(
            http,
            action_path=settings.action_path,
            user_data_path=settings.user_data_path,
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def post_action(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """POST form fields to the action endpoint.

        Fields whose value is None are not sent.

        Raises:
            ActionTransportError: If no response was received
            ActionFailedError: On a non-2xx status or an `{ok: false}` body
        """
        data = {key: str(value) for key, value in fields.items() if value is not None}
        try:
            response = await self.http.post(self.action_path, data=data)
        except httpx.TransportError as e:
            logger.warning("Action request failed: %s", e)
            raise ActionTransportError(str(e)) from e

        payload = _json_or_text(response)
        failed = not response.is_success or not isinstance(payload, dict)
        if failed or payload.get("ok") is False:
            logger.warning(
                "Action rejected: status=%s payload=%s", response.status_code, payload
            )
            raise ActionFailedError(response.status_code, payload)
        return payload

    async def cast_vote(
        self,
        answer_id: int,
        voter_id: str,
        level: int,
        previous_level: Optional[int] = None,
    ) -> dict[str, Any]:
        """Cast a vote; level 0 removes it."""
        return await self.post_action(
            {
                "answerId": answer_id,
                "userId": voter_id,
                "level": level,
                "previousLevel": previous_level,
            }
        )

    async def toggle_favorite(self, answer_id: int, voter_id: str) -> dict[str, Any]:
        """Flip the favorite flag."""
        return await self.post_action(
            {"op": "toggle", "answerId": answer_id, "profileId": voter_id}
        )

    async def favorite_status(self, answer_id: int, voter_id: str) -> dict[str, Any]:
        """Read the favorite flag without writing."""
        return await self.post_action(
            {"op": "status", "answerId": answer_id, "profileId": voter_id}
        )

    async def add_comment(
        self, answer_id: int, profile_id: str, text: str
    ) -> dict[str, Any]:
        """Attach a comment to an answer."""
        return await self.post_action(
            {"answerId": answer_id, "profileId": profile_id, "text": text}
        )

    async def fetch_user_data(
        self, voter_id: Optional[str], answer_ids: Sequence[int]
    ) -> UserAnswerData:
        """Read the voter's levels and favorites for answer_ids in one request.

        Anonymous viewers and empty lists short-circuit without a request.
        """
        ids = sorted({int(i) for i in answer_ids if int(i) > 0})
        if not voter_id or not ids:
            return UserAnswerData.empty()

        params = [("profileId", voter_id)] + [("answerIds", str(i)) for i in ids]
        try:
            response = await self.http.get(self.user_data_path, params=params)
        except httpx.TransportError as e:
            raise ActionTransportError(str(e)) from e

        payload = _json_or_text(response)
        if not response.is_success or not isinstance(payload, dict):
            raise ActionFailedError(response.status_code, payload)

        votes = {
            AnswerId(int(key)): int(level)
            for key, level in (payload.get("votes") or {}).items()
            if str(key).isdigit() and int(level) in (1, 2, 3)
        }
        favorites = frozenset(AnswerId(int(i)) for i in payload.get("favorites") or [])
        return UserAnswerData(votes=votes, favorites=favorites)


def _json_or_text(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
