"""Favorite controller: the bookmark toggle."""

import asyncio
from collections.abc import Callable
from typing import Any, Optional

from tally.client.error import ClientError
from tally.client.runner import OptimisticActionRunner
from tally.client.state import ClientSyncState
from tally.client.transport import ActionClient
from tally.domain.value import AnswerId, VoterId
from tally.util.logging import get_logger

logger = get_logger(__name__)

FavoritedChange = Callable[[AnswerId, bool], None]


def reconcile_favorite(
    state: ClientSyncState, body: dict[str, Any], viewer_id: VoterId
) -> ClientSyncState:
    """Take the server's favorite flag; keep the prediction if it sent none."""
    favorited = body.get("favorited")
    if not isinstance(favorited, bool):
        return state
    return state.model_copy(update={"favorited": favorited})


class FavoriteController:
    """Handles favorite toggles on answers.

    `on_favorited_change(answer_id, favorited)` fires on every applied state
    (prediction, server answer, rollback), so a favorites list can drop an
    item the moment it is unfavorited.
    """

    def __init__(
        self,
        runner: OptimisticActionRunner,
        client: ActionClient,
        on_favorited_change: Optional[FavoritedChange] = None,
    ) -> None:
        self.runner = runner
        self.client = client
        self.on_favorited_change = on_favorited_change

    def toggle(self, answer_id: AnswerId) -> Optional[asyncio.Task]:
        """Flip the favorite flag for the signed-in viewer."""

        def predict(state: ClientSyncState) -> ClientSyncState:
            return state.after_favorite_click()

        async def send(viewer_id: VoterId) -> dict[str, Any]:
            return await self.client.toggle_favorite(answer_id, viewer_id)

        def applied(state: ClientSyncState) -> None:
            if self.on_favorited_change is not None:
                self.on_favorited_change(answer_id, state.favorited)

        return self.runner.perform(
            answer_id, predict, send, reconcile_favorite, on_applied=applied
        )

    async def refresh(self, answer_id: AnswerId) -> Optional[bool]:
        """Re-read the favorite flag with the non-mutating status check.

        Returns:
            The server's flag, or None if signed out, unmounted or failed
        """
        viewer = self.runner.identity()
        if not viewer:
            return None
        viewer_id = VoterId(viewer)
        try:
            body = await self.client.favorite_status(answer_id, viewer_id)
        except ClientError as e:
            logger.warning("Favorite status for answer %s failed: %s", answer_id, e)
            return None

        if not self.runner.scope.mounted:
            return None
        store = self.runner.store
        state = reconcile_favorite(store.get(answer_id, viewer_id), body, viewer_id)
        store.set(answer_id, viewer_id, state)
        return state.favorited
