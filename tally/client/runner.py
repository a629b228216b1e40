"""Optimistic action runner shared by votes and favorites.

Predict locally, send, then reconcile with the server's answer or roll back.

Every non-success (transport error, any non-2xx including 429, an explicit
`{ok: false}` body) restores the pre-click snapshot and reports the error.
An optional background re-hydration then re-reads the viewer's truth.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Optional

from tally.client.error import ClientError
from tally.client.state import ClientSyncState, MountScope, SyncStore
from tally.config import ClientSettings
from tally.domain.value import AnswerId, VoterId
from tally.util.logging import get_logger

logger = get_logger(__name__)

IdentityResolver = Callable[[], Optional[str]]
Predict = Callable[[ClientSyncState], ClientSyncState]
Send = Callable[[VoterId], Awaitable[dict[str, Any]]]
Reconcile = Callable[[ClientSyncState, dict[str, Any], VoterId], ClientSyncState]
StateApplied = Callable[[ClientSyncState], None]
ErrorHandler = Callable[[AnswerId, ClientError], None]
Rehydrate = Callable[[AnswerId, VoterId], Awaitable[None]]


class OptimisticActionRunner:
    """Runs predict → send → reconcile-or-rollback for one mount scope."""

    def __init__(
        self,
        store: SyncStore,
        identity: IdentityResolver,
        scope: Optional[MountScope] = None,
        on_login_required: Optional[Callable[[str], None]] = None,
        login_path: str = "/login",
        on_error: Optional[ErrorHandler] = None,
        rehydrate: Optional[Rehydrate] = None,
    ) -> None:
        """Initialize the runner.

        Args:
            store: Where client states live
            identity: Returns the current viewer id, or None when signed out
            scope: Mount scope guarding late state writes
            on_login_required: Called with login_path when a signed-out viewer acts
            login_path: Login entry point handed to on_login_required
            on_error: Called with (answer_id, error) after a rollback
            rehydrate: Background re-read scheduled after a rollback
        """
        self.store = store
        self.identity = identity
        self.scope = scope if scope is not None else MountScope()
        self.on_login_required = on_login_required
        self.login_path = login_path
        self.on_error = on_error
        self.rehydrate = rehydrate
        # Latest action started per key; older failures do not roll back newer predictions
        self._latest: dict[tuple[AnswerId, VoterId], int] = {}
        self._sequence = 0

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        store: SyncStore,
        identity: IdentityResolver,
        **kwargs: Any,
    ) -> "OptimisticActionRunner":
        """Build a runner that sends signed-out viewers to the configured login path."""
        return cls(store, identity, login_path=settings.login_redirect_path, **kwargs)

    def perform(
        self,
        answer_id: AnswerId,
        predict: Predict,
        send: Send,
        reconcile: Reconcile,
        on_applied: Optional[StateApplied] = None,
    ) -> Optional[asyncio.Task]:
        """Apply a prediction now and settle it in the background.

        Must be called from a running event loop. The prediction is built on
        the current local state, so rapid clicks stack deterministically.

        Returns:
            The settlement task, or None if the viewer is signed out
        """
        viewer = self.identity()
        if not viewer:
            logger.info("Action on answer %s needs login", answer_id)
            if self.on_login_required is not None:
                self.on_login_required(self.login_path)
            return None

        viewer_id = VoterId(viewer)
        key = (answer_id, viewer_id)
        snapshot = self.store.get(answer_id, viewer_id)
        predicted = predict(snapshot)
        self.store.set(answer_id, viewer_id, predicted)
        if on_applied is not None:
            on_applied(predicted)

        self._sequence += 1
        self._latest[key] = self._sequence
        return self.scope.spawn(
            self._settle(
                answer_id, viewer_id, snapshot, self._sequence, send, reconcile, on_applied
            )
        )

    async def _settle(
        self,
        answer_id: AnswerId,
        viewer_id: VoterId,
        snapshot: ClientSyncState,
        sequence: int,
        send: Send,
        reconcile: Reconcile,
        on_applied: Optional[StateApplied],
    ) -> Optional[ClientSyncState]:
        key = (answer_id, viewer_id)
        try:
            body = await send(viewer_id)
        except ClientError as e:
            if not self.scope.mounted:
                logger.debug("Dropping failed settlement for unmounted answer %s", answer_id)
                return None

            logger.warning("Action on answer %s failed: %s", answer_id, e)
            if self._latest.get(key) == sequence:
                self.store.set(answer_id, viewer_id, snapshot)
                if on_applied is not None:
                    on_applied(snapshot)
            if self.on_error is not None:
                self.on_error(answer_id, e)
            if self.rehydrate is not None:
                self.scope.spawn(self.rehydrate(answer_id, viewer_id))
            return None

        if not self.scope.mounted:
            logger.debug("Dropping settlement for unmounted answer %s", answer_id)
            return None

        # Latest-arriving response wins, even over a newer prediction
        reconciled = reconcile(self.store.get(answer_id, viewer_id), body, viewer_id)
        self.store.set(answer_id, viewer_id, reconciled)
        if on_applied is not None:
            on_applied(reconciled)
        return reconciled
