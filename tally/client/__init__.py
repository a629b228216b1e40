"""Client-side optimistic synchronisation engine."""

from tally.client.error import ActionFailedError, ActionTransportError, ClientError
from tally.client.favorite import FavoriteController, reconcile_favorite
from tally.client.hydration import Hydrator
from tally.client.runner import OptimisticActionRunner
from tally.client.state import ClientSyncState, MountScope, SyncStore
from tally.client.transport import ActionClient
from tally.client.vote import VoteController, reconcile_vote

__all__ = [
    "ActionClient",
    "ActionFailedError",
    "ActionTransportError",
    "ClientError",
    "ClientSyncState",
    "FavoriteController",
    "Hydrator",
    "MountScope",
    "OptimisticActionRunner",
    "SyncStore",
    "VoteController",
    "reconcile_favorite",
    "reconcile_vote",
]
