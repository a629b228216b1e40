"""Vote controller: three-level rating buttons."""

import asyncio
from typing import Any, Optional

from tally.client.runner import OptimisticActionRunner
from tally.client.state import ClientSyncState
from tally.client.transport import ActionClient
from tally.domain.model import VoteTally
from tally.domain.value import AnswerId, VoterId


def reconcile_vote(
    state: ClientSyncState, body: dict[str, Any], viewer_id: VoterId
) -> ClientSyncState:
    """Overwrite counts and selection with the server's answer.

    A deduplicated response without a recorded outcome keeps the prediction.
    """
    answer = body.get("answer")
    if not isinstance(answer, dict):
        return state

    votes = answer.get("votes") or {}
    counts = VoteTally(
        level1=int(votes.get("level1", 0)),
        level2=int(votes.get("level2", 0)),
        level3=int(votes.get("level3", 0)),
    )
    votes_by = answer.get("votes_by") or {}
    selection = votes_by.get(str(viewer_id))
    return state.model_copy(
        update={
            "counts": counts,
            "selection": int(selection) if selection in (1, 2, 3) else None,
        }
    )


class VoteController:
    """Handles clicks on an answer's level buttons."""

    def __init__(self, runner: OptimisticActionRunner, client: ActionClient) -> None:
        self.runner = runner
        self.client = client

    def click(self, answer_id: AnswerId, level: int) -> Optional[asyncio.Task]:
        """Click the button for level (1..3) on an answer.

        Clicking the current selection removes the vote. The UI state changes
        before this returns; the request settles on the returned task.
        """
        if level not in (1, 2, 3):
            raise ValueError(f"level must be 1, 2 or 3, got {level!r}")

        wire: dict[str, Optional[int]] = {}

        def predict(state: ClientSyncState) -> ClientSyncState:
            wire["previous"] = state.selection
            wire["level"] = 0 if state.selection == level else level
            return state.after_vote_click(level)

        async def send(viewer_id: VoterId) -> dict[str, Any]:
            return await self.client.cast_vote(
                answer_id, viewer_id, wire["level"], previous_level=wire["previous"]
            )

        return self.runner.perform(answer_id, predict, send, reconcile_vote)

    def state(self, answer_id: AnswerId) -> Optional[ClientSyncState]:
        """Current state for the signed-in viewer, or None when signed out."""
        viewer = self.runner.identity()
        if not viewer:
            return None
        return self.runner.store.get(answer_id, VoterId(viewer))
