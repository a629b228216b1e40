"""Client-side optimistic state.

One ClientSyncState per (answer, viewer) lives in a SyncStore. States are
immutable; every change replaces the stored value and notifies listeners.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Optional

from tally.application.usecase.answer.payload import AnswerPayload
from tally.domain.model import UserAnswerData, VoteTally
from tally.domain.model.common import DomainModel
from tally.domain.value import AnswerId, VoterId


class ClientSyncState(DomainModel):
    """Optimistic projection of one answer's vote and favorite state for a viewer."""

    selection: Optional[int] = None
    counts: VoteTally = VoteTally()
    favorited: bool = False

    def after_vote_click(self, level: int) -> "ClientSyncState":
        """Predict the state after clicking level.

        Clicking the current selection toggles it off. Otherwise the previous
        bucket loses one (floored at zero) and the clicked bucket gains one.
        """
        previous = self.selection
        toggling_off = previous == level
        counts = self.counts
        if previous is not None:
            counts = counts.adjusted(previous, -1)
        if not toggling_off:
            counts = counts.adjusted(level, +1)
        return self.model_copy(
            update={"selection": None if toggling_off else level, "counts": counts}
        )

    def after_favorite_click(self) -> "ClientSyncState":
        """Predict the state after clicking the favorite toggle."""
        return self.model_copy(update={"favorited": not self.favorited})


StateListener = Callable[[AnswerId, VoterId, ClientSyncState], None]


class SyncStore:
    """In-memory map of (answer, viewer) to ClientSyncState."""

    def __init__(self) -> None:
        self._states: dict[tuple[AnswerId, VoterId], ClientSyncState] = {}
        self._listeners: list[StateListener] = []

    def get(self, answer_id: AnswerId, viewer_id: VoterId) -> ClientSyncState:
        return self._states.get((answer_id, viewer_id), ClientSyncState())

    def set(
        self, answer_id: AnswerId, viewer_id: VoterId, state: ClientSyncState
    ) -> None:
        """Replace the state and notify listeners if it changed."""
        key = (answer_id, viewer_id)
        if self._states.get(key) == state:
            return
        self._states[key] = state
        for listener in list(self._listeners):
            listener(answer_id, viewer_id, state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def seed_from_answers(
        self, answers: Iterable[AnswerPayload], viewer_id: Optional[VoterId]
    ) -> None:
        """Seed states from the hints embedded in rendered answers.

        Hints are stale by nature, so an answer that already has local state
        is left alone.
        """
        if not viewer_id:
            return
        for answer in answers:
            answer_id = AnswerId(answer.id)
            if (answer_id, viewer_id) in self._states:
                continue
            votes = answer.votes
            self.set(
                answer_id,
                viewer_id,
                ClientSyncState(
                    selection=answer.votes_by.get(viewer_id),
                    counts=VoteTally(
                        level1=votes.level1, level2=votes.level2, level3=votes.level3
                    ),
                    favorited=bool(answer.favorited),
                ),
            )

    def apply_user_data(
        self,
        viewer_id: VoterId,
        answer_ids: Iterable[AnswerId],
        data: UserAnswerData,
    ) -> None:
        """Overwrite selection and favorite flags from a bulk read; counts are kept."""
        for answer_id in answer_ids:
            current = self.get(answer_id, viewer_id)
            self.set(
                answer_id,
                viewer_id,
                current.model_copy(
                    update={
                        "selection": data.votes.get(answer_id),
                        "favorited": answer_id in data.favorites,
                    }
                ),
            )


class MountScope:
    """Ownership scope for in-flight settlements.

    After `unmount()` pending settlements skip their state writes. The
    network calls themselves are not cancelled.
    """

    def __init__(self) -> None:
        self._mounted = True
        self._tasks: set[asyncio.Task] = set()

    @property
    def mounted(self) -> bool:
        return self._mounted

    def unmount(self) -> None:
        self._mounted = False

    def spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        """Run coro as a task owned by this scope."""
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every task spawned so far to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
