"""Seeding client state from embedded hints and the bulk user data read."""

from collections.abc import Iterable, Sequence
from typing import Optional

from tally.application.usecase.answer.payload import AnswerPayload
from tally.client.error import ClientError
from tally.client.state import MountScope, SyncStore
from tally.client.transport import ActionClient
from tally.domain.model import UserAnswerData
from tally.domain.value import AnswerId, VoterId
from tally.util.logging import get_logger

logger = get_logger(__name__)


class Hydrator:
    """Fills a SyncStore for a rendered list of answers.

    Embedded hints give an immediate first render; one bulk read then
    replaces the viewer's selections and favorite flags with stored truth.
    """

    def __init__(
        self, store: SyncStore, client: ActionClient, scope: Optional[MountScope] = None
    ) -> None:
        self.store = store
        self.client = client
        self.scope = scope if scope is not None else MountScope()

    def seed(self, answers: Iterable[AnswerPayload], viewer_id: Optional[str]) -> None:
        """Seed from answer hints (no network)."""
        self.store.seed_from_answers(answers, VoterId(viewer_id) if viewer_id else None)

    async def hydrate(
        self, viewer_id: Optional[str], answer_ids: Sequence[int]
    ) -> UserAnswerData:
        """Fetch the viewer's data for answer_ids and apply it.

        Anonymous viewers and empty lists yield empty data without a request.
        """
        ids = sorted({AnswerId(int(i)) for i in answer_ids})
        data = await self.client.fetch_user_data(viewer_id, ids)
        if viewer_id and ids and self.scope.mounted:
            self.store.apply_user_data(VoterId(viewer_id), ids, data)
        return data

    async def rehydrate_answer(self, answer_id: AnswerId, viewer_id: VoterId) -> None:
        """Background re-read after a rolled-back action. Failures are only logged."""
        try:
            await self.hydrate(viewer_id, [answer_id])
        except ClientError as e:
            logger.warning("Re-hydration of answer %s failed: %s", answer_id, e)
