"""Bulk per-viewer answer data for client hydration."""

from typing import Sequence

import logfire

from tally.domain.model.user_data import UserAnswerData
from tally.domain.value import AnswerId, VoterId

from .base import Service, normalize_answer_ids
from .favorite_service import FavoriteService
from .vote_service import VoteService


class UserDataService(Service):
    """Reads a viewer's votes and favorites for a list of answers.

    One batched vote read and one batched favorite read regardless of how
    many answers are requested.
    """

    def __init__(
        self, vote_service: VoteService, favorite_service: FavoriteService
    ) -> None:
        self.vote_service = vote_service
        self.favorite_service = favorite_service

    async def get_user_answer_data(
        self, voter_id: VoterId | None, answer_ids: Sequence[AnswerId]
    ) -> UserAnswerData:
        """Return the viewer's vote levels and favorites for answer_ids.

        An absent voter or empty id list is anonymous browsing and yields
        empty data, not an error.
        """
        ids = normalize_answer_ids(answer_ids)
        if not voter_id or not ids:
            return UserAnswerData.empty()

        with logfire.span(
            "user_data_service.get_user_answer_data",
            voter_id=voter_id,
            answer_count=len(ids),
        ):
            votes = await self.vote_service.votes_for_voter(voter_id, ids)
            favorites = await self.favorite_service.favorites_for_voter(voter_id, ids)
            return UserAnswerData(votes=votes, favorites=frozenset(favorites))
