"""Favorite domain service."""

from typing import Sequence

import logfire

from tally.domain.error import ConflictError
from tally.domain.model.favorite import FavoriteState
from tally.domain.repository import FavoriteRepository
from tally.domain.value import AnswerId, VoterId

from .base import Service, normalize_answer_ids


class FavoriteService(Service):
    """Domain service for favorite bookmarks."""

    def __init__(self, favorite_repository: FavoriteRepository) -> None:
        """Initialize favorite service.

        Args:
            favorite_repository: Favorite repository
        """
        self.favorite_repository = favorite_repository

    async def toggle(self, answer_id: AnswerId, voter_id: VoterId) -> FavoriteState:
        """Flip the favorite flag for an (answer, voter) pair.

        This is a read-then-write. A racing duplicate insert loses to the
        unique constraint and is reported as favorited, which is the end
        state either way.

        Args:
            answer_id: Answer ID
            voter_id: Voter ID

        Returns:
            The resulting favorite state
        """
        answer_id = self.require_answer_id(answer_id)
        voter_id = self.require_voter_id(voter_id)

        with logfire.span(
            "favorite_service.toggle", answer_id=answer_id, voter_id=voter_id
        ):
            if await self.favorite_repository.exists(answer_id, voter_id):
                await self.favorite_repository.delete(answer_id, voter_id)
                logfire.info("Favorite removed", answer_id=answer_id, voter_id=voter_id)
                return FavoriteState(answer_id=answer_id, favorited=False)

            try:
                await self.favorite_repository.save(answer_id, voter_id)
            except ConflictError:
                logfire.warn(
                    "Duplicate favorite insert", answer_id=answer_id, voter_id=voter_id
                )
            else:
                logfire.info("Favorite added", answer_id=answer_id, voter_id=voter_id)
            return FavoriteState(answer_id=answer_id, favorited=True)

    async def is_favorited(self, answer_id: AnswerId, voter_id: VoterId) -> FavoriteState:
        """Read the favorite flag without changing it."""
        answer_id = self.require_answer_id(answer_id)
        voter_id = self.require_voter_id(voter_id)
        favorited = await self.favorite_repository.exists(answer_id, voter_id)
        return FavoriteState(answer_id=answer_id, favorited=favorited)

    async def favorites_for_voter(
        self, voter_id: VoterId, answer_ids: Sequence[AnswerId]
    ) -> set[AnswerId]:
        """Return the subset of answer_ids the voter has favorited."""
        ids = normalize_answer_ids(answer_ids)
        if not voter_id or not ids:
            return set()
        return set(await self.favorite_repository.list_by_voter(voter_id, ids))

    async def page_for_voter(
        self, voter_id: VoterId, offset: int, limit: int
    ) -> tuple[list[AnswerId], int]:
        """Page through a voter's favorites, newest first."""
        return await self.favorite_repository.list_page_for_voter(
            voter_id, offset=max(0, offset), limit=limit
        )
