"""Favorite entities.

Favorites are existence-only bookmarks: one row per (answer, voter).
"""

from tally.domain.model.common import DomainModel
from tally.domain.value import AnswerId, VoterId


class FavoriteRecord(DomainModel):
    """A voter's bookmark on an answer."""

    answer_id: AnswerId
    voter_id: VoterId


class FavoriteState(DomainModel):
    """Resulting favorite flag for an (answer, voter) pair."""

    answer_id: AnswerId
    favorited: bool
