"""Domain models for tally."""

from tally.domain.model.answer import Answer
from tally.domain.model.comment import Comment
from tally.domain.model.favorite import FavoriteRecord, FavoriteState
from tally.domain.model.user_data import UserAnswerData
from tally.domain.model.vote import VoteRecord, VoteResult, VoteTally

__all__ = [
    "Answer",
    "Comment",
    "FavoriteRecord",
    "FavoriteState",
    "UserAnswerData",
    "VoteRecord",
    "VoteResult",
    "VoteTally",
]
