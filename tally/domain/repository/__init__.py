"""Repository interfaces for tally."""

from tally.domain.repository.answer import AnswerRepository
from tally.domain.repository.comment import CommentRepository
from tally.domain.repository.favorite import FavoriteRepository
from tally.domain.repository.vote import VoteRepository

__all__ = [
    "AnswerRepository",
    "CommentRepository",
    "FavoriteRepository",
    "VoteRepository",
]
