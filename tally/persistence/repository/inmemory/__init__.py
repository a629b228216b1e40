"""In-memory repository implementations for testing."""

from .answer import InMemoryAnswerRepository
from .comment import InMemoryCommentRepository
from .database import InMemoryDatabase
from .favorite import InMemoryFavoriteRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryAnswerRepository",
    "InMemoryCommentRepository",
    "InMemoryDatabase",
    "InMemoryFavoriteRepository",
    "InMemoryVoteRepository",
]
