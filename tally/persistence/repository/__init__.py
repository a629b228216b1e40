"""PostgreSQL repository implementations."""

from tally.persistence.repository.answer import PostgresAnswerRepository
from tally.persistence.repository.comment import PostgresCommentRepository
from tally.persistence.repository.favorite import PostgresFavoriteRepository
from tally.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresAnswerRepository",
    "PostgresCommentRepository",
    "PostgresFavoriteRepository",
    "PostgresVoteRepository",
]
