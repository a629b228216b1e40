"""Shared in-memory tables for the in-memory repositories."""

from dataclasses import dataclass, field
from itertools import count
from typing import Iterator

from tally.domain.model import Answer, Comment
from tally.domain.value import AnswerId, VoteLevel, VoterId


@dataclass
class InMemoryDatabase:
    """Tables shared by in-memory repositories.

    Repositories are cheap views over one of these, so several
    request-scoped repositories can see each other's writes.
    """

    answers: dict[AnswerId, Answer] = field(default_factory=dict)
    votes: dict[tuple[AnswerId, VoterId], VoteLevel] = field(default_factory=dict)
    # (answer, voter) -> insertion sequence, used for newest-first paging
    favorites: dict[tuple[AnswerId, VoterId], int] = field(default_factory=dict)
    comments: list[Comment] = field(default_factory=list)
    sequence: Iterator[int] = field(default_factory=lambda: count(1))

    def next_id(self) -> int:
        return next(self.sequence)
