"""Domain value objects for tally."""

from tally.domain.value.identifiers import AnswerId, CommentId, TopicId, VoterId
from tally.domain.value.types import (
    CAST_LEVELS,
    AdmissionKey,
    DedupKey,
    OperationKind,
    VoteLevel,
)

__all__ = [
    # Identifiers
    "AnswerId",
    "CommentId",
    "TopicId",
    "VoterId",
    # Types
    "CAST_LEVELS",
    "AdmissionKey",
    "DedupKey",
    "OperationKind",
    "VoteLevel",
]
