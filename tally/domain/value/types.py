"""Domain value objects for tally.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from tally.domain.value.common import ValueObject


class VoteLevel(IntEnum):
    """Stored vote level.

    Level 0 is not a member: it is the absence of a vote row.
    """

    ONE = 1
    TWO = 2
    THREE = 3


# Levels accepted on the wire; 0 removes the caller's vote
CAST_LEVELS: frozenset[int] = frozenset({0, 1, 2, 3})


class OperationKind(str, Enum):
    """Kinds of mutating or read-only operations seen by the admission guard."""

    TOGGLE = "toggle"
    STATUS = "status"
    VOTE = "vote"
    COMMENT = "comment"


class AdmissionKey(ValueObject):
    """Key scoping a rate-limit bucket.

    Prefers the voter id, then the client address, then a shared anonymous
    bucket.
    """

    value: str

    @classmethod
    def for_request(
        cls, voter_id: str | None, client_address: str | None
    ) -> "AdmissionKey":
        """Build the admission key for an inbound request."""
        if voter_id:
            return cls(value=f"p:{voter_id}")
        if client_address:
            return cls(value=f"ip:{client_address}")
        return cls(value="anon")

    def __str__(self) -> str:
        return self.value


class DedupKey(ValueObject):
    """Key identifying "the same request" for duplicate suppression."""

    operation: str
    voter_id: str
    answer_id: int

    def __str__(self) -> str:
        return f"{self.operation}:{self.voter_id}:{self.answer_id}"
