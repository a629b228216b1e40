"""Base service class for domain services."""

from typing import Any

from tally.domain.error import ValidationError
from tally.domain.value import AnswerId, VoterId


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @staticmethod
    def require_answer_id(value: Any) -> AnswerId:
        """Validate that value is a positive integer answer id."""
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError(f"answer_id must be a positive integer, got {value!r}")
        return AnswerId(value)

    @staticmethod
    def require_voter_id(value: Any) -> VoterId:
        """Validate that value is a non-empty voter id."""
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("voter_id is required")
        return VoterId(value)


def normalize_answer_ids(values: Any) -> list[AnswerId]:
    """Coerce, de-duplicate and sort answer ids, dropping invalid entries."""
    ids: set[int] = set()
    for value in values or ():
        try:
            number = int(value)
        except (TypeError, ValueError):
            continue
        if number > 0:
            ids.add(number)
    return [AnswerId(i) for i in sorted(ids)]
