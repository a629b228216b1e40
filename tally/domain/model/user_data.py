"""Per-viewer answer data used to hydrate client state."""

from pydantic import Field

from tally.domain.model.common import DomainModel
from tally.domain.value import AnswerId


class UserAnswerData(DomainModel):
    """A viewer's votes and favorites for a set of answers."""

    votes: dict[AnswerId, int] = Field(default_factory=dict)
    favorites: frozenset[AnswerId] = Field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> "UserAnswerData":
        """Data for anonymous browsing or an empty answer list."""
        return cls()
