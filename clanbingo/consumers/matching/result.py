"""Match result types for activity-to-square matching.

- ItemMatch: one square an activity satisfies, and how
- TeamMatch: one team the acting player is rostered on, and who gets credit
"""

from dataclasses import dataclass
from enum import Enum

from clanbingo.core.types import Credit, GuestCredit, Item, Team

# =============================================================================
# MATCH METHOD - How the match was made
# =============================================================================


class MatchMethod(Enum):
    """Method used to match an activity to a square."""

    DIRECT = "direct"  # Square name appears verbatim
    VARIATION = "variation"  # A synonym/abbreviation of the name appears
    CATEGORY = "category"  # A term of an "Any X" category appears
    REVERSE = "reverse"  # A specific drop maps back to the category


METHOD_DISPLAY: dict[MatchMethod, str] = {
    MatchMethod.DIRECT: "Direct match",
    MatchMethod.VARIATION: "Name variation",
    MatchMethod.CATEGORY: "Category match",
    MatchMethod.REVERSE: "Reverse category mapping",
}


@dataclass(frozen=True)
class ItemMatch:
    """A square satisfied by an activity."""

    item: Item
    method: MatchMethod
    term: str  # The text that matched (name, variation or category term)

    @property
    def display(self) -> str:
        return f"{METHOD_DISPLAY[self.method]} ('{self.term}')"


@dataclass(frozen=True)
class TeamMatch:
    """A team the acting player belongs to."""

    team: Team
    credit: Credit

    @property
    def is_guest(self) -> bool:
        return isinstance(self.credit, GuestCredit)

    @property
    def member_id(self) -> int | None:
        return None if self.is_guest else self.credit.member_id

    @property
    def guest_id(self) -> int | None:
        return self.credit.guest_id if self.is_guest else None
