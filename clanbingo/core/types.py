"""Core data types for the bingo engine.

All data structures are dataclasses with attribute access.
Board/team/item records are read-only to the engine; completions are the
only thing it writes.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal


@dataclass(frozen=True)
class Board:
    """One bingo game instance."""

    id: int
    title: str
    is_active: bool = False
    start_date: datetime | None = None  # None = eligible immediately
    end_date: datetime | None = None  # None = eligible until now
    description: str | None = None


@dataclass(frozen=True)
class Item:
    """A single square on a board's grid."""

    id: int
    board_id: int
    item_name: str  # May be a wildcard, e.g. "Any Nex Item"
    game_item_id: int | None = None  # Canonical game object id
    row_number: int | None = None
    column_number: int | None = None


# =============================================================================
# CREDIT - who a completion is attributed to
# =============================================================================


@dataclass(frozen=True)
class MemberCredit:
    """Completion credited to a clan member."""

    member_id: int
    kind: Literal["member"] = "member"


@dataclass(frozen=True)
class GuestCredit:
    """Completion credited to a guest (non-clan) participant."""

    guest_id: int
    kind: Literal["guest"] = "guest"


Credit = MemberCredit | GuestCredit


@dataclass(frozen=True)
class RosterEntry:
    """A person on a team roster.

    Clan members carry a display name and a canonical (RuneMetrics) name;
    guests only have the display name they were added with.
    """

    credit: Credit
    display_name: str | None = None
    canonical_name: str | None = None

    @classmethod
    def member(
        cls,
        member_id: int,
        display_name: str | None = None,
        canonical_name: str | None = None,
    ) -> "RosterEntry":
        return cls(MemberCredit(member_id), display_name, canonical_name)

    @classmethod
    def guest(cls, guest_id: int, display_name: str) -> "RosterEntry":
        return cls(GuestCredit(guest_id), display_name)

    @property
    def is_guest(self) -> bool:
        return isinstance(self.credit, GuestCredit)

    @property
    def names(self) -> tuple[str, ...]:
        """All known name fields, lowercased."""
        return tuple(n.lower() for n in (self.display_name, self.canonical_name) if n)


@dataclass(frozen=True)
class Team:
    """A team competing on one board."""

    id: int
    board_id: int
    team_name: str
    members: tuple[RosterEntry, ...] = ()
    color: str | None = None


@dataclass(frozen=True)
class GuestMember:
    """A guest rostered on at least one live board."""

    id: int
    display_name: str


# =============================================================================
# ACTIVITY
# =============================================================================


@dataclass(frozen=True)
class Activity:
    """One observed game activity line (e.g. a RuneMetrics adventurer's log entry)."""

    actor_name: str
    timestamp_ms: int
    text: str
    details: str | None = None
    activity_id: int | None = None  # Source-native id, None for guest feeds
    is_guest_activity: bool = False

    @property
    def occurred_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp_ms / 1000, tz=UTC)


@dataclass
class Completion:
    """Durable record that a team satisfied an item."""

    id: int
    item_id: int
    team_id: int
    member_id: int | None = None
    guest_id: int | None = None
    activity_id: int | None = None
    evidence_text: str | None = None
    completed_by_name: str | None = None
    completed_at: datetime | None = None

    @property
    def credit(self) -> Credit | None:
        """Credit for engine-created completions (manual ones may have none)."""
        if self.guest_id is not None:
            return GuestCredit(self.guest_id)
        if self.member_id is not None:
            return MemberCredit(self.member_id)
        return None


@dataclass
class BoardData:
    """Items and teams loaded for a set of boards."""

    items: list[Item] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)

    def items_for(self, board_ids: frozenset[int]) -> list[Item]:
        return [item for item in self.items if item.board_id in board_ids]

    def teams_for(self, board_ids: frozenset[int]) -> list[Team]:
        return [team for team in self.teams if team.board_id in board_ids]
