"""Core types, protocols and errors."""

from clanbingo.core.errors import (
    ActivityFetchError,
    BingoError,
    ConfigurationError,
)
from clanbingo.core.interfaces import ActivitySource, BoardStore
from clanbingo.core.types import (
    Activity,
    Board,
    BoardData,
    Completion,
    Credit,
    GuestCredit,
    GuestMember,
    Item,
    MemberCredit,
    RosterEntry,
    Team,
)

__all__ = [
    # Errors
    "BingoError",
    "ConfigurationError",
    "ActivityFetchError",
    # Interfaces
    "ActivitySource",
    "BoardStore",
    # Types
    "Activity",
    "Board",
    "BoardData",
    "Completion",
    "Credit",
    "GuestCredit",
    "GuestMember",
    "Item",
    "MemberCredit",
    "RosterEntry",
    "Team",
]
