"""Interfaces for the engine's external collaborators.

The engine depends on these protocols, not on SQLite or HTTP directly.
Implementations can be database-backed, HTTP-backed, or faked for testing.
"""

from typing import Protocol

from clanbingo.core.types import Activity, Board, Completion, GuestMember, Item, RosterEntry, Team

# =============================================================================
# BOARD CONFIGURATION STORE
# =============================================================================


class BoardStore(Protocol):
    """Board configuration reads plus completion reads/writes."""

    def list_boards(self) -> list[Board]:
        """All boards, active or not."""
        ...

    def list_items(self, board_id: int) -> list[Item]:
        """Items on a board's grid."""
        ...

    def list_teams(self, board_id: int) -> list[Team]:
        """Teams on a board (members not populated)."""
        ...

    def list_team_members(self, team_id: int) -> list[RosterEntry]:
        """Roster of a team."""
        ...

    def list_active_guests(self, board_ids: list[int]) -> list[GuestMember]:
        """Distinct guests rostered on any of the given boards."""
        ...

    def get_completion(self, item_id: int, team_id: int) -> Completion | None:
        """Existing completion for an (item, team) pair."""
        ...

    def create_completion(
        self,
        item_id: int,
        team_id: int,
        member_id: int | None,
        guest_id: int | None,
        activity_id: int | None,
        evidence_text: str | None,
        completed_by_name: str | None = None,
    ) -> int | None:
        """Create a completion.

        Returns:
            New completion id, or None if the (item, team) key already exists
        """
        ...


# =============================================================================
# ACTIVITY SOURCE
# =============================================================================


class ActivitySource(Protocol):
    """Feeds of recent game activity.

    Both methods raise ActivityFetchError when the source is unavailable.
    """

    def fetch_clan_activities(self, limit: int) -> list[Activity]:
        """Most recent activities across all clan members."""
        ...

    def fetch_guest_activities(self, display_name: str, hours_back: int) -> list[Activity]:
        """Recent activities of one guest, no older than hours_back."""
        ...
