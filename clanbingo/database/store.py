"""SQLite implementation of the BoardStore protocol.

Each call opens its own connection through the db factory, so the store
can be shared between the scheduler thread and callers on other threads.
"""

from collections.abc import Callable

from clanbingo.core.types import Board, Completion, GuestMember, Item, RosterEntry, Team
from clanbingo.database import boards, completions, teams
from clanbingo.database.connection import get_db


class SqliteBoardStore:
    """Board configuration and completions backed by SQLite.

    Usage:
        store = SqliteBoardStore(get_db)
        processor = BingoActivityProcessor(store, source)
    """

    def __init__(self, db_factory: Callable = get_db):
        """Initialize store.

        Args:
            db_factory: Zero-argument context manager factory yielding a connection
        """
        self._db = db_factory

    def list_boards(self) -> list[Board]:
        with self._db() as conn:
            return boards.list_boards(conn)

    def list_items(self, board_id: int) -> list[Item]:
        with self._db() as conn:
            return boards.list_items(conn, board_id)

    def list_teams(self, board_id: int) -> list[Team]:
        with self._db() as conn:
            return teams.list_teams(conn, board_id)

    def list_team_members(self, team_id: int) -> list[RosterEntry]:
        with self._db() as conn:
            return teams.list_team_members(conn, team_id)

    def list_active_guests(self, board_ids: list[int]) -> list[GuestMember]:
        with self._db() as conn:
            return teams.list_active_guests(conn, board_ids)

    def get_completion(self, item_id: int, team_id: int) -> Completion | None:
        with self._db() as conn:
            return completions.get_completion(conn, item_id, team_id)

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
        with self._db() as conn:
            return completions.create_completion(
                conn,
                item_id=item_id,
                team_id=team_id,
                member_id=member_id,
                guest_id=guest_id,
                activity_id=activity_id,
                evidence_text=evidence_text,
                completed_by_name=completed_by_name,
            )
