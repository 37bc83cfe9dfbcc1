"""Database operations for bingo completions.

Provides CRUD operations for the bingo_completions table. The
(item_id, team_id) unique key is the last line of defence against
double credit; create_completion reports a conflict as None.
"""

import logging
import sqlite3
from sqlite3 import Connection

from clanbingo.core.types import Completion
from clanbingo.utilities.tz import parse_timestamp

logger = logging.getLogger(__name__)


def _row_to_completion(row) -> Completion:
    """Convert a database row to Completion."""
    return Completion(
        id=row["id"],
        item_id=row["item_id"],
        team_id=row["team_id"],
        member_id=row["member_id"],
        guest_id=row["guest_member_id"],
        activity_id=row["activity_id"],
        evidence_text=row["evidence_text"],
        completed_by_name=row["completed_by_name"],
        completed_at=parse_timestamp(row["completed_at"]),
    )


# =============================================================================
# READ OPERATIONS
# =============================================================================


def get_completion(conn: Connection, item_id: int, team_id: int) -> Completion | None:
    """Get the completion of a square by a team, if any."""
    cursor = conn.execute(
        "SELECT * FROM bingo_completions WHERE item_id = ? AND team_id = ?",
        (item_id, team_id),
    )
    row = cursor.fetchone()
    return _row_to_completion(row) if row else None


def list_completions(
    conn: Connection,
    board_id: int | None = None,
    team_id: int | None = None,
) -> list[Completion]:
    """Get completions, oldest first.

    Args:
        conn: Database connection
        board_id: Only completions of squares on this board
        team_id: Only completions by this team

    Returns:
        List of Completion objects
    """
    conditions = []
    values = []

    if board_id is not None:
        conditions.append("i.board_id = ?")
        values.append(board_id)

    if team_id is not None:
        conditions.append("c.team_id = ?")
        values.append(team_id)

    where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    cursor = conn.execute(
        f"""SELECT c.* FROM bingo_completions c
            JOIN bingo_items i ON i.id = c.item_id
            {where}
            ORDER BY c.completed_at, c.id""",
        values,
    )
    return [_row_to_completion(row) for row in cursor.fetchall()]


# =============================================================================
# CREATE OPERATIONS
# =============================================================================


def create_completion(
    conn: Connection,
    item_id: int,
    team_id: int,
    member_id: int | None = None,
    guest_id: int | None = None,
    activity_id: int | None = None,
    evidence_text: str | None = None,
    completed_by_name: str | None = None,
) -> int | None:
    """Mark a square complete for a team.

    Args:
        conn: Database connection
        item_id: Square ID
        team_id: Team ID
        member_id: Credited clan member (mutually exclusive with guest_id)
        guest_id: Credited guest
        activity_id: Source activity, if it has a native id
        evidence_text: Activity text that satisfied the square
        completed_by_name: Name of the player as it appeared in the feed

    Returns:
        New completion ID, or None if the team already completed the square

    Raises:
        ValueError: If both member_id and guest_id are given
    """
    if member_id is not None and guest_id is not None:
        raise ValueError("A completion is credited to a member or a guest, not both")

    try:
        cursor = conn.execute(
            """INSERT INTO bingo_completions
               (item_id, team_id, member_id, guest_member_id, activity_id,
                evidence_text, completed_by_name)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (item_id, team_id, member_id, guest_id, activity_id, evidence_text, completed_by_name),
        )
    except sqlite3.IntegrityError as e:
        if "UNIQUE" not in str(e):
            raise
        conn.rollback()
        logger.debug("[DB] Completion for item %d / team %d already exists", item_id, team_id)
        return None

    conn.commit()
    return cursor.lastrowid


# =============================================================================
# DELETE OPERATIONS
# =============================================================================


def delete_completion(conn: Connection, completion_id: int) -> bool:
    """Remove a completion (admin correction).

    Returns:
        True if deleted
    """
    cursor = conn.execute("DELETE FROM bingo_completions WHERE id = ?", (completion_id,))
    conn.commit()
    return cursor.rowcount > 0
