"""Database operations for teams, rosters, clan members and guests.

Provides CRUD operations for the bingo_teams, bingo_team_members,
bingo_guest_members and members tables.
"""

from sqlite3 import Connection

from clanbingo.core.types import GuestMember, RosterEntry, Team


def _row_to_team(row) -> Team:
    """Convert a database row to Team (roster not populated)."""
    return Team(
        id=row["id"],
        board_id=row["board_id"],
        team_name=row["team_name"],
        color=row["color"],
    )


def _row_to_roster_entry(row) -> RosterEntry:
    """Convert a joined roster row to RosterEntry."""
    if row["guest_member_id"] is not None:
        return RosterEntry.guest(row["guest_member_id"], row["guest_display_name"])
    return RosterEntry.member(
        row["member_id"],
        display_name=row["member_display_name"],
        canonical_name=row["member_name"],
    )


# =============================================================================
# CLAN MEMBERS
# =============================================================================


def create_member(conn: Connection, name: str, display_name: str | None = None) -> int:
    """Add a clan member.

    Args:
        conn: Database connection
        name: Canonical (RuneMetrics) name, unique
        display_name: Name shown in the clan, if different

    Returns:
        New member ID
    """
    cursor = conn.execute(
        "INSERT INTO members (name, display_name) VALUES (?, ?)",
        (name, display_name or name),
    )
    conn.commit()
    return cursor.lastrowid


def get_member_id_by_name(conn: Connection, name: str) -> int | None:
    """Look up a clan member by canonical or display name (case-insensitive)."""
    cursor = conn.execute(
        """SELECT id FROM members
           WHERE LOWER(name) = LOWER(?) OR LOWER(display_name) = LOWER(?)
           LIMIT 1""",
        (name, name),
    )
    row = cursor.fetchone()
    return row["id"] if row else None


# =============================================================================
# GUESTS
# =============================================================================


def create_guest(conn: Connection, display_name: str) -> int:
    """Register a non-clan participant.

    Returns:
        New guest ID
    """
    cursor = conn.execute(
        "INSERT INTO bingo_guest_members (display_name) VALUES (?)",
        (display_name.strip(),),
    )
    conn.commit()
    return cursor.lastrowid


def list_active_guests(conn: Connection, board_ids: list[int]) -> list[GuestMember]:
    """Distinct guests rostered on any of the given boards.

    Args:
        conn: Database connection
        board_ids: Boards to consider (usually the live ones)

    Returns:
        List of GuestMember, ordered by ID
    """
    if not board_ids:
        return []

    placeholders = ", ".join("?" for _ in board_ids)
    cursor = conn.execute(
        f"""SELECT DISTINCT g.id, g.display_name
            FROM bingo_guest_members g
            JOIN bingo_team_members tm ON tm.guest_member_id = g.id
            JOIN bingo_teams t ON t.id = tm.team_id
            WHERE t.board_id IN ({placeholders})
            ORDER BY g.id""",
        list(board_ids),
    )
    return [GuestMember(id=row["id"], display_name=row["display_name"]) for row in cursor.fetchall()]


# =============================================================================
# TEAMS
# =============================================================================


def list_teams(conn: Connection, board_id: int) -> list[Team]:
    """Get a board's teams (rosters not populated)."""
    cursor = conn.execute(
        "SELECT * FROM bingo_teams WHERE board_id = ? ORDER BY id",
        (board_id,),
    )
    return [_row_to_team(row) for row in cursor.fetchall()]


def get_team(conn: Connection, team_id: int) -> Team | None:
    """Get a single team by ID, roster included."""
    cursor = conn.execute("SELECT * FROM bingo_teams WHERE id = ?", (team_id,))
    row = cursor.fetchone()
    if not row:
        return None
    team = _row_to_team(row)
    return Team(
        id=team.id,
        board_id=team.board_id,
        team_name=team.team_name,
        members=tuple(list_team_members(conn, team_id)),
        color=team.color,
    )


def create_team(
    conn: Connection,
    board_id: int,
    team_name: str,
    color: str = "#3498db",
) -> int:
    """Create a team on a board.

    Returns:
        New team ID
    """
    cursor = conn.execute(
        "INSERT INTO bingo_teams (board_id, team_name, color) VALUES (?, ?, ?)",
        (board_id, team_name, color),
    )
    conn.commit()
    return cursor.lastrowid


def update_team(
    conn: Connection,
    team_id: int,
    team_name: str | None = None,
    color: str | None = None,
) -> bool:
    """Rename or recolor a team.

    Returns:
        True if updated
    """
    updates = []
    values = []

    if team_name is not None:
        updates.append("team_name = ?")
        values.append(team_name)

    if color is not None:
        updates.append("color = ?")
        values.append(color)

    if not updates:
        return False

    values.append(team_id)
    query = f"UPDATE bingo_teams SET {', '.join(updates)} WHERE id = ?"
    cursor = conn.execute(query, values)
    conn.commit()
    return cursor.rowcount > 0


def delete_team(conn: Connection, team_id: int) -> bool:
    """Delete a team with its roster and completions."""
    cursor = conn.execute("DELETE FROM bingo_teams WHERE id = ?", (team_id,))
    conn.commit()
    return cursor.rowcount > 0


# =============================================================================
# ROSTERS
# =============================================================================


def list_team_members(conn: Connection, team_id: int) -> list[RosterEntry]:
    """Get a team's roster, clan members and guests alike."""
    cursor = conn.execute(
        """SELECT tm.member_id, tm.guest_member_id,
                  m.name AS member_name, m.display_name AS member_display_name,
                  g.display_name AS guest_display_name
           FROM bingo_team_members tm
           LEFT JOIN members m ON m.id = tm.member_id
           LEFT JOIN bingo_guest_members g ON g.id = tm.guest_member_id
           WHERE tm.team_id = ?
           ORDER BY tm.id""",
        (team_id,),
    )
    return [_row_to_roster_entry(row) for row in cursor.fetchall()]


def add_team_member(conn: Connection, team_id: int, member_id: int) -> int:
    """Put a clan member on a team.

    Returns:
        New roster row ID
    """
    cursor = conn.execute(
        "INSERT INTO bingo_team_members (team_id, member_id) VALUES (?, ?)",
        (team_id, member_id),
    )
    conn.commit()
    return cursor.lastrowid


def add_team_guest(conn: Connection, team_id: int, guest_id: int) -> int:
    """Put a guest on a team.

    Returns:
        New roster row ID
    """
    cursor = conn.execute(
        "INSERT INTO bingo_team_members (team_id, guest_member_id) VALUES (?, ?)",
        (team_id, guest_id),
    )
    conn.commit()
    return cursor.lastrowid


def remove_team_member(
    conn: Connection,
    team_id: int,
    member_id: int | None = None,
    guest_id: int | None = None,
) -> bool:
    """Take a clan member or a guest off a team.

    Returns:
        True if a roster row was removed
    """
    if member_id is not None:
        cursor = conn.execute(
            "DELETE FROM bingo_team_members WHERE team_id = ? AND member_id = ?",
            (team_id, member_id),
        )
    elif guest_id is not None:
        cursor = conn.execute(
            "DELETE FROM bingo_team_members WHERE team_id = ? AND guest_member_id = ?",
            (team_id, guest_id),
        )
    else:
        return False
    conn.commit()
    return cursor.rowcount > 0
