"""Database operations for bingo boards and their squares.

Provides CRUD operations for the bingo_boards and bingo_items tables.
Board dates are stored as ISO-8601 UTC text and returned as aware datetimes.
"""

from datetime import datetime
from sqlite3 import Connection

from clanbingo.core.types import Board, Item
from clanbingo.utilities.tz import parse_timestamp, to_utc


def _format_date(value: datetime | None) -> str | None:
    return to_utc(value).isoformat() if value else None


def _row_to_board(row) -> Board:
    """Convert a database row to Board."""
    return Board(
        id=row["id"],
        title=row["title"],
        is_active=bool(row["is_active"]),
        start_date=parse_timestamp(row["start_date"]),
        end_date=parse_timestamp(row["end_date"]),
        description=row["description"],
    )


def _row_to_item(row) -> Item:
    """Convert a database row to Item."""
    return Item(
        id=row["id"],
        board_id=row["board_id"],
        item_name=row["item_name"],
        game_item_id=row["item_id"],
        row_number=row["row_number"],
        column_number=row["column_number"],
    )


# =============================================================================
# BOARDS
# =============================================================================


def list_boards(conn: Connection, active_only: bool = False) -> list[Board]:
    """Get all boards.

    Args:
        conn: Database connection
        active_only: Only return boards flagged active

    Returns:
        List of Board objects, oldest first
    """
    if active_only:
        cursor = conn.execute("SELECT * FROM bingo_boards WHERE is_active = 1 ORDER BY id")
    else:
        cursor = conn.execute("SELECT * FROM bingo_boards ORDER BY id")
    return [_row_to_board(row) for row in cursor.fetchall()]


def get_board(conn: Connection, board_id: int) -> Board | None:
    """Get a single board by ID."""
    cursor = conn.execute("SELECT * FROM bingo_boards WHERE id = ?", (board_id,))
    row = cursor.fetchone()
    return _row_to_board(row) if row else None


def create_board(
    conn: Connection,
    title: str,
    description: str | None = None,
    is_active: bool = False,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    grid_rows: int = 5,
    grid_columns: int = 5,
) -> int:
    """Create a new board.

    Args:
        conn: Database connection
        title: Board title
        description: Optional description
        is_active: Whether the board accepts activities
        start_date: Window start (None = eligible immediately)
        end_date: Window end (None = open ended)
        grid_rows: Grid height (3-7)
        grid_columns: Grid width (3-7)

    Returns:
        New board ID
    """
    cursor = conn.execute(
        """INSERT INTO bingo_boards
           (title, description, is_active, start_date, end_date, grid_rows, grid_columns)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (
            title,
            description,
            int(is_active),
            _format_date(start_date),
            _format_date(end_date),
            grid_rows,
            grid_columns,
        ),
    )
    conn.commit()
    return cursor.lastrowid


def update_board(
    conn: Connection,
    board_id: int,
    title: str | None = None,
    description: str | None = None,
    is_active: bool | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    clear_start_date: bool = False,
    clear_end_date: bool = False,
) -> bool:
    """Update a board.

    Only updates fields that are explicitly provided (not None).

    Returns:
        True if updated
    """
    updates = []
    values = []

    if title is not None:
        updates.append("title = ?")
        values.append(title)

    if description is not None:
        updates.append("description = ?")
        values.append(description)

    if is_active is not None:
        updates.append("is_active = ?")
        values.append(int(is_active))

    if start_date is not None:
        updates.append("start_date = ?")
        values.append(_format_date(start_date))
    elif clear_start_date:
        updates.append("start_date = NULL")

    if end_date is not None:
        updates.append("end_date = ?")
        values.append(_format_date(end_date))
    elif clear_end_date:
        updates.append("end_date = NULL")

    if not updates:
        return False

    updates.append("updated_at = CURRENT_TIMESTAMP")
    values.append(board_id)
    query = f"UPDATE bingo_boards SET {', '.join(updates)} WHERE id = ?"
    cursor = conn.execute(query, values)
    conn.commit()
    return cursor.rowcount > 0


def set_board_active(conn: Connection, board_id: int, is_active: bool) -> bool:
    """Activate or deactivate a board."""
    return update_board(conn, board_id, is_active=is_active)


def delete_board(conn: Connection, board_id: int) -> bool:
    """Delete a board with its items, teams and completions.

    Returns:
        True if deleted
    """
    cursor = conn.execute("DELETE FROM bingo_boards WHERE id = ?", (board_id,))
    conn.commit()
    return cursor.rowcount > 0


# =============================================================================
# ITEMS (SQUARES)
# =============================================================================


def list_items(conn: Connection, board_id: int) -> list[Item]:
    """Get a board's squares in grid order."""
    cursor = conn.execute(
        """SELECT * FROM bingo_items
           WHERE board_id = ?
           ORDER BY row_number, column_number""",
        (board_id,),
    )
    return [_row_to_item(row) for row in cursor.fetchall()]


def get_item(conn: Connection, item_id: int) -> Item | None:
    """Get a single square by ID."""
    cursor = conn.execute("SELECT * FROM bingo_items WHERE id = ?", (item_id,))
    row = cursor.fetchone()
    return _row_to_item(row) if row else None


def create_item(
    conn: Connection,
    board_id: int,
    item_name: str,
    row_number: int,
    column_number: int,
    game_item_id: int | None = None,
    description: str | None = None,
) -> int:
    """Place a square on a board.

    Args:
        conn: Database connection
        board_id: Board the square belongs to
        item_name: Square name, literal or "Any <category>"
        row_number: 1-based grid row
        column_number: 1-based grid column
        game_item_id: In-game object id, if known
        description: Optional hint shown to players

    Returns:
        New item ID
    """
    cursor = conn.execute(
        """INSERT INTO bingo_items
           (board_id, item_name, row_number, column_number, item_id, description)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (board_id, item_name, row_number, column_number, game_item_id, description),
    )
    conn.commit()
    return cursor.lastrowid


def update_item(
    conn: Connection,
    item_id: int,
    item_name: str | None = None,
    game_item_id: int | None = None,
    description: str | None = None,
) -> bool:
    """Update a square's contents (position is fixed).

    Returns:
        True if updated
    """
    updates = []
    values = []

    if item_name is not None:
        updates.append("item_name = ?")
        values.append(item_name)

    if game_item_id is not None:
        updates.append("item_id = ?")
        values.append(game_item_id)

    if description is not None:
        updates.append("description = ?")
        values.append(description)

    if not updates:
        return False

    updates.append("updated_at = CURRENT_TIMESTAMP")
    values.append(item_id)
    query = f"UPDATE bingo_items SET {', '.join(updates)} WHERE id = ?"
    cursor = conn.execute(query, values)
    conn.commit()
    return cursor.rowcount > 0


def delete_item(conn: Connection, item_id: int) -> bool:
    """Remove a square (its completions go with it)."""
    cursor = conn.execute("DELETE FROM bingo_items WHERE id = ?", (item_id,))
    conn.commit()
    return cursor.rowcount > 0
