"""Database layer."""

from clanbingo.database.boards import (
    create_board,
    create_item,
    delete_board,
    delete_item,
    get_board,
    get_item,
    list_boards,
    list_items,
    set_board_active,
    update_board,
    update_item,
)
from clanbingo.database.completions import (
    create_completion,
    delete_completion,
    get_completion,
    list_completions,
)
from clanbingo.database.connection import get_connection, get_db, init_db, reset_db
from clanbingo.database.store import SqliteBoardStore
from clanbingo.database.teams import (
    add_team_guest,
    add_team_member,
    create_guest,
    create_member,
    create_team,
    delete_team,
    get_member_id_by_name,
    get_team,
    list_active_guests,
    list_team_members,
    list_teams,
    remove_team_member,
    update_team,
)

__all__ = [
    # Connection
    "get_connection",
    "get_db",
    "init_db",
    "reset_db",
    # Store
    "SqliteBoardStore",
    # Boards
    "create_board",
    "delete_board",
    "get_board",
    "list_boards",
    "set_board_active",
    "update_board",
    # Items
    "create_item",
    "delete_item",
    "get_item",
    "list_items",
    "update_item",
    # Teams
    "add_team_guest",
    "add_team_member",
    "create_guest",
    "create_member",
    "create_team",
    "delete_team",
    "get_member_id_by_name",
    "get_team",
    "list_active_guests",
    "list_team_members",
    "list_teams",
    "remove_team_member",
    "update_team",
    # Completions
    "create_completion",
    "delete_completion",
    "get_completion",
    "list_completions",
]
