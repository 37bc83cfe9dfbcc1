"""Tests for the SQLite layer: boards, squares, rosters and completions."""

import sqlite3
import tempfile
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from clanbingo.core.types import GuestCredit, MemberCredit
from clanbingo.database import (
    SqliteBoardStore,
    add_team_guest,
    add_team_member,
    create_board,
    create_completion,
    create_guest,
    create_item,
    create_member,
    create_team,
    delete_board,
    delete_completion,
    delete_item,
    delete_team,
    get_board,
    get_completion,
    get_db,
    get_item,
    get_member_id_by_name,
    get_team,
    init_db,
    list_active_guests,
    list_boards,
    list_completions,
    list_items,
    list_team_members,
    remove_team_member,
    reset_db,
    set_board_active,
    update_board,
    update_item,
    update_team,
)

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def db_path():
    """Temporary database with the schema applied."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    path.unlink()
    init_db(path)

    yield path

    for suffix in ("", "-wal", "-shm"):
        Path(f"{path}{suffix}").unlink(missing_ok=True)


@pytest.fixture
def conn(db_path):
    with get_db(db_path) as connection:
        yield connection


@pytest.fixture
def board(conn):
    return create_board(conn, "Test Bingo", is_active=True)


# =============================================================================
# SCHEMA
# =============================================================================


class TestInitDb:
    def test_init_is_idempotent(self, db_path):
        init_db(db_path)
        with get_db(db_path) as conn:
            assert list_boards(conn) == []

    def test_reset_drops_data(self, db_path):
        with get_db(db_path) as conn:
            create_board(conn, "Old")
        reset_db(db_path)
        with get_db(db_path) as conn:
            assert list_boards(conn) == []

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "garbage.db"
        path.write_bytes(b"this is not sqlite at all, just some bytes" * 10)
        with pytest.raises(RuntimeError, match="Incompatible database"):
            init_db(path)

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "bingo.db"
        init_db(path)
        assert path.exists()


# =============================================================================
# BOARDS
# =============================================================================


class TestBoards:
    def test_dates_round_trip_as_utc(self, conn):
        cest = timezone(timedelta(hours=2))
        board_id = create_board(
            conn,
            "Summer Bingo",
            start_date=datetime(2025, 6, 1, 2, 0, tzinfo=cest),
            end_date=datetime(2025, 6, 30, 23, 59, tzinfo=UTC),
        )

        board = get_board(conn, board_id)
        assert board.start_date == datetime(2025, 6, 1, 0, 0, tzinfo=UTC)
        assert board.start_date.tzinfo is not None
        assert board.end_date == datetime(2025, 6, 30, 23, 59, tzinfo=UTC)

    def test_open_ended_board(self, conn, board):
        fetched = get_board(conn, board)
        assert fetched.start_date is None
        assert fetched.end_date is None
        assert fetched.is_active

    def test_active_only(self, conn, board):
        create_board(conn, "Draft", is_active=False)
        assert [b.id for b in list_boards(conn, active_only=True)] == [board]
        assert len(list_boards(conn)) == 2

    def test_update_and_clear_dates(self, conn, board):
        update_board(conn, board, start_date=datetime(2025, 1, 1, tzinfo=UTC))
        assert get_board(conn, board).start_date == datetime(2025, 1, 1, tzinfo=UTC)

        update_board(conn, board, clear_start_date=True, is_active=False)
        updated = get_board(conn, board)
        assert updated.start_date is None
        assert not updated.is_active

    def test_update_without_fields(self, conn, board):
        assert not update_board(conn, board)

    def test_grid_size_limits(self, conn):
        with pytest.raises(sqlite3.IntegrityError):
            create_board(conn, "Huge", grid_rows=9)

    def test_delete_cascades(self, conn, board):
        create_item(conn, board, "Abyssal Whip", 1, 1)
        assert delete_board(conn, board)
        assert list_items(conn, board) == []

    def test_set_board_active(self, conn, board):
        assert set_board_active(conn, board, False)
        assert not get_board(conn, board).is_active
        assert list_boards(conn, active_only=True) == []

        assert set_board_active(conn, board, True)
        assert get_board(conn, board).is_active

    def test_set_active_on_missing_board(self, conn):
        assert not set_board_active(conn, 999, True)


class TestItems:
    def test_grid_order(self, conn, board):
        create_item(conn, board, "C", 2, 1)
        create_item(conn, board, "B", 1, 2)
        create_item(conn, board, "A", 1, 1)

        assert [i.item_name for i in list_items(conn, board)] == ["A", "B", "C"]

    def test_one_square_per_cell(self, conn, board):
        create_item(conn, board, "A", 1, 1)
        with pytest.raises(sqlite3.IntegrityError):
            create_item(conn, board, "B", 1, 1)

    def test_game_item_id(self, conn, board):
        create_item(conn, board, "Abyssal Whip", 1, 1, game_item_id=4151)
        assert list_items(conn, board)[0].game_item_id == 4151

    def test_get_item(self, conn, board):
        item_id = create_item(conn, board, "Abyssal Whip", 2, 3, game_item_id=4151)

        item = get_item(conn, item_id)
        assert item.board_id == board
        assert item.item_name == "Abyssal Whip"
        assert (item.row_number, item.column_number) == (2, 3)
        assert get_item(conn, 999) is None

    def test_update_item_keeps_position(self, conn, board):
        item_id = create_item(conn, board, "Abyssal Whip", 1, 1)

        assert update_item(conn, item_id, item_name="Any Nex Item", game_item_id=20135)

        item = get_item(conn, item_id)
        assert item.item_name == "Any Nex Item"
        assert item.game_item_id == 20135
        assert (item.row_number, item.column_number) == (1, 1)

    def test_update_item_without_fields(self, conn, board):
        item_id = create_item(conn, board, "Abyssal Whip", 1, 1)
        assert not update_item(conn, item_id)
        assert not update_item(conn, 999, item_name="Nothing")

    def test_delete_item_removes_completions(self, conn, board):
        item_id = create_item(conn, board, "Dragon Claws", 1, 1)
        team = create_team(conn, board, "Alpha")
        member = create_member(conn, "PlayerOne")
        create_completion(conn, item_id, team, member_id=member)

        assert delete_item(conn, item_id)
        assert get_item(conn, item_id) is None
        assert list_completions(conn) == []
        assert not delete_item(conn, item_id)


# =============================================================================
# TEAMS AND ROSTERS
# =============================================================================


class TestRosters:
    def test_member_and_guest_entries(self, conn, board):
        member = create_member(conn, "player_one", display_name="Player One")
        guest = create_guest(conn, "  Guest Gal ")
        team = create_team(conn, board, "Alpha")
        add_team_member(conn, team, member)
        add_team_guest(conn, team, guest)

        entries = list_team_members(conn, team)

        assert entries[0].credit == MemberCredit(member)
        assert entries[0].display_name == "Player One"
        assert entries[0].canonical_name == "player_one"
        assert entries[1].credit == GuestCredit(guest)
        assert entries[1].display_name == "Guest Gal"
        assert entries[1].is_guest

    def test_get_team_includes_roster(self, conn, board):
        member = create_member(conn, "PlayerOne")
        team = create_team(conn, board, "Alpha", color="#ff0000")
        add_team_member(conn, team, member)

        fetched = get_team(conn, team)
        assert fetched.color == "#ff0000"
        assert [e.credit for e in fetched.members] == [MemberCredit(member)]

    def test_member_once_per_team(self, conn, board):
        member = create_member(conn, "PlayerOne")
        team = create_team(conn, board, "Alpha")
        add_team_member(conn, team, member)
        with pytest.raises(sqlite3.IntegrityError):
            add_team_member(conn, team, member)

    def test_remove_member(self, conn, board):
        member = create_member(conn, "PlayerOne")
        team = create_team(conn, board, "Alpha")
        add_team_member(conn, team, member)

        assert remove_team_member(conn, team, member_id=member)
        assert list_team_members(conn, team) == []
        assert not remove_team_member(conn, team)

    def test_member_lookup_by_either_name(self, conn):
        member = create_member(conn, "player_one", display_name="Player One")
        assert get_member_id_by_name(conn, "PLAYER ONE") == member
        assert get_member_id_by_name(conn, "player_one") == member
        assert get_member_id_by_name(conn, "nobody") is None

    def test_active_guests_are_distinct(self, conn, board):
        other = create_board(conn, "Other", is_active=True)
        unrelated = create_board(conn, "Unrelated", is_active=True)
        guest = create_guest(conn, "Guest Gal")
        loner = create_guest(conn, "Lone Guest")

        add_team_guest(conn, create_team(conn, board, "Alpha"), guest)
        add_team_guest(conn, create_team(conn, other, "Bravo"), guest)
        add_team_guest(conn, create_team(conn, unrelated, "Charlie"), loner)

        guests = list_active_guests(conn, [board, other])
        assert [g.display_name for g in guests] == ["Guest Gal"]
        assert list_active_guests(conn, []) == []

    def test_update_team(self, conn, board):
        team_id = create_team(conn, board, "Alpha")

        assert update_team(conn, team_id, team_name="Alpha Squad", color="#e74c3c")

        team = get_team(conn, team_id)
        assert team.team_name == "Alpha Squad"
        assert team.color == "#e74c3c"
        assert not update_team(conn, team_id)
        assert not update_team(conn, 999, team_name="Ghost")

    def test_delete_team_removes_roster_and_completions(self, conn, board):
        team_id = create_team(conn, board, "Alpha")
        member = create_member(conn, "PlayerOne")
        add_team_member(conn, team_id, member)
        item_id = create_item(conn, board, "Dragon Claws", 1, 1)
        create_completion(conn, item_id, team_id, member_id=member)

        assert delete_team(conn, team_id)
        assert get_team(conn, team_id) is None
        assert list_team_members(conn, team_id) == []
        assert list_completions(conn) == []
        assert not delete_team(conn, team_id)


# =============================================================================
# COMPLETIONS
# =============================================================================


class TestCompletions:
    @pytest.fixture
    def square(self, conn, board):
        item = create_item(conn, board, "Dragon Claws", 1, 1)
        team = create_team(conn, board, "Alpha")
        member = create_member(conn, "PlayerOne")
        return item, team, member

    def test_create_and_get(self, conn, square):
        item, team, member = square
        completion_id = create_completion(
            conn,
            item,
            team,
            member_id=member,
            activity_id=42,
            evidence_text="I found a pair of Dragon claws",
            completed_by_name="PlayerOne",
        )

        completion = get_completion(conn, item, team)
        assert completion.id == completion_id
        assert completion.credit == MemberCredit(member)
        assert completion.evidence_text == "I found a pair of Dragon claws"
        assert completion.completed_at is not None
        assert completion.completed_at.tzinfo is not None

    def test_duplicate_returns_none(self, conn, square):
        item, team, member = square
        assert create_completion(conn, item, team, member_id=member) is not None
        assert create_completion(conn, item, team, member_id=member) is None
        assert len(list_completions(conn)) == 1

    def test_both_credits_rejected(self, conn, square):
        item, team, member = square
        guest = create_guest(conn, "Guest Gal")
        with pytest.raises(ValueError):
            create_completion(conn, item, team, member_id=member, guest_id=guest)

    def test_delete(self, conn, square):
        item, team, member = square
        completion_id = create_completion(conn, item, team, member_id=member)
        assert delete_completion(conn, completion_id)
        assert get_completion(conn, item, team) is None

    def test_list_filters(self, conn, board, square):
        item, team, member = square
        other_board = create_board(conn, "Other")
        other_item = create_item(conn, other_board, "Abyssal Whip", 1, 1)
        other_team = create_team(conn, other_board, "Bravo")
        create_completion(conn, item, team, member_id=member)
        create_completion(conn, other_item, other_team, member_id=member)

        assert [c.item_id for c in list_completions(conn, board_id=board)] == [item]
        assert [c.team_id for c in list_completions(conn, team_id=other_team)] == [other_team]
        assert len(list_completions(conn)) == 2


class TestSqliteBoardStore:
    def test_store_reads_and_writes(self, db_path):
        with get_db(db_path) as conn:
            board = create_board(conn, "Test Bingo", is_active=True)
            item = create_item(conn, board, "Dragon Claws", 1, 1)
            team = create_team(conn, board, "Alpha")
            guest = create_guest(conn, "Guest Gal")
            add_team_guest(conn, team, guest)

        store = SqliteBoardStore(lambda: get_db(db_path))

        assert [b.id for b in store.list_boards()] == [board]
        assert [i.id for i in store.list_items(board)] == [item]
        assert [t.id for t in store.list_teams(board)] == [team]
        assert store.list_team_members(team)[0].credit == GuestCredit(guest)
        assert [g.id for g in store.list_active_guests([board])] == [guest]

        assert store.get_completion(item, team) is None
        completion_id = store.create_completion(item, team, None, guest, None, "evidence")
        assert store.get_completion(item, team).id == completion_id
        assert store.create_completion(item, team, None, guest, None, "evidence") is None
