"""Tests for board eligibility windows.

Verifies that:
1. Only active, started boards are live
2. Each activity is checked against every live board's own window
3. Future-dated activities are rejected
4. Unscheduled boards fall back to the processing watermark
5. Guest lookback covers the earliest live window
"""

from datetime import UTC, datetime, timedelta

from clanbingo.consumers.eligibility import (
    FALLBACK_LOOKBACK,
    EligibilityResolver,
    board_window,
    earliest_start,
    guest_lookback_hours,
    live_boards,
)
from clanbingo.core.types import Activity, Board
from clanbingo.utilities.tz import EPOCH, to_epoch_ms

NOW = datetime(2025, 2, 10, 12, 0, tzinfo=UTC)

JANUARY = Board(
    id=1,
    title="January Bingo",
    is_active=True,
    start_date=datetime(2025, 1, 1, tzinfo=UTC),
    end_date=datetime(2025, 1, 31, 23, 59, 59, tzinfo=UTC),
)
FEBRUARY = Board(
    id=2,
    title="February Bingo",
    is_active=True,
    start_date=datetime(2025, 2, 1, tzinfo=UTC),
    end_date=datetime(2025, 2, 28, 23, 59, 59, tzinfo=UTC),
)
OPEN = Board(id=3, title="Open Bingo", is_active=True)


def _activity(when: datetime, text: str = "I found a pair of Dragon claws") -> Activity:
    return Activity(actor_name="PlayerOne", timestamp_ms=to_epoch_ms(when), text=text)


# =============================================================================
# LIVE BOARDS
# =============================================================================


class TestLiveBoards:
    def test_inactive_board_excluded(self):
        inactive = Board(id=4, title="Old", is_active=False)
        assert live_boards([inactive, OPEN], NOW) == [OPEN]

    def test_not_yet_started_board_excluded(self):
        assert live_boards([JANUARY, FEBRUARY], datetime(2025, 1, 20, tzinfo=UTC)) == [JANUARY]

    def test_board_live_from_its_start(self):
        assert live_boards([FEBRUARY], FEBRUARY.start_date) == [FEBRUARY]

    def test_board_without_start_is_live(self):
        assert live_boards([OPEN], NOW) == [OPEN]

    def test_naive_start_date_treated_as_utc(self):
        naive = Board(id=5, title="Naive", is_active=True, start_date=datetime(2025, 2, 10, 13, 0))
        assert live_boards([naive], NOW) == []


class TestBoardWindow:
    def test_defaults(self):
        assert board_window(OPEN, NOW) == (EPOCH, NOW)

    def test_explicit_dates(self):
        assert board_window(JANUARY, NOW) == (JANUARY.start_date, JANUARY.end_date)


# =============================================================================
# PER-ACTIVITY ELIGIBILITY
# =============================================================================


class TestScheduledEligibility:
    def test_activity_counts_only_for_its_own_board(self):
        resolver = EligibilityResolver([JANUARY, FEBRUARY], NOW)
        jan_15 = _activity(datetime(2025, 1, 15, 18, 30, tzinfo=UTC))
        assert resolver.eligible_board_ids(jan_15) == frozenset({1})

    def test_february_activity(self):
        resolver = EligibilityResolver([JANUARY, FEBRUARY], NOW)
        feb_5 = _activity(datetime(2025, 2, 5, tzinfo=UTC))
        assert resolver.eligible_board_ids(feb_5) == frozenset({2})

    def test_before_every_start(self):
        resolver = EligibilityResolver([JANUARY, FEBRUARY], NOW)
        dec_20 = _activity(datetime(2024, 12, 20, tzinfo=UTC))
        assert resolver.eligible_board_ids(dec_20) == frozenset()

    def test_window_bounds_are_inclusive(self):
        resolver = EligibilityResolver([JANUARY], NOW)
        assert resolver.eligible_board_ids(_activity(JANUARY.start_date)) == frozenset({1})
        assert resolver.eligible_board_ids(_activity(JANUARY.end_date)) == frozenset({1})

    def test_unscheduled_board_alongside_scheduled_one(self):
        resolver = EligibilityResolver([JANUARY, OPEN], NOW)
        assert not resolver.uses_fallback
        jan_15 = _activity(datetime(2025, 1, 15, tzinfo=UTC))
        assert resolver.eligible_board_ids(jan_15) == frozenset({1, 3})

    def test_no_boards(self):
        resolver = EligibilityResolver([], NOW)
        assert resolver.eligible_board_ids(_activity(NOW)) == frozenset()


class TestFutureActivities:
    def test_far_future_rejected(self):
        resolver = EligibilityResolver([OPEN], NOW, watermark=NOW - timedelta(hours=1))
        assert resolver.eligible_board_ids(_activity(NOW + timedelta(hours=2))) == frozenset()

    def test_small_clock_skew_tolerated(self):
        resolver = EligibilityResolver([OPEN], NOW, watermark=NOW - timedelta(hours=1))
        assert resolver.eligible_board_ids(_activity(NOW + timedelta(minutes=30))) == frozenset({3})


class TestFallbackEligibility:
    def test_fallback_when_no_board_is_scheduled(self):
        assert EligibilityResolver([OPEN], NOW).uses_fallback

    def test_first_pass_looks_back_thirty_minutes(self):
        resolver = EligibilityResolver([OPEN], NOW)
        assert resolver.since == NOW - FALLBACK_LOOKBACK
        assert resolver.eligible_board_ids(_activity(NOW - timedelta(minutes=10))) == frozenset({3})
        assert resolver.eligible_board_ids(_activity(NOW - timedelta(minutes=40))) == frozenset()

    def test_watermark_is_exclusive(self):
        watermark = NOW - timedelta(minutes=5)
        resolver = EligibilityResolver([OPEN], NOW, watermark=watermark)
        assert resolver.eligible_board_ids(_activity(watermark)) == frozenset()
        after = watermark + timedelta(seconds=1)
        assert resolver.eligible_board_ids(_activity(after)) == frozenset({3})

    def test_end_date_still_applies(self):
        ended = Board(id=6, title="Ended", is_active=True, end_date=NOW - timedelta(hours=1))
        resolver = EligibilityResolver([ended, OPEN], NOW, watermark=NOW - timedelta(hours=3))
        activity = _activity(NOW - timedelta(minutes=10))
        assert resolver.eligible_board_ids(activity) == frozenset({3})


# =============================================================================
# GUEST LOOKBACK
# =============================================================================


class TestGuestLookback:
    def test_default_without_start_dates(self):
        assert guest_lookback_hours([OPEN], NOW) == 24
        assert guest_lookback_hours([OPEN], NOW, default=12) == 12

    def test_covers_earliest_start_plus_an_hour(self):
        board = Board(id=7, title="B", is_active=True, start_date=NOW - timedelta(hours=10))
        assert guest_lookback_hours([board], NOW) == 11

    def test_rounds_up(self):
        board = Board(id=7, title="B", is_active=True, start_date=NOW - timedelta(hours=10, minutes=30))
        assert guest_lookback_hours([board], NOW) == 12

    def test_at_least_one_hour(self):
        board = Board(id=7, title="B", is_active=True, start_date=NOW)
        assert guest_lookback_hours([board], NOW) == 1

    def test_earliest_start(self):
        assert earliest_start([FEBRUARY, JANUARY, OPEN]) == JANUARY.start_date
        assert earliest_start([OPEN]) is None
