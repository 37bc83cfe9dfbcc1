"""Board eligibility windows.

Decides which live boards an activity counts toward. Every activity is
checked against every live board on its own, so an activity from January
can complete a January board while a February board ignores it.

A board is live when it is active and its start date (if any) has passed.
Its window is [start_date or epoch, end_date or now], inclusive on both ends.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from clanbingo.core.types import Activity, Board
from clanbingo.utilities.tz import EPOCH, from_epoch_ms, to_utc

logger = logging.getLogger(__name__)

# Activities further in the future than this are clock skew or garbage
FUTURE_SKEW_TOLERANCE = timedelta(hours=1)

# Lower bound for unscheduled boards on the first pass after startup
FALLBACK_LOOKBACK = timedelta(minutes=30)


def is_live(board: Board, now: datetime) -> bool:
    """Whether a board is active and has started."""
    if not board.is_active:
        return False
    return board.start_date is None or now >= to_utc(board.start_date)


def live_boards(boards: Iterable[Board], now: datetime) -> list[Board]:
    """Filter boards down to those accepting activities right now.

    Args:
        boards: All boards from the store
        now: Reference time of the pass

    Returns:
        Active, started boards in input order
    """
    live = []
    for board in boards:
        if is_live(board, now):
            live.append(board)
        elif board.is_active:
            logger.debug(
                "[ELIGIBILITY] Board %d '%s' not started yet (starts %s)",
                board.id,
                board.title,
                board.start_date,
            )
    return live


def board_window(board: Board, now: datetime) -> tuple[datetime, datetime]:
    """Effective (start, end) window of a board, both inclusive."""
    start = to_utc(board.start_date) if board.start_date else EPOCH
    end = to_utc(board.end_date) if board.end_date else now
    return start, end


def earliest_start(boards: Iterable[Board]) -> datetime | None:
    """Earliest start date among boards, or None if none is scheduled."""
    starts = [to_utc(b.start_date) for b in boards if b.start_date]
    return min(starts) if starts else None


def guest_lookback_hours(boards: Iterable[Board], now: datetime, default: int = 24) -> int:
    """How far back guest profiles must be read to cover every live window.

    One hour of slack is added on top of the time since the earliest start.

    Args:
        boards: Live boards
        now: Reference time of the pass
        default: Lookback when no board has a start date

    Returns:
        Hours to look back (at least 1)
    """
    start = earliest_start(boards)
    if start is None:
        return default
    hours_since_start = (now - start).total_seconds() / 3600
    return max(1, math.ceil(hours_since_start + 1))


class EligibilityResolver:
    """Maps activities to the live boards whose window contains them.

    Usage:
        resolver = EligibilityResolver(live, now, watermark)
        board_ids = resolver.eligible_board_ids(activity)
    """

    def __init__(
        self,
        boards: list[Board],
        now: datetime,
        watermark: datetime | None = None,
    ):
        """Initialize resolver.

        Args:
            boards: Live boards (see live_boards)
            now: Reference time of the pass
            watermark: End of the last successful pass, if any
        """
        self._boards = list(boards)
        self._now = now
        self._windows = {b.id: board_window(b, now) for b in self._boards}
        self._scheduled = any(b.start_date for b in self._boards)
        self._since = watermark if watermark is not None else now - FALLBACK_LOOKBACK

    @property
    def uses_fallback(self) -> bool:
        """True when no live board has a start date and the watermark applies."""
        return bool(self._boards) and not self._scheduled

    @property
    def since(self) -> datetime:
        """Lower bound used in fallback mode."""
        return self._since

    def eligible_board_ids(self, activity: Activity) -> frozenset[int]:
        """Live boards this activity counts toward.

        Args:
            activity: Activity to check

        Returns:
            Set of board ids (empty if the activity counts nowhere)
        """
        occurred = from_epoch_ms(activity.timestamp_ms)

        if occurred > self._now + FUTURE_SKEW_TOLERANCE:
            logger.debug(
                "[ELIGIBILITY] Rejecting future activity at %s: %s",
                occurred.isoformat(),
                activity.text[:80],
            )
            return frozenset()

        if self.uses_fallback:
            return frozenset(
                b.id
                for b in self._boards
                if occurred > self._since and (b.end_date is None or occurred <= to_utc(b.end_date))
            )

        eligible = set()
        for board in self._boards:
            start, end = self._windows[board.id]
            if start <= occurred <= end:
                eligible.add(board.id)
            elif board.start_date and occurred < start:
                logger.debug(
                    "[ELIGIBILITY] Rejecting activity from %s (before board %d start %s): %s - %s",
                    occurred.isoformat(),
                    board.id,
                    start.isoformat(),
                    activity.text[:80],
                    activity.actor_name,
                )
        return frozenset(eligible)
