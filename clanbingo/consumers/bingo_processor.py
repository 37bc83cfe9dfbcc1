"""Bingo activity processing pass.

One pass of the engine:
1. Load boards and keep the live ones (active and started)
2. Load items, teams and rosters of live boards
3. Fetch clan activities and rostered guests' activities in parallel
4. Merge, sort oldest first and filter by each board's window
5. Match, resolve teams and commit completions

A pass never raises. Failures are logged and reported in ProcessingResult.
"""

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from datetime import datetime

from clanbingo.config import Config
from clanbingo.consumers.completion import CommitError, CompletionCommitter, NewCompletion
from clanbingo.consumers.eligibility import (
    EligibilityResolver,
    guest_lookback_hours,
    live_boards,
)
from clanbingo.consumers.matching import ItemMatch, TeamMatch, match_items, resolve_teams
from clanbingo.core.errors import ConfigurationError
from clanbingo.core.interfaces import ActivitySource, BoardStore
from clanbingo.core.types import Activity, Board, BoardData
from clanbingo.utilities.tz import now_utc

logger = logging.getLogger(__name__)

CLAN_SOURCE = "clan"


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass
class ProcessingResult:
    """Result of one processing pass."""

    success: bool = True
    skipped: bool = False  # Another pass was already running
    error: str | None = None

    # Timing
    started_at: datetime | None = None
    duration_seconds: float = 0.0

    # Counts
    live_boards: int = 0
    fetched: int = 0
    processed: int = 0  # Activities inside at least one board window

    new_completions: list[NewCompletion] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    fetch_failures: list[dict] = field(default_factory=list)

    def summary(self) -> str:
        return f"{len(self.new_completions)} completions found, {len(self.errors)} errors"

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "skipped": self.skipped,
            "error": self.error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "duration_seconds": self.duration_seconds,
            "live_boards": self.live_boards,
            "fetched": self.fetched,
            "processed": self.processed,
            "new_completions": len(self.new_completions),
            "errors": self.errors,
            "fetch_failures": self.fetch_failures,
        }


@dataclass
class DryRunResult:
    """What a single activity would complete, without writing anything."""

    matches: list[ItemMatch] = field(default_factory=list)
    teams: list[TeamMatch] = field(default_factory=list)
    total_items: int = 0
    total_teams: int = 0


# =============================================================================
# PROCESSOR
# =============================================================================


class BingoActivityProcessor:
    """Matches recent game activity against live bingo boards.

    Holds the processing watermark and the re-entrancy guard, so one
    instance should be shared by everything that triggers passes.

    Usage:
        processor = BingoActivityProcessor(store, source)
        result = processor.process_activities()
        logger.info(result.summary())
    """

    def __init__(
        self,
        store: BoardStore,
        source: ActivitySource,
        clock: Callable[[], datetime] = now_utc,
        clan_activity_limit: int | None = None,
        guest_lookback_default: int | None = None,
        max_workers: int | None = None,
    ):
        """Initialize the processor.

        Args:
            store: Board configuration and completion store
            source: Clan and guest activity feeds
            clock: Returns the current aware UTC time
            clan_activity_limit: Activities requested from the clan feed
            guest_lookback_default: Guest lookback when no board is scheduled
            max_workers: Parallel guest fetches
        """
        self._store = store
        self._source = source
        self._clock = clock
        self._clan_activity_limit = clan_activity_limit or Config.CLAN_ACTIVITY_LIMIT
        self._guest_lookback_default = guest_lookback_default or Config.GUEST_LOOKBACK_HOURS
        self._max_workers = max_workers or Config.GUEST_FETCH_WORKERS

        self._lock = threading.Lock()
        self._is_processing = False
        self._watermark: datetime | None = None

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def watermark(self) -> datetime | None:
        """End of the last successful pass (None until one completes)."""
        return self._watermark

    # =========================================================================
    # PROCESSING PASS
    # =========================================================================

    def process_activities(self) -> ProcessingResult:
        """Run one processing pass.

        Overlapping calls are dropped, not queued.

        Returns:
            ProcessingResult (skipped=True if a pass was already running)
        """
        if not self._lock.acquire(blocking=False):
            logger.info("[BINGO] Processing already in progress, skipping")
            return ProcessingResult(skipped=True)

        self._is_processing = True
        start_time = time.time()
        result = ProcessingResult()

        try:
            now = self._clock()
            result.started_at = now
            self._run_pass(now, result)
            if any(f["source"] == CLAN_SOURCE for f in result.fetch_failures):
                # Clan rows from this window were never seen
                logger.warning("[BINGO] Clan feed failed, holding watermark at %s", self._watermark)
            else:
                self._watermark = now
        except ConfigurationError as e:
            logger.error("[BINGO] Could not load board configuration: %s", e)
            result.success = False
            result.error = str(e)
        except Exception as e:
            logger.exception("[BINGO] Processing pass failed: %s", e)
            result.success = False
            result.error = str(e)
        finally:
            result.duration_seconds = round(time.time() - start_time, 3)
            self._is_processing = False
            self._lock.release()

        if result.success and result.live_boards:
            logger.info(
                "[BINGO] Processed %d/%d activities in %.1fs: %s",
                result.processed,
                result.fetched,
                result.duration_seconds,
                result.summary(),
            )
        return result

    def _run_pass(self, now: datetime, result: ProcessingResult) -> None:
        live = live_boards(self._load_boards(), now)
        result.live_boards = len(live)
        if not live:
            logger.debug("[BINGO] No live boards")
            return

        data = self.load_board_data(live)
        activities = self._fetch_activities(live, now, result)
        result.fetched = len(activities)

        # Oldest first: the earliest qualifying activity gets the credit
        activities.sort(key=lambda a: a.timestamp_ms)

        resolver = EligibilityResolver(live, now, self._watermark)
        committer = CompletionCommitter(self._store)

        for activity in activities:
            board_ids = resolver.eligible_board_ids(activity)
            if not board_ids:
                continue

            result.processed += 1
            try:
                self._process_activity(activity, board_ids, data, committer, result)
            except Exception as e:
                logger.warning(
                    "[BINGO] Error processing '%s' by %s: %s",
                    activity.text,
                    activity.actor_name,
                    e,
                )
                result.errors.append({"activity": activity.text, "error": str(e)})

    def _process_activity(
        self,
        activity: Activity,
        board_ids: frozenset[int],
        data: BoardData,
        committer: CompletionCommitter,
        result: ProcessingResult,
    ) -> None:
        item_matches = match_items(activity.text, data.items_for(board_ids))
        if not item_matches:
            return

        team_matches = resolve_teams(activity.actor_name, data.teams_for(board_ids))
        if not team_matches:
            return

        outcome = committer.commit(activity, item_matches, team_matches)
        result.new_completions.extend(outcome.created)
        result.errors.extend(_error_dicts(outcome.errors))

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    def _load_boards(self) -> list[Board]:
        try:
            return self._store.list_boards()
        except Exception as e:
            raise ConfigurationError(f"Failed to load boards: {e}") from e

    def load_board_data(self, boards: list[Board]) -> BoardData:
        """Load items and teams (with rosters) for the given boards.

        Raises:
            ConfigurationError: If any store read fails
        """
        data = BoardData()
        try:
            for board in boards:
                data.items.extend(self._store.list_items(board.id))
                for team in self._store.list_teams(board.id):
                    members = tuple(self._store.list_team_members(team.id))
                    data.teams.append(replace(team, members=members))
        except Exception as e:
            raise ConfigurationError(f"Failed to load board data: {e}") from e

        logger.debug(
            "[BINGO] Loaded %d items and %d teams for %d boards",
            len(data.items),
            len(data.teams),
            len(boards),
        )
        return data

    # =========================================================================
    # FETCHING
    # =========================================================================

    def _fetch_activities(
        self,
        live: list[Board],
        now: datetime,
        result: ProcessingResult,
    ) -> list[Activity]:
        """Fetch clan and guest feeds in parallel.

        A failing source is recorded in result.fetch_failures and skipped.
        Results are merged in submission order (clan feed first, then guests
        in roster order) so that ties on timestamp sort deterministically.
        """
        try:
            guests = self._store.list_active_guests([b.id for b in live])
        except Exception as e:
            raise ConfigurationError(f"Failed to load guest members: {e}") from e

        hours_back = guest_lookback_hours(live, now, self._guest_lookback_default)
        if guests:
            logger.debug("[FETCH] Fetching %d guests, %dh back", len(guests), hours_back)

        fetched: dict[int, list[Activity]] = {}
        with ThreadPoolExecutor(max_workers=self._max_workers + 1) as executor:
            futures = {
                executor.submit(self._source.fetch_clan_activities, self._clan_activity_limit): (
                    0,
                    CLAN_SOURCE,
                )
            }
            for index, guest in enumerate(guests, start=1):
                future = executor.submit(
                    self._source.fetch_guest_activities, guest.display_name, hours_back
                )
                futures[future] = (index, guest.display_name)

            for future in as_completed(futures):
                index, source = futures[future]
                try:
                    fetched[index] = future.result()
                except Exception as e:
                    logger.warning("[FETCH] Failed to fetch activities for %s: %s", source, e)
                    result.fetch_failures.append({"source": source, "error": str(e)})

        activities = []
        for index in sorted(fetched):
            activities.extend(fetched[index])
        return activities

    # =========================================================================
    # DRY RUN
    # =========================================================================

    def test_activity(self, text: str, actor_name: str | None = None) -> DryRunResult:
        """Show what an activity line would complete on active boards.

        Considers every active board, started or not, and never writes.

        Args:
            text: Activity text to try
            actor_name: Optional player name to resolve teams for

        Returns:
            DryRunResult
        """
        active = [b for b in self._load_boards() if b.is_active]
        if not active:
            return DryRunResult()

        data = self.load_board_data(active)
        matches = match_items(text, data.items)
        teams = resolve_teams(actor_name, data.teams) if actor_name else []

        logger.info(
            "[BINGO] Dry run '%s'%s: %d item matches, %d teams",
            text[:80],
            f" by {actor_name}" if actor_name else "",
            len(matches),
            len(teams),
        )
        return DryRunResult(
            matches=matches,
            teams=teams,
            total_items=len(data.items),
            total_teams=len(data.teams),
        )


def _error_dicts(errors: list[CommitError]) -> list[dict]:
    return [e.to_dict() for e in errors]


def create_bingo_processor(db_factory: Callable | None = None) -> BingoActivityProcessor:
    """Build a processor wired to the SQLite store and HTTP feeds.

    Args:
        db_factory: Context manager factory yielding connections (defaults to get_db)
    """
    from clanbingo.database import SqliteBoardStore, get_db
    from clanbingo.providers import HttpActivitySource

    return BingoActivityProcessor(
        store=SqliteBoardStore(db_factory or get_db),
        source=HttpActivitySource(),
    )
