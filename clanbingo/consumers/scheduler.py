"""Background scheduler for bingo processing.

Uses cron expressions for scheduling. Every tick runs one
BingoActivityProcessor pass; a tick that lands while the previous pass is
still running is skipped by the processor's own guard.
"""

import logging
import threading
import time
from datetime import datetime

from croniter import croniter

from clanbingo.consumers.bingo_processor import BingoActivityProcessor

logger = logging.getLogger(__name__)


class CronScheduler:
    """Background scheduler using cron expressions.

    Usage:
        scheduler = CronScheduler(processor, "* * * * *")  # Every minute
        scheduler.start()
        # ... application runs ...
        scheduler.stop()
    """

    def __init__(
        self,
        processor: BingoActivityProcessor,
        cron_expression: str = "* * * * *",
        run_on_start: bool = True,
    ):
        """Initialize the scheduler.

        Args:
            processor: Processor whose pass runs on every tick
            cron_expression: Cron expression (e.g., "* * * * *" for every minute)
            run_on_start: Whether to run a pass immediately on start
        """
        self._processor = processor
        self._cron_expression = cron_expression
        self._run_on_start = run_on_start

        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._running = False
        self._last_run: datetime | None = None
        self._next_run: datetime | None = None
        self._last_result: dict | None = None

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._running and self._thread is not None and self._thread.is_alive()

    @property
    def last_run(self) -> datetime | None:
        return self._last_run

    @property
    def next_run(self) -> datetime | None:
        return self._next_run

    @property
    def last_result(self) -> dict | None:
        """Result of the most recent pass, as a dict."""
        return self._last_result

    @property
    def cron_expression(self) -> str:
        return self._cron_expression

    def start(self) -> bool:
        """Start the scheduler.

        Returns:
            True if started, False if already running or the expression is invalid
        """
        if self.is_running:
            logger.warning("[SCHEDULER] Already running")
            return False

        try:
            croniter(self._cron_expression)
        except (KeyError, ValueError) as e:
            logger.error("[SCHEDULER] Invalid cron expression '%s': %s", self._cron_expression, e)
            return False

        self._stop_event.clear()
        self._running = True
        self._thread = threading.Thread(
            target=self._run_loop,
            name="bingo-scheduler",
            daemon=True,
        )
        self._thread.start()
        logger.info("[SCHEDULER] Started (expression: %s)", self._cron_expression)
        return True

    def stop(self, timeout: float = 30.0) -> bool:
        """Stop the scheduler gracefully.

        Args:
            timeout: Maximum seconds to wait for thread to stop

        Returns:
            True if stopped, False if timeout
        """
        if not self.is_running:
            return True

        logger.info("[SCHEDULER] Stopping...")
        self._stop_event.set()
        self._running = False

        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("[SCHEDULER] Thread did not stop in time")
                return False

        logger.info("[SCHEDULER] Stopped")
        return True

    def run_once(self) -> dict:
        """Run one pass now (for testing/manual trigger).

        Returns:
            Dict with pass results
        """
        return self._run_tasks()

    def _run_loop(self) -> None:
        """Main scheduler loop - runs in background thread."""
        if self._run_on_start:
            try:
                self._run_tasks()
            except Exception as e:
                logger.exception("[SCHEDULER] Error in initial run: %s", e)

        while not self._stop_event.is_set():
            cron = croniter(self._cron_expression, datetime.now())
            self._next_run = cron.get_next(datetime)

            wait_seconds = (self._next_run - datetime.now()).total_seconds()
            logger.debug(
                "[SCHEDULER] Next run at %s (%.0fs)",
                self._next_run.strftime("%Y-%m-%d %H:%M:%S"),
                wait_seconds,
            )

            # Wait until next run time (checking stop event every second)
            while wait_seconds > 0 and not self._stop_event.is_set():
                time.sleep(min(1.0, wait_seconds))
                wait_seconds = (self._next_run - datetime.now()).total_seconds()

            if self._stop_event.is_set():
                return

            try:
                self._run_tasks()
            except Exception as e:
                logger.exception("[SCHEDULER] Error in scheduled run: %s", e)

    def _run_tasks(self) -> dict:
        self._last_run = datetime.now()
        result = self._processor.process_activities()

        if result.skipped:
            logger.info("[SCHEDULER] Previous pass still running, tick skipped")
        elif not result.success:
            logger.warning("[SCHEDULER] Pass failed: %s", result.error)

        self._last_result = result.to_dict()
        self._last_result["completed_at"] = datetime.now().isoformat()
        return self._last_result


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

_scheduler: CronScheduler | None = None


def start_bingo_scheduler(
    processor: BingoActivityProcessor,
    cron_expression: str | None = None,
    run_on_start: bool = True,
) -> bool:
    """Start the global bingo scheduler.

    Args:
        processor: Processor to run on every tick
        cron_expression: Cron expression (None = PROCESS_CRON setting)
        run_on_start: Whether to run a pass immediately

    Returns:
        True if started, False if already running or invalid
    """
    global _scheduler

    from clanbingo.config import get_process_cron

    if _scheduler and _scheduler.is_running:
        logger.warning("[SCHEDULER] Already running")
        return False

    _scheduler = CronScheduler(
        processor=processor,
        cron_expression=cron_expression or get_process_cron(),
        run_on_start=run_on_start,
    )
    return _scheduler.start()


def stop_bingo_scheduler(timeout: float = 30.0) -> bool:
    """Stop the global bingo scheduler.

    Args:
        timeout: Maximum seconds to wait

    Returns:
        True if stopped
    """
    global _scheduler

    if not _scheduler:
        return True

    result = _scheduler.stop(timeout)
    _scheduler = None
    return result


def is_scheduler_running() -> bool:
    """Check if the global scheduler is running."""
    return _scheduler is not None and _scheduler.is_running


def get_scheduler_status() -> dict:
    """Get status of the global scheduler."""
    if not _scheduler:
        return {"running": False}

    return {
        "running": _scheduler.is_running,
        "cron_expression": _scheduler.cron_expression,
        "last_run": _scheduler.last_run.isoformat() if _scheduler.last_run else None,
        "next_run": _scheduler.next_run.isoformat() if _scheduler.next_run else None,
        "last_result": _scheduler.last_result,
    }
