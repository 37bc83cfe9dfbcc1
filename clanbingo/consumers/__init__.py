"""Consumer layer - the matching engine and its processing loop."""

from clanbingo.consumers.bingo_processor import (
    BingoActivityProcessor,
    DryRunResult,
    ProcessingResult,
    create_bingo_processor,
)
from clanbingo.consumers.completion import CompletionCommitter, NewCompletion
from clanbingo.consumers.eligibility import (
    EligibilityResolver,
    board_window,
    guest_lookback_hours,
    live_boards,
)
from clanbingo.consumers.scheduler import (
    CronScheduler,
    get_scheduler_status,
    start_bingo_scheduler,
    stop_bingo_scheduler,
)

__all__ = [
    "BingoActivityProcessor",
    "CompletionCommitter",
    "CronScheduler",
    "DryRunResult",
    "EligibilityResolver",
    "NewCompletion",
    "ProcessingResult",
    "board_window",
    "create_bingo_processor",
    "get_scheduler_status",
    "guest_lookback_hours",
    "live_boards",
    "start_bingo_scheduler",
    "stop_bingo_scheduler",
]
