"""Run the bingo activity processor.

    python -m clanbingo                          # scheduler, until Ctrl+C
    python -m clanbingo --once                   # a single pass
    python -m clanbingo --test "..." --actor X   # dry run, nothing written
"""

import argparse
import logging
import threading

from clanbingo.config import VERSION, get_process_cron
from clanbingo.consumers import (
    create_bingo_processor,
    start_bingo_scheduler,
    stop_bingo_scheduler,
)
from clanbingo.database import init_db
from clanbingo.utilities.logging import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="clanbingo", description="Clan bingo activity processor")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--once", action="store_true", help="run a single processing pass and exit")
    parser.add_argument("--test", metavar="TEXT", help="dry-run an activity line against active boards")
    parser.add_argument("--actor", metavar="NAME", help="player name for --test")
    parser.add_argument("--cron", help="cron expression (default: PROCESS_CRON)")
    return parser.parse_args(argv)


def _run_dry(processor, text: str, actor: str | None) -> int:
    result = processor.test_activity(text, actor)
    print(f"{len(result.matches)} of {result.total_items} squares match:")
    for match in result.matches:
        print(f"  [board {match.item.board_id}] {match.item.item_name} - {match.display}")
    if actor:
        print(f"{actor} is on {len(result.teams)} of {result.total_teams} teams:")
        for team_match in result.teams:
            role = "guest" if team_match.is_guest else "member"
            print(f"  [board {team_match.team.board_id}] {team_match.team.team_name} ({role})")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    setup_logging()
    init_db()
    processor = create_bingo_processor()

    if args.test:
        return _run_dry(processor, args.test, args.actor)

    if args.once:
        result = processor.process_activities()
        logger.info("[BINGO] %s", result.summary())
        return 0 if result.success else 1

    if not start_bingo_scheduler(processor, args.cron or get_process_cron()):
        return 1

    stop = threading.Event()
    try:
        while not stop.wait(1.0):
            pass
    except KeyboardInterrupt:
        logger.info("[SHUTDOWN] Interrupted")
    finally:
        stop_bingo_scheduler()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
