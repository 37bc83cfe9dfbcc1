"""Logging setup for the activity processor.

Every engine log line starts with a bracketed tag naming the stage it
comes from:

    [STARTUP]     process start and configuration
    [DB]          schema setup
    [FETCH]       clan feed and RuneMetrics requests
    [ELIGIBILITY] board windows and the watermark
    [MATCH]       activity-to-square matching (also CLASSIFY, EXCLUDE)
    [RESOLVE]     actor to team lookup
    [COMMIT]      completion writes
    [BINGO]       processing passes
    [SCHEDULER]   cron loop
    [SHUTDOWN]    process exit

setup_logging() attaches a console handler and a rotating file under
Config.LOG_DIR. With LOG_FORMAT=json each line is one JSON object and the
tag is split out into its own field so passes can be filtered by stage.
"""

import json
import logging
import re
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from clanbingo.config import VERSION, Config

LOG_FILE_NAME = "clanbingo.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"

# Per-request chatter from the HTTP stack drowns out the [FETCH] lines
_QUIET_LOGGERS = ("httpx", "httpcore")

_TAG = re.compile(r"^\[([A-Z]+)\]\s*")

# Handlers attached by setup_logging(), so a second call replaces only ours
_installed: list[logging.Handler] = []


class TaggedJSONFormatter(logging.Formatter):
    """One JSON object per record, with the [TAG] prefix as a field."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        tag = None
        if match := _TAG.match(message):
            tag = match.group(1)
            message = message[match.end():]

        payload = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "tag": tag,
            "message": message,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or Config.LOG_LEVEL or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def teardown_logging() -> None:
    """Detach and close the handlers added by setup_logging()."""
    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    level: str | int | None = None,
    log_dir: str | Path | None = None,
    json_format: bool | None = None,
    console: bool = True,
) -> Path:
    """Configure root logging for the processor.

    Calling again replaces the handlers from the previous call; handlers
    installed by anything else are left alone.

    Args:
        level: Console level name or number (default Config.LOG_LEVEL)
        log_dir: Directory for the rotating log file (default Config.LOG_DIR)
        json_format: JSON lines instead of text (default LOG_FORMAT == "json")
        console: Also log to stdout

    Returns:
        Path of the log file
    """
    teardown_logging()

    console_level = _resolve_level(level)
    directory = Path(log_dir or Config.LOG_DIR)
    if json_format is None:
        json_format = Config.LOG_FORMAT.lower() == "json"

    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILE_NAME
    formatter = TaggedJSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT)

    # The file keeps DEBUG so a missed completion can be traced afterwards
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    _installed.append(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        _installed.append(console_handler)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in _installed:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger("clanbingo")
    logger.info("[STARTUP] clanbingo %s", VERSION)
    logger.info("[STARTUP] Database: %s", Config.DATABASE_PATH)
    logger.info("[STARTUP] Clan feed: %s", Config.ACTIVITY_API_BASE_URL)
    logger.info("[STARTUP] RuneMetrics: %s", Config.RUNEMETRICS_BASE_URL)
    logger.info("[STARTUP] Schedule: %s", Config.PROCESS_CRON)
    logger.info(
        "[STARTUP] Logging %s to %s (console %s)",
        "json" if json_format else "text",
        log_file,
        logging.getLevelName(console_level),
    )
    return log_file
