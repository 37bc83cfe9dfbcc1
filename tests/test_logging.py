"""Tests for processor logging setup."""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from clanbingo.config import Config
from clanbingo.utilities.logging import TaggedJSONFormatter, setup_logging, teardown_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    teardown_logging()
    root.setLevel(level)


def _record(message: str, *args, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("clanbingo.consumers", level, __file__, 1, message, args, None)


def _ours(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if isinstance(h, RotatingFileHandler)]


# =============================================================================
# SETUP
# =============================================================================


class TestSetupLogging:
    def test_writes_startup_lines_to_file(self, tmp_path):
        log_file = setup_logging(log_dir=tmp_path / "logs", console=False)

        logging.getLogger("clanbingo.consumers").debug("[BINGO] Pass finished")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file == tmp_path / "logs" / "clanbingo.log"
        contents = log_file.read_text(encoding="utf-8")
        assert "[STARTUP] Database:" in contents
        assert "[BINGO] Pass finished" in contents

    def test_second_call_replaces_own_handlers(self, tmp_path):
        root = logging.getLogger()
        foreign = logging.NullHandler()
        root.addHandler(foreign)
        try:
            setup_logging(log_dir=tmp_path, console=False)
            setup_logging(log_dir=tmp_path, console=False)

            assert len(_ours(root)) == 1
            assert foreign in root.handlers
        finally:
            root.removeHandler(foreign)

    def test_teardown_removes_handlers(self, tmp_path):
        setup_logging(log_dir=tmp_path, console=False)
        teardown_logging()
        assert _ours(logging.getLogger()) == []

    def test_console_level_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Config, "LOG_LEVEL", "warning")
        setup_logging(log_dir=tmp_path)

        console = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert console[-1].level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, tmp_path):
        setup_logging(level="chatty", log_dir=tmp_path)
        console = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert console[-1].level == logging.INFO

    def test_http_loggers_quieted(self, tmp_path):
        setup_logging(log_dir=tmp_path, console=False)
        assert logging.getLogger("httpx").level == logging.WARNING


# =============================================================================
# JSON FORMAT
# =============================================================================


class TestTaggedJSONFormatter:
    def test_tag_split_from_message(self):
        line = TaggedJSONFormatter().format(_record("[FETCH] Clan feed returned %d activities", 12))
        data = json.loads(line)

        assert data["tag"] == "FETCH"
        assert data["message"] == "Clan feed returned 12 activities"
        assert data["logger"] == "clanbingo.consumers"
        assert data["level"] == "INFO"
        assert data["time"].endswith("+00:00")

    def test_untagged_message(self):
        data = json.loads(TaggedJSONFormatter().format(_record("plain line")))
        assert data["tag"] is None
        assert data["message"] == "plain line"

    def test_json_file_output(self, tmp_path):
        log_file = setup_logging(log_dir=tmp_path, json_format=True, console=False)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert lines
        assert all(line["tag"] == "STARTUP" for line in lines)
