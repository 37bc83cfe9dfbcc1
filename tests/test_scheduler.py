"""Tests for the cron scheduler around the processor."""

from unittest.mock import MagicMock

import pytest

from clanbingo.consumers import scheduler as scheduler_module
from clanbingo.consumers.bingo_processor import ProcessingResult
from clanbingo.consumers.scheduler import (
    CronScheduler,
    get_scheduler_status,
    is_scheduler_running,
    start_bingo_scheduler,
    stop_bingo_scheduler,
)


@pytest.fixture
def processor():
    mock = MagicMock()
    mock.process_activities.return_value = ProcessingResult(live_boards=1, fetched=3, processed=2)
    return mock


@pytest.fixture(autouse=True)
def reset_global_scheduler():
    yield
    stop_bingo_scheduler(timeout=5.0)
    scheduler_module._scheduler = None


class TestCronScheduler:
    def test_run_once(self, processor):
        scheduler = CronScheduler(processor)
        result = scheduler.run_once()

        processor.process_activities.assert_called_once()
        assert result["success"]
        assert result["fetched"] == 3
        assert "completed_at" in result
        assert scheduler.last_result is result
        assert scheduler.last_run is not None

    def test_skipped_pass_reported(self, processor):
        processor.process_activities.return_value = ProcessingResult(skipped=True)
        result = CronScheduler(processor).run_once()
        assert result["skipped"]

    def test_invalid_cron_expression(self, processor):
        scheduler = CronScheduler(processor, "not a cron")
        assert not scheduler.start()
        assert not scheduler.is_running

    def test_start_and_stop(self, processor):
        scheduler = CronScheduler(processor, "0 0 1 1 *", run_on_start=False)

        assert scheduler.start()
        assert scheduler.is_running
        assert not scheduler.start()

        assert scheduler.stop(timeout=5.0)
        assert not scheduler.is_running
        processor.process_activities.assert_not_called()

    def test_stop_when_not_running(self, processor):
        assert CronScheduler(processor).stop()


class TestModuleFunctions:
    def test_status_when_stopped(self):
        assert get_scheduler_status() == {"running": False}
        assert not is_scheduler_running()

    def test_start_status_stop(self, processor):
        assert start_bingo_scheduler(processor, "0 0 1 1 *", run_on_start=False)
        assert is_scheduler_running()
        assert not start_bingo_scheduler(processor, "0 0 1 1 *", run_on_start=False)

        status = get_scheduler_status()
        assert status["running"]
        assert status["cron_expression"] == "0 0 1 1 *"
        assert status["last_run"] is None

        assert stop_bingo_scheduler(timeout=5.0)
        assert not is_scheduler_running()

    def test_invalid_expression(self, processor):
        assert not start_bingo_scheduler(processor, "61 * * * *")
