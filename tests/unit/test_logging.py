"""Tests for the logging helpers."""

import logging

import pytest

from devpulse.adapters.logging import (
    configure_logging,
    get_logger,
    level_for_status,
    log_exception,
)

pytestmark = [pytest.mark.unit, pytest.mark.tier(0)]


class TestGetLogger:
    """Tests for get_logger()."""

    def test_module_names_stay_in_hierarchy(self) -> None:
        assert get_logger("devpulse.app").name == "devpulse.app"

    def test_foreign_names_are_nested_under_devpulse(self) -> None:
        assert get_logger("scripts.tool").name == "devpulse.scripts.tool"


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_level_from_name(self) -> None:
        root = configure_logging("debug")
        assert root.level == logging.DEBUG
        configure_logging("INFO")

    def test_repeated_calls_add_a_single_handler(self) -> None:
        configure_logging("INFO")
        root = configure_logging("WARNING")
        marked = [h for h in root.handlers if getattr(h, "_devpulse", False)]
        assert len(marked) == 1
        configure_logging("INFO")


class TestLevelForStatus:
    """Tests for level_for_status()."""

    @pytest.mark.parametrize(
        ("status", "level"),
        [
            (200, logging.INFO),
            (204, logging.INFO),
            (302, logging.INFO),
            (400, logging.WARNING),
            (404, logging.WARNING),
            (500, logging.ERROR),
            (503, logging.ERROR),
            (0, logging.INFO),
        ],
    )
    def test_status_code_mapping(self, status: int, level: int) -> None:
        assert level_for_status(status) == level


def test_log_exception_records_traceback(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("devpulse.tests")
    with caplog.at_level(logging.ERROR, logger="devpulse"):
        try:
            raise ValueError("boom")
        except ValueError:
            log_exception("Something failed", logger)

    record = caplog.records[-1]
    assert record.getMessage() == "Something failed"
    assert record.exc_info is not None
    assert record.exc_info[0] is ValueError
