"""
Tests for logging configuration.
"""

import logging

import pytest

from userapi.core.logging import ColoredFormatter, configure_logging


def _record(level=logging.INFO, msg="Test message"):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


class TestConfigureLogging:
    def test_single_handler_installed(self):
        configure_logging(level="INFO")
        configure_logging(level="INFO")

        assert len(logging.getLogger().handlers) == 1

    def test_level_applied(self):
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_plain_formatter_when_not_colored(self):
        configure_logging(level="INFO", format="%(message)s", colored=False)

        formatter = logging.getLogger().handlers[0].formatter
        assert not isinstance(formatter, ColoredFormatter)
        assert formatter.format(_record()) == "Test message"


class TestColoredFormatter:
    def test_level_name_colored(self):
        formatted = ColoredFormatter("%(levelname)s").format(_record(logging.ERROR))
        assert formatted == "\033[31mERROR\033[0m"

    def test_record_left_untouched(self):
        record = _record(logging.WARNING)
        ColoredFormatter("%(levelname)s").format(record)
        assert record.levelname == "WARNING"
