"""Tests for CLI logging configuration."""
import io
import logging
import sys
from collections.abc import Generator

import pytest

from clipman.main_logging import DEBUG_FORMAT, DEFAULT_FORMAT, configure_logging


@pytest.fixture
def clipman_logger() -> Generator[logging.Logger, None, None]:
    """Yield the clipman logger and drop handlers added by the test."""
    logger = logging.getLogger("clipman")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_default_format_and_level(clipman_logger: logging.Logger) -> None:
    """Test non-verbose logging shows warnings in CLI error style."""
    configure_logging(False)
    assert clipman_logger.level == logging.WARNING
    assert len(clipman_logger.handlers) == 1
    assert clipman_logger.handlers[0].formatter._fmt == DEFAULT_FORMAT


def test_reconfigure_switches_format(clipman_logger: logging.Logger) -> None:
    """Test a later verbose call replaces the handler and its format."""
    configure_logging(False)
    configure_logging(True)
    assert clipman_logger.level == logging.DEBUG
    assert len(clipman_logger.handlers) == 1
    assert clipman_logger.handlers[0].formatter._fmt == DEBUG_FORMAT


def test_reconfigure_binds_current_stderr(
    clipman_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test each call writes to the stderr in effect at that time."""
    configure_logging(False)
    stream = io.StringIO()
    monkeypatch.setattr(sys, "stderr", stream)
    configure_logging(False)
    clipman_logger.warning("late message")
    assert stream.getvalue() == "clipman: late message\n"
