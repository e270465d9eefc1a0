#!/usr/bin/env python3
"""Exception types raised by clipman.

Every error carries an ``urgency`` used when reporting it through the
desktop notifier. Only ``NoDataError`` is informational; everything else
is a hard failure.
"""


class ClipmanError(Exception):
    """Base class for all clipman failures."""

    urgency: str = "critical"


class HistoryIOError(ClipmanError):
    """History file exists but cannot be read, or cannot be written."""


class FormatError(ClipmanError):
    """History file content is not a JSON list of strings."""


class ConfigError(ClipmanError):
    """Required configuration is missing or malformed."""


class ToolNotFoundError(ClipmanError):
    """An external executable could not be located on PATH."""


class ToolExecutionError(ClipmanError):
    """An external tool exited with an unexpected status."""


class RecoveryError(ClipmanError):
    """Selector output does not map back to any history entry."""


class NoDataError(ClipmanError):
    """A selection was attempted on an empty history."""

    urgency = "normal"
