#!/usr/bin/env python3
"""Bounded, duplicate-free clipboard history persisted as JSON.

The history is a plain list of strings, oldest first. The last element is
the entry currently served to the desktop clipboard. It is loaded once per
invocation, mutated at most once, and written back in full.

The module provides:
- load_history(): read the JSON list (missing file means empty history)
- record_entry(): add a new clipboard snapshot and re-serve it
- remove_entry(): drop every occurrence of a text
- persist_history(): atomic write via temp file and rename
- wipe_history(): clear the selection and delete the file
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import TYPE_CHECKING

from clipman.clipboard import clear_clipboard, serve_text
from clipman.errors import FormatError, HistoryIOError

if TYPE_CHECKING:
    from clipman.config import ClipmanConfig

logger = logging.getLogger(__name__)

# Permissions of the history file; clipboard content can be sensitive.
HISTORY_FILE_MODE: int = 0o600


def load_history(path: str) -> list[str]:
    """Load the history list from disk.

    Args:
        path: Path of the JSON history file.

    Returns:
        History entries, oldest first. Empty if the file does not exist.

    Raises:
        HistoryIOError: If the file exists but cannot be read.
        FormatError: If the content is not a JSON list of strings.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        return []
    except OSError as e:
        raise HistoryIOError(f"failure reading history file: {e}") from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise FormatError(f"failure parsing history: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
        raise FormatError("failure parsing history: expected a list of strings")
    logger.debug("Loaded %d history entries from %s", len(data), path)
    return data


def remove_entry(history: list[str], text: str) -> list[str]:
    """Return a copy of history without any occurrence of text."""
    return [s for s in history if s != text]


def record_entry(
    history: list[str],
    text: str,
    max_size: int,
    path: str,
    config: ClipmanConfig,
    persist: bool = True,
) -> list[str]:
    """Record a new clipboard snapshot as the newest history entry.

    Repeated notifications for the entry already on top are ignored, which
    also breaks the loop where serving an entry triggers another store.

    Args:
        history: Current history, oldest first.
        text: New clipboard content.
        max_size: Maximum history length; 0 means unbounded.
        path: Path of the JSON history file.
        config: Runtime configuration for serving.
        persist: Re-serve the text so it survives its source application.

    Returns:
        The updated history, or ``history`` itself when nothing changed.

    Raises:
        HistoryIOError: If the history cannot be written.
    """
    if not text:
        return history
    if history and history[-1] == text:
        logger.debug("Text already on top of history, skipping")
        return history

    updated = remove_entry(history, text)
    if max_size > 0 and len(updated) >= max_size:
        # Usually one entry, more if --max-items was lowered.
        updated = updated[len(updated) - max_size + 1:]
    updated.append(text)

    persist_history(updated, path)

    if persist:
        serve_text(text, config)

    return updated


def persist_history(history: list[str], path: str) -> None:
    """Write the full history atomically.

    The list is written to a temporary file in the target directory and
    renamed over the previous file, so a crash leaves the old file intact.

    Args:
        history: History entries, oldest first.
        path: Path of the JSON history file.

    Raises:
        HistoryIOError: If the file cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    payload = json.dumps(history, ensure_ascii=False).encode("utf-8")
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmpname = tempfile.mkstemp(
            dir=directory, prefix=os.path.basename(path) + "."
        )
        try:
            with os.fdopen(fd, "wb") as tf:
                tf.write(payload)
                tf.flush()
                os.fsync(tf.fileno())
            os.chmod(tmpname, HISTORY_FILE_MODE)
            os.replace(tmpname, path)
        except BaseException:
            os.unlink(tmpname)
            raise
    except OSError as e:
        raise HistoryIOError(f"error writing history: {e}") from e
    logger.debug("Wrote %d history entries to %s", len(history), path)


def wipe_history(path: str, config: ClipmanConfig) -> None:
    """Clear the served selection and delete the history file.

    Args:
        path: Path of the JSON history file.
        config: Runtime configuration for the clear command.

    Raises:
        ToolNotFoundError: If wl-copy is not installed.
        ToolExecutionError: If clearing the selection fails.
        HistoryIOError: If the file exists but cannot be removed.
    """
    clear_clipboard(config)
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise HistoryIOError(f"error removing history: {e}") from e
    logger.debug("Removed history file %s", path)
