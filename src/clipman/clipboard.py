#!/usr/bin/env python3
"""Wayland clipboard serving via wl-copy.

wl-copy keeps serving its input from a forked background process until
another client takes the selection. The process is started in its own
session so the served buffer outlives clipman, including when clipman runs
inside a short-lived terminal (``foot -e clipman pick``).

The module handles:
- Serving text to the clipboard or the primary selection
- Explicitly clearing the selection
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import TYPE_CHECKING

from clipman.errors import ToolExecutionError, ToolNotFoundError

if TYPE_CHECKING:
    from clipman.config import ClipmanConfig

logger = logging.getLogger(__name__)

# Executable used to serve and clear the selection.
WL_COPY: str = "wl-copy"

# MIME type declared for served text. Without it wl-copy guesses a type
# and some clients then refuse to paste.
TEXT_MIME_TYPE: str = "TEXT"


def _find_wl_copy() -> str:
    """Locate the wl-copy executable.

    Returns:
        Absolute path to wl-copy.

    Raises:
        ToolNotFoundError: If wl-copy is not on PATH.
    """
    binary = shutil.which(WL_COPY)
    if binary is None:
        raise ToolNotFoundError(f"couldn't find {WL_COPY}")
    return binary


def _target_args(config: ClipmanConfig) -> list[str]:
    return ["-p"] if config.primary else []


def serve_text(text: str, config: ClipmanConfig) -> None:
    """Serve text to the desktop clipboard through a detached wl-copy.

    Args:
        text: The history entry to expose.
        config: Runtime configuration; ``primary`` selects the target.

    Raises:
        ToolNotFoundError: If wl-copy is not installed.
        ToolExecutionError: If wl-copy fails to start serving.
    """
    binary = _find_wl_copy()
    args = [binary, *_target_args(config), "-t", TEXT_MIME_TYPE]
    logger.debug("Serving %d characters with %s", len(text), args)
    try:
        proc = subprocess.run(
            args,
            input=text.encode("utf-8"),
            stdout=subprocess.DEVNULL,
            start_new_session=True,
            check=False,
        )
    except OSError as e:
        raise ToolExecutionError(f"error running {WL_COPY}: {e}") from e
    if proc.returncode != 0:
        raise ToolExecutionError(
            f"error running {WL_COPY}: exit status {proc.returncode}"
        )


def clear_clipboard(config: ClipmanConfig) -> None:
    """Clear the served selection so no stale content lingers.

    Args:
        config: Runtime configuration; ``primary`` selects the target.

    Raises:
        ToolNotFoundError: If wl-copy is not installed.
        ToolExecutionError: If wl-copy reports a failure.
    """
    binary = _find_wl_copy()
    args = [binary, *_target_args(config), "-c"]
    logger.debug("Clearing selection with %s", args)
    try:
        proc = subprocess.run(args, stdout=subprocess.DEVNULL, check=False)
    except OSError as e:
        raise ToolExecutionError(f"error running {WL_COPY}: {e}") from e
    if proc.returncode != 0:
        raise ToolExecutionError(
            f"error running {WL_COPY} -c: exit status {proc.returncode}"
        )
