#!/usr/bin/env python3
"""Error reporting through logging and desktop notifications.

clipman usually runs without a visible terminal (bound to a key, or from
``wl-paste --watch``), so errors can optionally be surfaced with
notify-send as well as on stderr.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clipman.config import ClipmanConfig

logger = logging.getLogger(__name__)

# Application name shown in notifications.
APP_NAME: str = "Clipman"

# notify-send urgency levels mapped to log levels.
URGENCY_LEVELS: dict[str, int] = {
    "low": logging.INFO,
    "normal": logging.WARNING,
    "critical": logging.ERROR,
}


def report(message: str, urgency: str, config: ClipmanConfig) -> None:
    """Log a message and optionally show it as a desktop notification.

    A missing or failing notifier is logged but never raised, so the
    original message is still reported on stderr.

    Args:
        message: Human readable message.
        urgency: One of "low", "normal" or "critical".
        config: Runtime configuration; ``notify`` enables notifications.
    """
    logger.log(URGENCY_LEVELS.get(urgency, logging.ERROR), "%s", message)
    if not config.notify:
        return

    binary = shutil.which("notify-send")
    if binary is None:
        logger.warning("notify-send not found, cannot send notification")
        return
    try:
        subprocess.run(
            [binary, "-a", APP_NAME, "-u", urgency, message],
            stdout=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning("Failed to send notification: %s", e)
