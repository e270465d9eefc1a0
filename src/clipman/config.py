#!/usr/bin/env python3
"""Runtime configuration shared by all clipman components.

The CLI collects global options into a ClipmanConfig and passes it down
explicitly; no component reads process-wide flags on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Default location of the persisted history.
DEFAULT_HISTPATH: str = "~/.local/share/clipman.json"


def expand_histpath(raw_path: str) -> str:
    """Expand a leading ``~`` in the history path to the user's home.

    Args:
        raw_path: Path as given on the command line.

    Returns:
        Path with the home directory substituted.
    """
    return os.path.expanduser(raw_path)


@dataclass(frozen=True)
class ClipmanConfig:
    """Global options for one clipman invocation.

    Attributes:
        histpath: Expanded path of the JSON history file.
        notify: Send desktop notifications when reporting errors.
        primary: Serve text to the primary selection instead of the clipboard.
        normalize: Normalize selector representations to Unicode NFC.
    """

    histpath: str = expand_histpath(DEFAULT_HISTPATH)
    notify: bool = False
    primary: bool = False
    normalize: bool = False
