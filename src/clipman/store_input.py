#!/usr/bin/env python3
"""Read the clipboard payload handed to ``clipman store`` on stdin.

``wl-paste --watch clipman store`` pipes every new clipboard content to a
fresh clipman process. Line endings are kept as-is unless CRLF
normalization is requested.
"""

from __future__ import annotations

from typing import BinaryIO

from clipman.errors import HistoryIOError


def drop_cr(data: bytes) -> bytes:
    """Turn CRLF line endings into LF.

    Only a carriage return directly before a line feed, or at the very end
    of the data, is removed. Lone carriage returns inside a line are kept.

    Args:
        data: Raw clipboard bytes.

    Returns:
        The bytes with CRLF normalized to LF.
    """
    lines = data.split(b"\n")
    return b"\n".join(line[:-1] if line.endswith(b"\r") else line for line in lines)


def read_clipboard_text(stream: BinaryIO, unix: bool) -> str:
    """Read all of stream and decode it as clipboard text.

    Args:
        stream: Binary input, normally ``sys.stdin.buffer``.
        unix: Normalize CRLF line endings to LF.

    Returns:
        Decoded text; invalid UTF-8 sequences are replaced.

    Raises:
        HistoryIOError: If reading the stream fails.
    """
    try:
        data = stream.read()
    except OSError as e:
        raise HistoryIOError("Couldn't get input from stdin.") from e

    if unix:
        data = drop_cr(data)
    return data.decode("utf-8", errors="replace")
