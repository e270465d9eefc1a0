#!/usr/bin/env python3
"""
Presentation encoding of history entries for external selectors.

Line-oriented pickers (dmenu, rofi, fzf...) can only show one line per
candidate and some of them cap line length. Entries are therefore escaped
and truncated before being shown, and a guide maps every displayed
representation back to the full original entry.

When two entries end up with the same representation, the one inserted
later into the guide (the older history entry) wins.
"""
import unicodedata

# Escapes applied in order. Literal backslash sequences are doubled first
# so they stay distinguishable from escaped control characters.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\n", "\\\\n"),
    ("\\t", "\\\\t"),
    ("\\r", "\\\\r"),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ("\r", "\\r"),
)

# Codec error handler for text exchanged with selectors. Cut characters
# travel as raw bytes and decode back to the same surrogate escapes.
SELECTOR_ERRORS: str = "surrogateescape"


def normalize_text(text: str) -> str:
    """
    Normalize text to Unicode Normalization Form C.

    Args:
        text: Text to normalize.

    Returns:
        The composed (NFC) form of text.
    """
    return unicodedata.normalize("NFC", text)


def escape_entry(text: str) -> str:
    """
    Escape newlines, tabs and carriage returns so text fits on one line.

    Args:
        text: Original history entry.

    Returns:
        Single-line representation of text.
    """
    for old, new in _ESCAPES:
        text = text.replace(old, new)
    return text


def truncate_bytes(text: str, max_len: int) -> str:
    """
    Cut text to at most max_len UTF-8 bytes.

    The cut is byte-exact. A multi-byte character straddling the limit
    keeps its leading bytes as surrogate escapes, so entries that differ
    only past a character boundary still get distinct representations, and
    the bytes a selector echoes back decode to the same string.

    Args:
        text: Text to truncate.
        max_len: Maximum size in bytes.

    Returns:
        The truncated text.
    """
    encoded = text.encode("utf-8", SELECTOR_ERRORS)
    if len(encoded) <= max_len:
        return text
    return encoded[:max_len].decode("utf-8", SELECTOR_ERRORS)


def encode_history(
    history: list[str], max_len: int, escape: bool, normalize: bool
) -> tuple[list[str], dict[str, str]]:
    """
    Build selector representations and the guide to recover originals.

    Args:
        history: History entries, oldest first.
        max_len: Maximum representation size in bytes; 0 disables cutting.
        escape: Escape control characters to keep entries on one line.
        normalize: Normalize representations to NFC.

    Returns:
        Representations newest first, and a mapping from each
        representation to its original entry.
    """
    representations: list[str] = []
    guide: dict[str, str] = {}

    for original in reversed(history):
        representation = original
        if escape:
            representation = escape_entry(representation)
        if max_len > 0:
            representation = truncate_bytes(representation, max_len)
        if normalize:
            representation = normalize_text(representation)

        guide[representation] = original
        representations.append(representation)

    return representations, guide
