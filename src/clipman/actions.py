#!/usr/bin/env python3
"""Action handlers behind the clipman subcommands.

Besides dispatching to the history store and the selector, these handlers
keep the served clipboard consistent with the history: the last history
entry is the one wl-copy is serving, so removing it means serving its
predecessor, and removing everything means clearing the selection.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import click

from clipman.clipboard import serve_text
from clipman.history import persist_history, record_entry, remove_entry, wipe_history
from clipman.selector import select_entry

if TYPE_CHECKING:
    from clipman.config import ClipmanConfig

logger = logging.getLogger(__name__)


def store_action(
    history: list[str],
    text: str,
    config: ClipmanConfig,
    max_items: int,
    persist: bool,
    min_chars: int,
) -> list[str]:
    """Record new clipboard content.

    Args:
        history: Current history, oldest first.
        text: New clipboard content.
        config: Runtime configuration.
        max_items: Maximum history length; 0 means unbounded.
        persist: Re-serve the text after recording it.
        min_chars: Ignore texts shorter than this; disabled when <= 0.

    Returns:
        The resulting history.
    """
    if min_chars > 0 and len(text) < min_chars:
        logger.debug("Text shorter than %d characters, skipping", min_chars)
        return history
    return record_entry(history, text, max_items, config.histpath, config, persist)


def pick_action(
    history: list[str],
    config: ClipmanConfig,
    max_items: int,
    tool: str,
    tool_args: str,
    null: bool,
    fail_on_empty: bool,
) -> str:
    """Let the user pick an entry and serve it.

    Returns:
        The served entry, or "" if nothing was picked.
    """
    selection = select_entry(
        history, max_items, tool, "pick", tool_args, null, fail_on_empty, config.normalize
    )
    if selection:
        serve_text(selection, config)
    return selection


def clear_action(
    history: list[str],
    config: ClipmanConfig,
    max_items: int,
    tool: str | None,
    tool_args: str,
    null: bool,
    fail_on_empty: bool,
    clear_all: bool,
) -> list[str]:
    """Remove one picked entry, or everything, from history.

    Args:
        history: Current history, oldest first.
        config: Runtime configuration.
        max_items: Number of visible rows in the selector.
        tool: Selector name; unused with clear_all.
        tool_args: Extra selector arguments.
        null: Separate candidates with NUL.
        fail_on_empty: Exit with status 1 when nothing is picked.
        clear_all: Wipe the whole history without asking.

    Returns:
        The resulting history.
    """
    if clear_all:
        wipe_history(config.histpath, config)
        return []

    selection = select_entry(
        history, max_items, tool or "", "clear", tool_args, null, fail_on_empty, config.normalize
    )
    if not selection:
        return history

    if len(history) < 2:
        # The only entry was picked.
        wipe_history(config.histpath, config)
        return []

    if selection == history[-1]:
        # wl-copy is still serving the removed entry.
        serve_text(history[-2], config)

    updated = remove_entry(history, selection)
    persist_history(updated, config.histpath)
    return updated


def restore_action(history: list[str], config: ClipmanConfig) -> None:
    """Serve the newest history entry again, e.g. after a session restart."""
    if not history:
        click.echo("Nothing to restore")
        return
    serve_text(history[-1], config)


def show_history_action(history: list[str]) -> None:
    """Print the history as a JSON list."""
    if not history:
        click.echo("Nothing to show")
        return
    click.echo(json.dumps(history, ensure_ascii=False))
