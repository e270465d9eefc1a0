"""CLI handling for clipman.

This module provides the command-line interface for clipman, handling
argument parsing via click, logging configuration, and dispatching to the
action handlers. Every option can also be set through a CLIPMAN_*
environment variable (e.g. CLIPMAN_HISTPATH, CLIPMAN_PICK_TOOL).

Usage:
    wl-paste -t text --watch clipman store [--max-items N] [--no-persist]
    clipman pick --tool TOOL [--tool-args ARGS] [--print0]
    clipman clear (--tool TOOL | --all)
    clipman restore
    clipman show-history
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from clipman.config import DEFAULT_HISTPATH, ClipmanConfig, expand_histpath
from clipman.errors import ClipmanError
from clipman.history import load_history
from clipman.main_logging import configure_logging
from clipman.main_options import MutuallyExclusiveOption
from clipman.notify import report
from clipman.selector import TOOLS

__version__ = "1.6.2"

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "auto_envvar_prefix": "CLIPMAN",
}


def _fail(config: ClipmanConfig, error: ClipmanError) -> NoReturn:
    """Report an error with its urgency and exit with status 1."""
    report(str(error), error.urgency, config)
    sys.exit(1)


def _load(config: ClipmanConfig) -> list[str]:
    try:
        return load_history(config.histpath)
    except ClipmanError as e:
        _fail(config, e)


def _max_items_option(help_text: str):
    return click.option(
        "--max-items", default=15, show_default=True, type=int, help=help_text
    )


def _selector_options(func):
    """Attach the options shared by the selector-driven commands."""
    func = click.option(
        "--err-on-no-selection",
        is_flag=True,
        help="Exit 1 when there is no selection",
    )(func)
    func = click.option(
        "--print0",
        is_flag=True,
        help="Separate items using NULL; recommended if your tool supports --read0 or similar",
    )(func)
    func = click.option(
        "-T",
        "--tool-args",
        default="",
        help="Extra arguments to pass to the --tool",
    )(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-v", "--version", prog_name="clipman")
@click.option(
    "--histpath",
    default=DEFAULT_HISTPATH,
    show_default=True,
    help="Path of history file",
)
@click.option(
    "--notify",
    is_flag=True,
    help="Send desktop notifications on errors",
)
@click.option(
    "--primary",
    is_flag=True,
    help="Serve item to the primary clipboard",
)
@click.option(
    "--normalize",
    is_flag=True,
    help="Normalize selector items and output to Unicode NFC",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
@click.pass_context
def main(
    ctx: click.Context,
    histpath: str,
    notify: bool,
    primary: bool,
    normalize: bool,
    verbose: bool,
) -> None:
    """A clipboard manager for Wayland."""
    configure_logging(verbose)
    ctx.obj = ClipmanConfig(
        histpath=expand_histpath(histpath),
        notify=notify,
        primary=primary,
        normalize=normalize,
    )


@main.command()
@_max_items_option("history size")
@click.option(
    "-P",
    "--no-persist",
    is_flag=True,
    help="Don't persist a copy buffer after a program exits",
)
@click.option(
    "--min-char",
    default=-1,
    show_default=True,
    type=int,
    help="Minimum number of characters before storing",
)
@click.option(
    "--unix",
    is_flag=True,
    help="Normalize line endings to LF",
)
@click.pass_obj
def store(
    config: ClipmanConfig, max_items: int, no_persist: bool, min_char: int, unix: bool
) -> None:
    """Record clipboard events (run as argument to `wl-paste --watch`)."""
    from clipman.actions import store_action
    from clipman.store_input import read_clipboard_text

    history = _load(config)
    try:
        text = read_clipboard_text(click.get_binary_stream("stdin"), unix)
        store_action(history, text, config, max_items, not no_persist, min_char)
    except ClipmanError as e:
        _fail(config, e)


@main.command()
@_max_items_option("scrollview length")
@click.option(
    "-t",
    "--tool",
    required=True,
    type=click.Choice(TOOLS),
    help="Which selector to use",
)
@_selector_options
@click.pass_obj
def pick(
    config: ClipmanConfig,
    max_items: int,
    tool: str,
    tool_args: str,
    print0: bool,
    err_on_no_selection: bool,
) -> None:
    """Pick an item from clipboard history."""
    from clipman.actions import pick_action

    history = _load(config)
    try:
        pick_action(history, config, max_items, tool, tool_args, print0, err_on_no_selection)
    except ClipmanError as e:
        _fail(config, e)


@main.command()
@_max_items_option("scrollview length")
@click.option(
    "-t",
    "--tool",
    type=click.Choice(TOOLS),
    cls=MutuallyExclusiveOption,
    not_required_if=["clear_all"],
    help="Which selector to use",
)
@click.option(
    "-a",
    "--all",
    "clear_all",
    is_flag=True,
    cls=MutuallyExclusiveOption,
    not_required_if=["tool"],
    help="Remove all items",
)
@_selector_options
@click.pass_obj
def clear(
    config: ClipmanConfig,
    max_items: int,
    tool: str | None,
    clear_all: bool,
    tool_args: str,
    print0: bool,
    err_on_no_selection: bool,
) -> None:
    """Remove item/s from history."""
    from clipman.actions import clear_action

    if not tool and not clear_all:
        raise click.UsageError("Either --tool or --all must be specified")

    history = _load(config)
    try:
        clear_action(
            history, config, max_items, tool, tool_args, print0, err_on_no_selection, clear_all
        )
    except ClipmanError as e:
        _fail(config, e)


@main.command()
@click.pass_obj
def restore(config: ClipmanConfig) -> None:
    """Serve the last recorded item from history."""
    from clipman.actions import restore_action

    history = _load(config)
    try:
        restore_action(history, config)
    except ClipmanError as e:
        _fail(config, e)


@main.command("show-history")
@click.pass_obj
def show_history(config: ClipmanConfig) -> None:
    """Show all items from history."""
    from clipman.actions import show_history_action

    show_history_action(_load(config))
