#!/usr/bin/env python3
"""Drive an external line-based selector to pick a history entry.

Supported tools are dmenu, bemenu, rofi and wofi with built-in argument
templates, CUSTOM where the user supplies the whole command line, and
STDOUT which dumps the history instead of asking for a choice.

Exit statuses 1 (dmenu/rofi: nothing selected; fzf: no match) and 130
(fzf: cancelled) mean the user made no selection. wofi exits 0 with empty
output in that case.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import sys

from clipman.errors import (
    ConfigError,
    NoDataError,
    RecoveryError,
    ToolExecutionError,
    ToolNotFoundError,
)
from clipman.guide import SELECTOR_ERRORS, encode_history, normalize_text

logger = logging.getLogger(__name__)

# Tool name that prints the history instead of running a selector.
STDOUT_TOOL: str = "STDOUT"

# Tool name for a user-supplied selector command line.
CUSTOM_TOOL: str = "CUSTOM"

# All accepted values for --tool.
TOOLS: tuple[str, ...] = ("wofi", "bemenu", CUSTOM_TOOL, "dmenu", "rofi", STDOUT_TOOL)

# Exit statuses meaning "no selection" rather than failure.
NO_SELECTION_CODES: frozenset[int] = frozenset({1, 130})

# Per-line byte limit for selector input; dmenu chokes above ~1200.
MAX_LINE_BYTES: int = 1000

DMENU_FONT: str = "-misc-dejavu sans mono-medium-r-normal--17-120-100-100-m-0-iso8859-16"


def _split_args(tool_args: str) -> list[str]:
    """Split a user-supplied argument string with POSIX shell rules.

    Raises:
        ConfigError: On unbalanced quotes or a dangling escape.
    """
    try:
        return shlex.split(tool_args)
    except ValueError as e:
        raise ConfigError(f"selector: {e}") from e


def build_command(tool: str, max_items: int, prompt: str, tool_args: str) -> list[str]:
    """Build the argv used to run a selector tool.

    Args:
        tool: One of the supported tool names other than STDOUT.
        max_items: Number of visible rows.
        prompt: Prompt label shown by the tool.
        tool_args: Extra arguments, or the full command line for CUSTOM.

    Returns:
        Argument vector; the first element is the program name.

    Raises:
        ConfigError: If the tool is unknown, CUSTOM lacks arguments, or the
            arguments cannot be split.
    """
    if tool == "dmenu":
        args = ["dmenu", "-b", "-fn", DMENU_FONT, "-l", str(max_items)]
    elif tool == "bemenu":
        args = ["bemenu", "--prompt", prompt, "--list", str(max_items)]
    elif tool == "rofi":
        args = ["rofi", "-p", prompt, "-dmenu", "-lines", str(max_items)]
    elif tool == "wofi":
        args = ["wofi", "-p", prompt, "--cache-file", "/dev/null", "--dmenu"]
    elif tool == CUSTOM_TOOL:
        if not tool_args:
            raise ConfigError("missing tool args for CUSTOM tool")
        args = _split_args(tool_args)
        if not args:
            raise ConfigError("missing tool args for CUSTOM tool")
        return args
    else:
        raise ConfigError(f"unsupported tool: {tool}")

    if tool_args:
        args.extend(_split_args(tool_args))
    return args


def _no_selection(fail_on_empty: bool) -> str:
    if fail_on_empty:
        sys.exit(1)
    return ""


def select_entry(
    history: list[str],
    max_items: int,
    tool: str,
    prompt: str,
    tool_args: str,
    null: bool,
    fail_on_empty: bool,
    normalize: bool,
) -> str:
    """Let the user choose a history entry through an external tool.

    Args:
        history: History entries, oldest first.
        max_items: Number of visible rows in the selector.
        tool: Selector name; see TOOLS.
        prompt: Prompt label for tools that show one.
        tool_args: Extra arguments, or the full command line for CUSTOM.
        null: Separate candidates with NUL instead of newline. Entries are
            then passed unescaped.
        fail_on_empty: Exit the process with status 1 when nothing is chosen.
        normalize: Normalize candidates and tool output to NFC.

    Returns:
        The chosen original entry, or "" when nothing was chosen (and
        always for STDOUT).

    Raises:
        NoDataError: If history is empty.
        ConfigError: If the tool configuration is invalid.
        ToolNotFoundError: If the selector executable is missing.
        ToolExecutionError: If the selector fails.
        RecoveryError: If the selector output matches no candidate.
    """
    if not history:
        raise NoDataError("nothing to show: no data available")

    sep = "\0" if null else "\n"

    if tool == STDOUT_TOOL:
        representations, _ = encode_history(history, 0, not null, normalize)
        sys.stdout.write(sep.join(representations))
        sys.stdout.flush()
        return ""

    args = build_command(tool, max_items, prompt, tool_args)
    binary = shutil.which(args[0])
    if binary is None:
        raise ToolNotFoundError(f"{args[0]} is not installed")

    representations, guide = encode_history(history, MAX_LINE_BYTES, not null, normalize)
    logger.debug("Running selector %s with %d candidates", args, len(representations))

    try:
        proc = subprocess.run(
            [binary, *args[1:]],
            input=sep.join(representations).encode("utf-8", SELECTOR_ERRORS),
            stdout=subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        raise ToolExecutionError(f"error running {args[0]}: {e}") from e

    if proc.returncode in NO_SELECTION_CODES:
        logger.debug("%s exited with %d: no selection", args[0], proc.returncode)
        return _no_selection(fail_on_empty)
    if proc.returncode != 0:
        raise ToolExecutionError(f"{args[0]}: exit status {proc.returncode}")

    output = proc.stdout
    if not output:
        return _no_selection(fail_on_empty)

    if output.endswith(b"\n"):
        output = output[:-1]
    chosen = output.decode("utf-8", SELECTOR_ERRORS)
    if normalize:
        chosen = normalize_text(chosen)

    try:
        return guide[chosen]
    except KeyError:
        raise RecoveryError("couldn't recover original string") from None
