#!/usr/bin/env python3
"""
Unit tests for the external selector adapter.

Tests command templates, STDOUT dumps, exit status handling and recovery
of the chosen entry. subprocess.run and shutil.which are mocked.
"""
from unittest.mock import patch

import pytest

from conftest_subprocess import completed
from clipman.errors import (
    ConfigError,
    NoDataError,
    RecoveryError,
    ToolExecutionError,
    ToolNotFoundError,
)
from clipman.selector import DMENU_FONT, build_command, select_entry


def run_select(history, stdout=b"", returncode=0, tool="dmenu", tool_args="",
               null=False, fail_on_empty=False, normalize=False):
    """Run select_entry against a mocked selector process.

    Returns:
        Tuple of (result, mock for subprocess.run).
    """
    with patch("clipman.selector.shutil.which", return_value="/usr/bin/selector"), \
        patch("clipman.selector.subprocess.run") as mock_run:
        mock_run.return_value = completed(returncode, stdout)
        result = select_entry(
            history, 15, tool, "pick", tool_args, null, fail_on_empty, normalize
        )
    return result, mock_run


class TestBuildCommand:
    """Tests for build_command templates."""

    def test_dmenu(self) -> None:
        """Test dmenu gets bottom placement, font and line count."""
        assert build_command("dmenu", 10, "pick", "") == [
            "dmenu", "-b", "-fn", DMENU_FONT, "-l", "10",
        ]

    def test_bemenu(self) -> None:
        """Test bemenu gets prompt and list length."""
        assert build_command("bemenu", 5, "clear", "") == [
            "bemenu", "--prompt", "clear", "--list", "5",
        ]

    def test_rofi(self) -> None:
        """Test rofi runs in dmenu mode with prompt and lines."""
        assert build_command("rofi", 7, "pick", "") == [
            "rofi", "-p", "pick", "-dmenu", "-lines", "7",
        ]

    def test_wofi(self) -> None:
        """Test wofi disables its cache."""
        assert build_command("wofi", 7, "pick", "") == [
            "wofi", "-p", "pick", "--cache-file", "/dev/null", "--dmenu",
        ]

    def test_extra_args_are_shell_split_and_appended(self) -> None:
        """Test tool args use POSIX quoting and follow the template."""
        args = build_command("rofi", 7, "pick", "-theme 'my theme' -i")
        assert args[-3:] == ["-theme", "my theme", "-i"]

    def test_custom_uses_whole_command_line(self) -> None:
        """Test CUSTOM takes the command line from tool args only."""
        assert build_command("CUSTOM", 15, "pick", 'fzf --prompt "pick > " --read0') == [
            "fzf", "--prompt", "pick > ", "--read0",
        ]

    def test_custom_without_args_raises_config_error(self) -> None:
        """Test CUSTOM requires tool args."""
        with pytest.raises(ConfigError, match="missing tool args"):
            build_command("CUSTOM", 15, "pick", "")

    def test_custom_with_blank_args_raises_config_error(self) -> None:
        """Test CUSTOM with only whitespace is rejected."""
        with pytest.raises(ConfigError, match="missing tool args"):
            build_command("CUSTOM", 15, "pick", "   ")

    def test_unbalanced_quotes_raise_config_error(self) -> None:
        """Test bad quoting in tool args is a configuration error."""
        with pytest.raises(ConfigError, match="selector"):
            build_command("dmenu", 15, "pick", "-p 'oops")

    def test_unknown_tool_raises_config_error(self) -> None:
        """Test an unsupported tool name is rejected."""
        with pytest.raises(ConfigError, match="unsupported tool: fuzzel"):
            build_command("fuzzel", 15, "pick", "")


class TestSelectEntry:
    """Tests for select_entry."""

    def test_empty_history_raises_no_data_error(self) -> None:
        """Test selecting from an empty history fails."""
        with pytest.raises(NoDataError):
            select_entry([], 15, "dmenu", "pick", "", False, False, False)

    def test_stdout_prints_newest_first(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test STDOUT dumps escaped entries and selects nothing."""
        with patch("clipman.selector.subprocess.run") as mock_run:
            result = select_entry(["a", "b\nc"], 15, "STDOUT", "pick", "", False, False, False)
        assert result == ""
        assert capsys.readouterr().out == "b\\nc\na"
        mock_run.assert_not_called()

    def test_stdout_print0_keeps_raw_entries(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test STDOUT with NUL separation does not escape."""
        select_entry(["a", "b\nc"], 15, "STDOUT", "pick", "", True, False, False)
        assert capsys.readouterr().out == "b\nc\0a"

    def test_missing_executable_raises_tool_not_found(self) -> None:
        """Test an uninstalled selector is reported."""
        with patch("clipman.selector.shutil.which", return_value=None):
            with pytest.raises(ToolNotFoundError, match="dmenu is not installed"):
                select_entry(["a"], 15, "dmenu", "pick", "", False, False, False)

    def test_feeds_escaped_candidates_on_stdin(self) -> None:
        """Test candidates are newline-joined, newest first and escaped."""
        _, mock_run = run_select(["first", "second\nline"], stdout=b"first\n")
        args, kwargs = mock_run.call_args
        assert args[0][0] == "/usr/bin/selector"
        assert kwargs["input"] == b"second\\nline\nfirst"

    def test_print0_feeds_raw_candidates(self) -> None:
        """Test NUL separation passes entries unescaped."""
        _, mock_run = run_select(["first", "second\nline"], stdout=b"first", null=True)
        assert mock_run.call_args.kwargs["input"] == b"second\nline\0first"

    def test_candidates_are_cut_to_line_limit(self) -> None:
        """Test long entries are truncated in selector input."""
        _, mock_run = run_select(["z" * 5000], stdout=b"")
        assert mock_run.call_args.kwargs["input"] == b"z" * 1000

    def test_returns_original_entry(self) -> None:
        """Test the chosen line maps back to the unescaped entry."""
        result, _ = run_select(["keep", "multi\nline"], stdout=b"multi\\nline\n")
        assert result == "multi\nline"

    def test_returns_full_entry_for_truncated_line(self) -> None:
        """Test a truncated candidate recovers the full entry."""
        entry = "q" * 1500
        result, _ = run_select([entry], stdout=b"q" * 1000 + b"\n")
        assert result == entry

    def test_cut_character_entries_recover_the_picked_one(self) -> None:
        """Test entries sharing a prefix up to a cut character stay apart."""
        older = "a" * 999 + "\u00e9"
        newer = "a" * 999
        result, mock_run = run_select([older, newer], stdout=b"a" * 999 + b"\n")
        assert result == newer
        assert mock_run.call_args.kwargs["input"] == b"a" * 999 + b"\n" + b"a" * 999 + b"\xc3"
        result, _ = run_select([older, newer], stdout=b"a" * 999 + b"\xc3\n")
        assert result == older

    def test_selector_stderr_is_inherited(self) -> None:
        """Test the selector writes its stderr straight to ours."""
        _, mock_run = run_select(["a"], stdout=b"a\n")
        assert mock_run.call_args.kwargs.get("stderr") is None

    def test_strips_only_one_trailing_newline(self) -> None:
        """Test output keeps everything but a single final newline."""
        result, _ = run_select(["a\n", "b"], stdout=b"a\n\n", null=True)
        assert result == "a\n"

    @pytest.mark.parametrize("code", [1, 130])
    def test_no_selection_codes_return_empty(self, code: int) -> None:
        """Test cancel exit statuses are a normal empty selection."""
        result, _ = run_select(["a"], returncode=code)
        assert result == ""

    @pytest.mark.parametrize("code", [1, 130])
    def test_no_selection_codes_exit_when_strict(self, code: int) -> None:
        """Test strict mode exits with status 1 on cancel."""
        with pytest.raises(SystemExit) as exc_info:
            run_select(["a"], returncode=code, fail_on_empty=True)
        assert exc_info.value.code == 1

    def test_other_exit_status_raises_execution_error(self) -> None:
        """Test unexpected exit statuses are hard errors."""
        with pytest.raises(ToolExecutionError, match="exit status 2"):
            run_select(["a"], returncode=2)

    def test_empty_output_returns_empty(self) -> None:
        """Test zero-byte output with status 0 means no selection."""
        result, _ = run_select(["a"], stdout=b"")
        assert result == ""

    def test_empty_output_exits_when_strict(self) -> None:
        """Test zero-byte output exits in strict mode."""
        with pytest.raises(SystemExit) as exc_info:
            run_select(["a"], stdout=b"", fail_on_empty=True)
        assert exc_info.value.code == 1

    def test_unknown_output_raises_recovery_error(self) -> None:
        """Test output altered by the tool is a hard error."""
        with pytest.raises(RecoveryError, match="couldn't recover"):
            run_select(["a", "b"], stdout=b"c\n")

    def test_normalized_output_matches_normalized_candidate(self) -> None:
        """Test decomposed tool output recovers a composed entry."""
        result, _ = run_select(
            ["caf\u00e9"], stdout="cafe\u0301\n".encode("utf-8"), normalize=True
        )
        assert result == "caf\u00e9"

    def test_unnormalized_output_does_not_match(self) -> None:
        """Test without normalization equivalent forms do not match."""
        with pytest.raises(RecoveryError):
            run_select(["caf\u00e9"], stdout="cafe\u0301\n".encode("utf-8"))

    def test_custom_tool_resolves_first_word(self) -> None:
        """Test CUSTOM looks up the executable from the command line."""
        with patch("clipman.selector.shutil.which", return_value="/usr/bin/fzf") as mock_which, \
            patch("clipman.selector.subprocess.run") as mock_run:
            mock_run.return_value = completed(0, b"a\n")
            result = select_entry(
                ["a"], 15, "CUSTOM", "pick", "fzf --read0", True, False, False
            )
        assert result == "a"
        mock_which.assert_called_once_with("fzf")
        assert mock_run.call_args.args[0] == ["/usr/bin/fzf", "--read0"]
