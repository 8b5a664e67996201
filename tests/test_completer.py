"""Tests for the tab-completion engine.

The Completer's logic is pure — it analyses the input line and returns
candidate strings — so it can be tested without readline.
"""

from pathlib import Path
from unittest.mock import patch

from py_fm.completer import Completer
from py_fm.session import Session
from py_fm.shell import Shell


def _completer(root: Path) -> tuple[Shell, Completer]:
    """Create a shell rooted at *root* and a completer for it."""
    shell = Shell(session=Session(current_directory=root))
    return shell, Completer(shell)


class TestCommandCompletion:
    """Verify completion of command names (first word on the line)."""

    def test_empty_line_returns_all_commands(self, tmp_path: Path) -> None:
        """Pressing Tab on a blank line should list every command."""
        shell, completer = _completer(tmp_path)
        assert set(completer.completions("", "")) == set(shell.command_names)

    def test_partial_match(self, tmp_path: Path) -> None:
        """A partial prefix should return only matching commands."""
        _shell, completer = _completer(tmp_path)
        assert completer.completions("c", "c") == ["cat", "cd", "compress", "cp"]

    def test_no_match_returns_empty(self, tmp_path: Path) -> None:
        """An unrecognised prefix should return no candidates."""
        _shell, completer = _completer(tmp_path)
        assert completer.completions("zzz", "zzz") == []


class TestArgumentCompletion:
    """Verify completion of arguments."""

    def test_os_flags(self, tmp_path: Path) -> None:
        """'os --' should offer every flag."""
        _shell, completer = _completer(tmp_path)
        candidates = completer.completions("--", "os --")
        assert "--EOL" in candidates
        assert "--cpus" in candidates
        assert len(candidates) == 5

    def test_paths_relative_to_cursor(self, tmp_path: Path) -> None:
        """Path candidates come from the cursor; directories get a slash."""
        (tmp_path / "docs").mkdir()
        (tmp_path / "data.txt").write_text("")
        (tmp_path / "other").write_text("")
        _shell, completer = _completer(tmp_path)
        assert completer.completions("d", "cat d") == ["data.txt", "docs/"]

    def test_paths_in_subdirectory(self, tmp_path: Path) -> None:
        """A partial path with a slash lists that subdirectory."""
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "notes.md").write_text("")
        _shell, completer = _completer(tmp_path)
        assert completer.completions("docs/n", "cat docs/n") == ["docs/notes.md"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Completing inside a missing directory yields nothing."""
        _shell, completer = _completer(tmp_path)
        assert completer.completions("nope/x", "cd nope/x") == []

    def test_non_path_command(self, tmp_path: Path) -> None:
        """Commands without arguments offer no candidates."""
        (tmp_path / "file").write_text("")
        _shell, completer = _completer(tmp_path)
        assert completer.completions("", "ls ") == []


class TestReadlineCallback:
    """Verify the readline-facing callback."""

    def test_complete_iterates_candidates(self, tmp_path: Path) -> None:
        """complete() returns candidates by index, then None."""
        _shell, completer = _completer(tmp_path)
        with patch("py_fm.completer.readline.get_line_buffer", return_value="r"):
            assert completer.complete("r", 0) == "rm"
            assert completer.complete("r", 1) == "rn"
            assert completer.complete("r", 2) is None
