"""Tests for the session (cursor) model.

The session owns the current directory.  Every path argument is
resolved against it, and only ``up`` and ``cd`` may move it.
"""

from pathlib import Path

import pytest

from py_fm.errors import MissingArgumentError, NotFoundError, WrongTypeError
from py_fm.session import DEFAULT_USERNAME, Session, default_start_directory


class TestSessionCreation:
    """Verify session construction."""

    def test_default_display_name(self, tmp_path: Path) -> None:
        """The display name should default to 'User'."""
        session = Session(current_directory=tmp_path)
        assert session.display_name == DEFAULT_USERNAME == "User"

    def test_start_is_made_absolute(self, tmp_path: Path) -> None:
        """A start directory with '..' should be normalised."""
        (tmp_path / "a").mkdir()
        session = Session(current_directory=tmp_path / "a" / "..")
        assert session.current_directory == tmp_path

    def test_rejects_missing_start(self, tmp_path: Path) -> None:
        """A nonexistent start directory should be refused."""
        with pytest.raises(NotFoundError):
            Session(current_directory=tmp_path / "nope")

    def test_rejects_file_start(self, tmp_path: Path) -> None:
        """A file cannot be the start directory."""
        target = tmp_path / "f.txt"
        target.write_text("x")
        with pytest.raises(WrongTypeError):
            Session(current_directory=target)

    def test_sessions_are_independent(self, tmp_path: Path) -> None:
        """Moving one session's cursor should not affect another."""
        (tmp_path / "sub").mkdir()
        first = Session(current_directory=tmp_path)
        second = Session(current_directory=tmp_path)
        first.change_directory("sub")
        assert second.current_directory == tmp_path

    def test_create_uses_given_start(self, tmp_path: Path) -> None:
        """create() should honour an explicit start directory."""
        session = Session.create(display_name="Ada", start=tmp_path)
        assert session.current_directory == tmp_path
        assert session.display_name == "Ada"


class TestDefaultStartDirectory:
    """Verify the default start directory."""

    def test_prefers_desktop(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The Desktop folder should be used when it exists."""
        (tmp_path / "Desktop").mkdir()
        monkeypatch.setattr(Path, "home", classmethod(lambda _cls: tmp_path))
        assert default_start_directory() == tmp_path / "Desktop"

    def test_falls_back_to_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a Desktop folder the home directory should be used."""
        monkeypatch.setattr(Path, "home", classmethod(lambda _cls: tmp_path))
        assert default_start_directory() == tmp_path


class TestResolve:
    """Verify path resolution against the cursor."""

    def test_relative_joins_cursor(self, tmp_path: Path) -> None:
        """A relative path should be joined onto the cursor."""
        session = Session(current_directory=tmp_path)
        assert session.resolve("a/b.txt") == tmp_path / "a" / "b.txt"

    def test_absolute_overrides_cursor(self, tmp_path: Path) -> None:
        """An absolute path should ignore the cursor."""
        session = Session(current_directory=tmp_path)
        other = tmp_path.parent
        assert session.resolve(str(other)) == other

    def test_dots_are_collapsed(self, tmp_path: Path) -> None:
        """'.' and '..' components should be collapsed."""
        session = Session(current_directory=tmp_path)
        assert session.resolve("./x/../y") == tmp_path / "y"

    def test_missing_argument(self, tmp_path: Path) -> None:
        """An empty or missing argument should raise."""
        session = Session(current_directory=tmp_path)
        with pytest.raises(MissingArgumentError):
            session.resolve(None)
        with pytest.raises(MissingArgumentError):
            session.resolve("")

    @pytest.mark.parametrize("raw", ["~", "~/f.txt", "~nosuchuser/x"])
    def test_tilde_is_not_expanded(self, tmp_path: Path, raw: str) -> None:
        """A leading '~' is an ordinary name under the cursor."""
        session = Session(current_directory=tmp_path)
        assert session.resolve(raw) == tmp_path / raw

    def test_start_tilde_is_not_expanded(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A start directory of '~' means the directory named '~'."""
        (tmp_path / "~").mkdir()
        monkeypatch.chdir(tmp_path)
        session = Session(current_directory=Path("~"))
        assert session.current_directory == tmp_path / "~"

    def test_child_stays_in_cursor(self, tmp_path: Path) -> None:
        """child() should place a bare name inside the cursor."""
        session = Session(current_directory=tmp_path)
        assert session.child("new.txt") == tmp_path / "new.txt"


class TestCursorMovement:
    """Verify up and change_directory."""

    def test_cd_then_up_restores(self, tmp_path: Path) -> None:
        """cd into a child then up should return to the start."""
        (tmp_path / "child").mkdir()
        session = Session(current_directory=tmp_path)
        session.change_directory("child")
        assert session.current_directory == tmp_path / "child"
        session.up()
        assert session.current_directory == tmp_path

    def test_up_at_root_is_noop(self) -> None:
        """up at the filesystem root should leave the cursor there."""
        root = Path(Path.cwd().anchor)
        session = Session(current_directory=root)
        session.up()
        assert session.current_directory == root

    def test_cd_missing_leaves_cursor(self, tmp_path: Path) -> None:
        """cd to a nonexistent path should fail without moving."""
        session = Session(current_directory=tmp_path)
        with pytest.raises(NotFoundError):
            session.change_directory("nope")
        assert session.current_directory == tmp_path

    def test_cd_file_leaves_cursor(self, tmp_path: Path) -> None:
        """cd to a file should fail without moving."""
        (tmp_path / "f.txt").write_text("x")
        session = Session(current_directory=tmp_path)
        with pytest.raises(WrongTypeError):
            session.change_directory("f.txt")
        assert session.current_directory == tmp_path

    def test_cd_parent_reference(self, tmp_path: Path) -> None:
        """cd .. should behave like up."""
        (tmp_path / "child").mkdir()
        session = Session(current_directory=tmp_path / "child")
        session.change_directory("..")
        assert session.current_directory == tmp_path
