"""Session state — the cursor and the name of the person using the shell.

A session is the only mutable state the file manager owns.  It holds
the **cursor** (the current directory every relative path is resolved
against) and the display name used in the greeting and farewell.

Each ``Session`` is an independent value, so tests can create as many
as they like without touching the real working directory of the
process (``os.chdir`` is never called).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from py_fm.errors import MissingArgumentError, NotFoundError, WrongTypeError

DEFAULT_USERNAME = "User"


def default_start_directory() -> Path:
    """Return the directory a new session starts in.

    The user's ``Desktop`` folder when there is one, otherwise the
    home directory.
    """
    home = Path.home()
    desktop = home / "Desktop"
    return desktop if desktop.is_dir() else home


@dataclass
class Session:
    """The cursor plus the display name for one run of the shell.

    Attributes:
        current_directory: Absolute path of an existing directory.
        display_name: Name shown in the greeting and farewell banners.

    """

    current_directory: Path
    display_name: str = DEFAULT_USERNAME

    def __post_init__(self) -> None:
        """Normalise the starting directory and check it exists."""
        start = _normalise(Path(self.current_directory))
        if not start.exists():
            msg = f"start directory does not exist: {start}"
            raise NotFoundError(msg)
        if not start.is_dir():
            msg = f"start directory is not a directory: {start}"
            raise WrongTypeError(msg)
        self.current_directory = start

    @classmethod
    def create(
        cls, *, display_name: str = DEFAULT_USERNAME, start: Path | None = None
    ) -> Session:
        """Create a session, defaulting to the desktop (or home) folder."""
        return cls(
            current_directory=start if start is not None else default_start_directory(),
            display_name=display_name,
        )

    def resolve(self, raw: str | None) -> Path:
        """Resolve a path argument against the cursor.

        Relative arguments are joined onto the cursor, absolute ones
        replace it; ``.`` and ``..`` are collapsed lexically.

        Raises:
            MissingArgumentError: If *raw* is missing or empty.

        """
        if not raw:
            msg = "path argument required"
            raise MissingArgumentError(msg)
        return _normalise(self.current_directory / raw)

    def child(self, name: str | None) -> Path:
        """Return *name* placed directly inside the cursor directory."""
        if not name:
            msg = "name argument required"
            raise MissingArgumentError(msg)
        return _normalise(self.current_directory / name)

    def up(self) -> Path:
        """Move the cursor to its parent; at the root this does nothing."""
        self.current_directory = self.current_directory.parent
        return self.current_directory

    def change_directory(self, raw: str | None) -> Path:
        """Move the cursor to *raw* if it names an existing directory.

        The cursor is left untouched on any failure.

        Raises:
            MissingArgumentError: If no path was given.
            NotFoundError: If the path does not exist.
            WrongTypeError: If the path is not a directory.

        """
        target = self.resolve(raw)
        if not target.exists():
            msg = f"no such directory: {target}"
            raise NotFoundError(msg)
        if not target.is_dir():
            msg = f"not a directory: {target}"
            raise WrongTypeError(msg)
        self.current_directory = target
        return target


def _normalise(path: Path) -> Path:
    """Return an absolute path with ``.`` and ``..`` collapsed."""
    return Path(os.path.normpath(os.path.abspath(path)))
