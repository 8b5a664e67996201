"""The shell — command interpreter for the file manager.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler, and returns a
``CommandResult``.

Design choices:
    - **Returns results, not prints.**  Handlers return their output as
      a string and the REPL decides how to display it.  The one
      exception is ``cat``, which streams file bytes straight to the
      shell's binary output so large files never sit in memory.
    - **Command dispatch via a dict.**  Adding a command means writing
      a method and adding one dict entry.
    - **One place turns failures into results.**  Handlers raise
      ``ShellError`` subclasses; ``execute()`` is the only code that
      catches them.  The user sees a generic message, the audit log
      keeps the detail, and the loop never crashes on a bad command.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, TypeAlias

from py_fm import fileops, sysinfo
from py_fm.errors import (
    FailureKind,
    IOFailureError,
    MissingArgumentError,
    ShellError,
    UnknownCommandError,
    translate_os_error,
)
from py_fm.logging import Logger, LogLevel

if TYPE_CHECKING:
    from py_fm.session import Session

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

_LOG_SOURCE = "shell"


@dataclass(frozen=True)
class Command:
    """One parsed input line: a command name and its arguments."""

    name: str
    args: list[str]

    @classmethod
    def parse(cls, line: str) -> Command | None:
        """Split *line* on whitespace; return ``None`` for a blank line."""
        parts = line.split()
        if not parts:
            return None
        return cls(name=parts[0], args=parts[1:])


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command.

    Attributes:
        output: Text produced by a successful command (may be empty).
        failure: Why the command failed, or ``None`` on success.
        exit: True when the command asks the REPL to stop.

    """

    output: str = ""
    failure: FailureKind | None = None
    exit: bool = False

    @property
    def ok(self) -> bool:
        """Return True if the command succeeded."""
        return self.failure is None

    @property
    def message(self) -> str:
        """Return the text to show the user."""
        if self.failure is not None:
            return self.failure.user_message
        return self.output


class Shell:
    """Command interpreter operating on a session's cursor."""

    EXIT_COMMAND = ".exit"

    def __init__(
        self,
        *,
        session: Session,
        stdout: BinaryIO | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a shell bound to *session*.

        Args:
            session: The cursor and display name this shell works on.
            stdout: Binary stream ``cat`` writes to.  Defaults to the
                process's standard output at the time of the call.
            logger: Audit log; a fresh one is created when omitted.

        """
        self._session = session
        self._stdout = stdout
        self._logger = logger if logger is not None else Logger()

        # Command dispatch table — maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "up": self._cmd_up,
            "cd": self._cmd_cd,
            "ls": self._cmd_ls,
            "cat": self._cmd_cat,
            "add": self._cmd_add,
            "rn": self._cmd_rn,
            "cp": self._cmd_cp,
            "mv": self._cmd_mv,
            "rm": self._cmd_rm,
            "os": self._cmd_os,
            "hash": self._cmd_hash,
            "compress": self._cmd_compress,
            "decompress": self._cmd_decompress,
            self.EXIT_COMMAND: self._cmd_exit,
        }

    @property
    def session(self) -> Session:
        """Return the session this shell operates on."""
        return self._session

    @property
    def logger(self) -> Logger:
        """Return the audit log."""
        return self._logger

    @property
    def command_names(self) -> list[str]:
        """Return every command name, sorted."""
        return sorted(self._commands)

    def execute(self, line: str) -> CommandResult:
        """Parse and execute one line of input.

        Args:
            line: The raw input (e.g. ``"cd docs"``).

        Returns:
            The command's result.  Failures are reported through
            ``CommandResult.failure``, never raised.

        """
        command = Command.parse(line)
        if command is None:
            return CommandResult(failure=FailureKind.UNKNOWN_COMMAND)

        self._logger.log(LogLevel.INFO, line.strip(), source=_LOG_SOURCE)
        try:
            handler = self._commands.get(command.name)
            if handler is None:
                msg = f"unknown command: {command.name}"
                raise UnknownCommandError(msg)
            output = handler(command.args)
        except ShellError as exc:
            return self._failed(command, exc)
        except OSError as exc:
            return self._failed(command, translate_os_error(exc))
        except ValueError as exc:
            return self._failed(command, IOFailureError(str(exc)))

        if command.name == self.EXIT_COMMAND:
            return CommandResult(exit=True)
        return CommandResult(output=output)

    def _failed(self, command: Command, exc: ShellError) -> CommandResult:
        """Record *exc* in the audit log and wrap it as a failed result."""
        self._logger.log(
            LogLevel.ERROR,
            f"{command.name} failed ({exc.kind}): {exc}",
            source=_LOG_SOURCE,
        )
        return CommandResult(failure=exc.kind)

    def _binary_out(self) -> BinaryIO:
        """Return the stream ``cat`` should write to."""
        if self._stdout is not None:
            return self._stdout
        sys.stdout.flush()
        return sys.stdout.buffer

    @staticmethod
    def _require(args: list[str], count: int, usage: str) -> list[str]:
        """Return the first *count* args, or raise if any are missing."""
        if len(args) < count:
            msg = f"usage: {usage}"
            raise MissingArgumentError(msg)
        return args[:count]

    # -- Navigation ----------------------------------------------------------

    def _cmd_up(self, _args: list[str]) -> str:
        """Move the cursor to the parent directory."""
        target = self._session.up()
        self._logger.log(LogLevel.DEBUG, f"cursor -> {target}", source=_LOG_SOURCE)
        return ""

    def _cmd_cd(self, args: list[str]) -> str:
        """Move the cursor to a directory."""
        (path,) = self._require(args, 1, "cd <path>")
        target = self._session.change_directory(path)
        self._logger.log(LogLevel.DEBUG, f"cursor -> {target}", source=_LOG_SOURCE)
        return ""

    def _cmd_ls(self, _args: list[str]) -> str:
        """List the cursor's children as a table, directories first."""
        entries = fileops.list_directory(self._session.current_directory)
        index_width = max(len("Index"), len(str(len(entries))))
        name_width = max([len("Name"), *(len(e.name) for e in entries)])
        lines = [f"{'Index':<{index_width}}  {'Name':<{name_width}}  Type"]
        lines.extend(
            f"{i:<{index_width}}  {e.name:<{name_width}}  {e.kind}" for i, e in enumerate(entries)
        )
        return "\n".join(lines)

    # -- Basic file operations -----------------------------------------------

    def _cmd_cat(self, args: list[str]) -> str:
        """Stream a file's contents to standard output."""
        (path,) = self._require(args, 1, "cat <path>")
        fileops.stream_file(self._session.resolve(path), self._binary_out())
        return ""

    def _cmd_add(self, args: list[str]) -> str:
        """Create an empty file in the current directory."""
        (name,) = self._require(args, 1, "add <name>")
        fileops.create_file(self._session.child(name))
        return ""

    def _cmd_rn(self, args: list[str]) -> str:
        """Rename an entry; the new name lands in the current directory."""
        path, new_name = self._require(args, 2, "rn <path> <new_name>")
        fileops.rename_entry(self._session.resolve(path), self._session.child(new_name))
        return ""

    def _cmd_cp(self, args: list[str]) -> str:
        """Copy a file into a directory."""
        path, dest_dir = self._require(args, 2, "cp <path> <dest_dir>")
        fileops.copy_file(self._session.resolve(path), self._session.resolve(dest_dir))
        return ""

    def _cmd_mv(self, args: list[str]) -> str:
        """Move a file into a directory (copy, then delete the source)."""
        path, dest_dir = self._require(args, 2, "mv <path> <dest_dir>")
        fileops.move_file(self._session.resolve(path), self._session.resolve(dest_dir))
        return ""

    def _cmd_rm(self, args: list[str]) -> str:
        """Delete a file."""
        (path,) = self._require(args, 1, "rm <path>")
        fileops.remove_file(self._session.resolve(path))
        return ""

    # -- Host information ----------------------------------------------------

    def _cmd_os(self, args: list[str]) -> str:
        """Print host information selected by a flag."""
        return sysinfo.describe(args[0] if args else None)

    # -- Hashing and compression ---------------------------------------------

    def _cmd_hash(self, args: list[str]) -> str:
        """Print the SHA-256 digest of a file."""
        (path,) = self._require(args, 1, "hash <path>")
        return fileops.sha256_digest(self._session.resolve(path))

    def _cmd_compress(self, args: list[str]) -> str:
        """Brotli-compress a file."""
        src, dest = self._require(args, 2, "compress <src> <dest>")
        fileops.compress_file(self._session.resolve(src), self._session.resolve(dest))
        return ""

    def _cmd_decompress(self, args: list[str]) -> str:
        """Decompress a Brotli file."""
        src, dest = self._require(args, 2, "decompress <src> <dest>")
        fileops.decompress_file(self._session.resolve(src), self._session.resolve(dest))
        return ""

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return ""
