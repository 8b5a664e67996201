"""Error taxonomy for shell commands.

Every command handler signals failure by raising a ``ShellError``
subclass.  The shell catches them in exactly one place (the dispatcher)
and turns them into a ``CommandResult`` — the user only ever sees one of
two generic messages, while the full detail goes to the audit log.

Kinds:
    - **MissingArgument** — a required argument was not supplied.
    - **NotFound** — the path does not exist.
    - **WrongType** — a directory was given where a file was expected,
      or the other way round.
    - **IOFailure** — permissions, devices, broken streams, existing
      targets: anything else the operating system refuses.
    - **UnknownCommand** / **UnknownFlag** — input the shell does not
      understand.
"""

from enum import StrEnum


class FailureKind(StrEnum):
    """Tag identifying why a command failed."""

    MISSING_ARGUMENT = "missing-argument"
    NOT_FOUND = "not-found"
    WRONG_TYPE = "wrong-type"
    IO_FAILURE = "io-failure"
    UNKNOWN_COMMAND = "unknown-command"
    UNKNOWN_FLAG = "unknown-flag"

    @property
    def user_message(self) -> str:
        """Return the generic message shown to the user for this kind."""
        if self in (FailureKind.UNKNOWN_COMMAND, FailureKind.UNKNOWN_FLAG):
            return INVALID_INPUT
        return OPERATION_FAILED


INVALID_INPUT = "Invalid input"
OPERATION_FAILED = "Operation failed"


class ShellError(Exception):
    """Base class for every failure a command handler can raise."""

    kind: FailureKind = FailureKind.IO_FAILURE


class MissingArgumentError(ShellError):
    """A required command argument is missing."""

    kind = FailureKind.MISSING_ARGUMENT


class NotFoundError(ShellError):
    """The referenced path does not exist."""

    kind = FailureKind.NOT_FOUND


class WrongTypeError(ShellError):
    """The path exists but is the wrong kind of entry."""

    kind = FailureKind.WRONG_TYPE


class IOFailureError(ShellError):
    """The operating system rejected the operation."""

    kind = FailureKind.IO_FAILURE


class UnknownCommandError(ShellError):
    """The command name is not in the dispatch table."""

    kind = FailureKind.UNKNOWN_COMMAND


class UnknownFlagError(ShellError):
    """The ``os`` command received a flag it does not support."""

    kind = FailureKind.UNKNOWN_FLAG


def translate_os_error(exc: OSError) -> ShellError:
    """Map a built-in ``OSError`` onto the shell's error taxonomy.

    Args:
        exc: The exception raised by the operating system.

    Returns:
        The matching ``ShellError``, carrying the original text so the
        audit log can record it.

    """
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(str(exc))
    if isinstance(exc, IsADirectoryError | NotADirectoryError):
        return WrongTypeError(str(exc))
    return IOFailureError(str(exc))
