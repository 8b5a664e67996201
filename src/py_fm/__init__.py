"""PyFM — an interactive file manager shell.

Re-exports public symbols so callers can write::

    from py_fm import Session, Shell
"""

from py_fm.errors import FailureKind, ShellError
from py_fm.session import Session
from py_fm.shell import CommandResult, Shell

__all__ = [
    "CommandResult",
    "FailureKind",
    "Session",
    "Shell",
    "ShellError",
]

__version__ = "0.1.0"
