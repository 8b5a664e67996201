"""Audit log for the file manager.

The shell only ever shows the user a generic ``Operation failed``; the
real reason goes here.  The log is an in-memory, append-only buffer of
structured entries, in the spirit of a kernel's ``dmesg`` ring:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — an append-only log with a minimum level and filtering,
  written to a text file when the session ends.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Entries below the minimum level are dropped on write**, so a
      quiet session does not accumulate DEBUG noise.
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """Return the level called *name* (case-insensitive).

        Raises:
            ValueError: If *name* is not a level.

        """
        try:
            return cls[name.upper()]
        except KeyError:
            msg = f"unknown log level: {name}"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The part of the program that produced it (e.g. "shell").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self, *, min_level: LogLevel = LogLevel.INFO) -> None:
        """Create an empty logger that keeps entries at *min_level* or above."""
        self._entries: list[LogEntry] = []
        self.min_level = min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry unless it is below the minimum level."""
        if level < self.min_level:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def dump(self, path: Path, *, source: str | None = None) -> int:
        """Append the entries to the text file at *path*, one per line.

        Args:
            path: File to append to; created if missing.
            source: If set, only write entries from this source.

        Returns:
            The number of entries written.

        """
        entries = self.filter(source=source)
        with path.open("a", encoding="utf-8") as sink:
            sink.writelines(f"{entry}\n" for entry in entries)
        return len(entries)
