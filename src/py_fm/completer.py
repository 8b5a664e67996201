"""Context-aware tab completer for the file manager shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from py_fm.sysinfo import FLAGS

if TYPE_CHECKING:
    from py_fm.shell import Shell

# Commands whose arguments are filesystem paths.
_PATH_COMMANDS: frozenset[str] = frozenset(
    ["cd", "cat", "rn", "cp", "mv", "rm", "hash", "compress", "decompress"]
)


class Completer:
    """Context-aware tab completer for the shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose commands and cursor are used to
                   generate completion candidates.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

        cmd = words[0]
        if cmd == "os":
            return sorted(flag for flag in FLAGS if flag.startswith(text))
        if cmd in _PATH_COMMANDS:
            return self._complete_paths(text)
        return []

    def _complete_paths(self, text: str) -> list[str]:
        """Complete paths relative to the cursor.

        Split the partial path into a directory and a name prefix, list
        the directory, and filter by prefix.  Directories get a
        trailing ``/`` suffix.
        """
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        base = self._shell.session.current_directory
        listing = base / directory if directory else base
        try:
            children = list(listing.iterdir())
        except OSError:
            return []

        candidates: list[str] = []
        for child in children:
            if child.name.startswith(prefix):
                full = f"{directory}{child.name}"
                if child.is_dir():
                    full += "/"
                candidates.append(full)
        return sorted(candidates)
