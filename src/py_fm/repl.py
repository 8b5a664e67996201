"""Interactive REPL (Read-Eval-Print Loop) for the file manager.

The REPL is the terminal interface.  It greets the user and enters the
classic loop:

    1. **Read** — display a prompt and read one line.
    2. **Eval** — pass the line to ``shell.execute()``.
    3. **Print** — display the result, then the current directory.
    4. **Loop** — repeat until ``.exit``, Ctrl+C, or Ctrl+D.

This module keeps the I/O loop separate from the shell logic.  The
shell is fully testable (returns results, no prompting); the REPL is the
thin wrapper that connects it to ``stdin``/``stdout``.  ``run()`` takes
its input and output functions as arguments so tests can drive it with
a scripted list of lines.
"""

import readline
from collections.abc import Callable
from pathlib import Path

from py_fm.completer import Completer
from py_fm.errors import INVALID_INPUT
from py_fm.shell import Shell

PROMPT = "> "


def format_greeting(display_name: str) -> str:
    """Return the banner printed when the file manager starts."""
    return f"Welcome to the File Manager, {display_name}!"


def format_farewell(display_name: str) -> str:
    """Return the banner printed when the file manager exits."""
    return f"Thank you for using File Manager, {display_name}, goodbye!"


def format_location(current_directory: Path) -> str:
    """Return the line printed after every command."""
    return f"You are currently in {current_directory}"


def install_completer(shell: Shell) -> Completer:
    """Wire tab completion for *shell* into readline."""
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")
    return completer


def run(
    shell: Shell,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Run the interactive loop until the user leaves.

    Handles:
    - The greeting and the current-directory line after every command.
    - ``.exit``, Ctrl+C and Ctrl+D, all of which print the farewell.
    - Input lines that cannot be decoded, reported as invalid input.

    Args:
        shell: The shell that executes each line.
        read_line: Called with the prompt; returns one line of input.
        write: Called with each line of output.

    Returns:
        The process exit status (always 0).

    """
    session = shell.session
    write(format_greeting(session.display_name))
    write(format_location(session.current_directory))

    try:
        while True:
            try:
                line = read_line(PROMPT)
            except EOFError:
                # Ctrl+D
                write("")
                break
            except UnicodeDecodeError:
                # One undecodable line; later lines can still be read.
                write(INVALID_INPUT)
                write(format_location(session.current_directory))
                continue

            result = shell.execute(line)
            if result.exit:
                break
            if result.message:
                write(result.message)
            write(format_location(session.current_directory))

    except KeyboardInterrupt:
        # Ctrl+C
        write("")

    write(format_farewell(session.display_name))
    return 0
