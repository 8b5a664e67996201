"""Command-line entry point.

Usage:
    py-fm --username=Alice
    py-fm --start-dir /srv/projects --log-level debug --log-file fm.log

Options can also be supplied through ``PY_FM_USERNAME``,
``PY_FM_START_DIR`` and ``PY_FM_LOG_FILE``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from py_fm import repl
from py_fm.logging import Logger, LogLevel
from py_fm.session import DEFAULT_USERNAME, Session
from py_fm.shell import Shell

__all__ = ["app", "main"]

app = typer.Typer(
    name="py-fm",
    help="Interactive file manager shell",
    add_completion=False,
)


@app.command()
def start(
    username: str = typer.Option(
        DEFAULT_USERNAME,
        "--username",
        "-u",
        envvar="PY_FM_USERNAME",
        help="Name used in the greeting and farewell",
    ),
    start_dir: Optional[Path] = typer.Option(  # noqa: UP045
        None,
        "--start-dir",
        "-d",
        envvar="PY_FM_START_DIR",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Initial directory (default: Desktop, else home)",
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Minimum audit log level: debug, info, warning or error",
    ),
    log_file: Optional[Path] = typer.Option(  # noqa: UP045
        None,
        "--log-file",
        envvar="PY_FM_LOG_FILE",
        dir_okay=False,
        resolve_path=True,
        help="Append the audit log to this file when the session ends",
    ),
) -> None:
    """Start the interactive file manager."""
    try:
        level = LogLevel.parse(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    session = Session.create(
        display_name=username or DEFAULT_USERNAME,
        start=start_dir,
    )
    shell = Shell(session=session, logger=Logger(min_level=level))
    repl.install_completer(shell)
    try:
        code = repl.run(shell)
    finally:
        if log_file is not None:
            shell.logger.dump(log_file)
    raise typer.Exit(code=code)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
