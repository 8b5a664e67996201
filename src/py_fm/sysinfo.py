"""Host information reported by the ``os`` command.

One function per flag; ``describe()`` maps a flag onto its report.
CPU clock speeds come from ``psutil``; the CPU model name is read from
``/proc/cpuinfo`` where it exists and from ``platform`` otherwise.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
from collections.abc import Callable
from pathlib import Path

import psutil

from py_fm.errors import MissingArgumentError, UnknownFlagError

_CPUINFO = Path("/proc/cpuinfo")
_MHZ_PER_GHZ = 1000


def end_of_line() -> str:
    """Return the platform line ending, quoted (e.g. ``"\\n"``)."""
    return json.dumps(os.linesep)


def cpu_models() -> list[str]:
    """Return the model name of each logical CPU, in core order."""
    count = psutil.cpu_count(logical=True) or os.cpu_count() or 1
    names: list[str] = []
    try:
        for line in _CPUINFO.read_text().splitlines():
            key, _, value = line.partition(":")
            if key.strip() == "model name":
                names.append(value.strip())
    except OSError:
        names = []
    fallback = platform.processor() or "unknown"
    if len(names) < count:
        names.extend([names[-1] if names else fallback] * (count - len(names)))
    return names[:count]


def cpu_speeds_mhz(count: int) -> list[float]:
    """Return the current clock speed of each CPU in MHz (0.0 if unknown)."""
    try:
        freqs = psutil.cpu_freq(percpu=True)
    except (NotImplementedError, OSError, AttributeError):
        freqs = []
    speeds = [freq.current for freq in freqs or []]
    if not speeds:
        return [0.0] * count
    if len(speeds) < count:
        speeds.extend([speeds[-1]] * (count - len(speeds)))
    return speeds[:count]


def cpus() -> str:
    """Return the CPU count followed by one line per core."""
    models = cpu_models()
    speeds = cpu_speeds_mhz(len(models))
    lines = [f"Total CPUs: {len(models)}"]
    lines.extend(
        f"CPU {index}: {model}, {speed / _MHZ_PER_GHZ:.2f} GHz"
        for index, (model, speed) in enumerate(zip(models, speeds, strict=True))
    )
    return "\n".join(lines)


def home_directory() -> str:
    """Return the current user's home directory."""
    return str(Path.home())


def username() -> str:
    """Return the login name reported by the operating system."""
    return getpass.getuser()


def architecture() -> str:
    """Return the CPU architecture (``x86_64``, ``arm64``, ...)."""
    return platform.machine()


# Flag → report function for the ``os`` command.
FLAGS: dict[str, Callable[[], str]] = {
    "--EOL": end_of_line,
    "--cpus": cpus,
    "--homedir": home_directory,
    "--username": username,
    "--architecture": architecture,
}


def describe(flag: str | None) -> str:
    """Return the report for one ``os`` flag.

    Raises:
        MissingArgumentError: If no flag was given.
        UnknownFlagError: If the flag is not one of ``FLAGS``.

    """
    if not flag:
        msg = "os requires a flag"
        raise MissingArgumentError(msg)
    report = FLAGS.get(flag)
    if report is None:
        msg = f"unknown os flag: {flag}"
        raise UnknownFlagError(msg)
    return report()
