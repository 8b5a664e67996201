"""File operations — the primitives behind every mutating shell command.

Each function is a single pass over a real filesystem primitive.  Data
is always moved in fixed-size chunks so arbitrarily large files can be
read, copied, hashed, and (de)compressed without loading them into
memory.

All functions take absolute ``Path`` objects (the shell resolves user
input against the cursor first) and raise ``ShellError`` subclasses.
Built-in ``OSError`` exceptions never escape: they are translated at
this boundary, the same way a kernel wraps its internal failures
before returning to user space.
"""

from __future__ import annotations

import contextlib
import hashlib
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, BinaryIO

import brotli

from py_fm.errors import (
    IOFailureError,
    NotFoundError,
    WrongTypeError,
    translate_os_error,
)

if TYPE_CHECKING:
    from pathlib import Path

CHUNK_SIZE = 64 * 1024
"""Bytes read per step when streaming a file."""


class FileType(StrEnum):
    """The kind of entry shown by ``ls``."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class DirEntry:
    """One row of a directory listing."""

    name: str
    kind: FileType


@contextmanager
def _os_errors() -> Iterator[None]:
    """Translate any ``OSError`` (or unusable path) raised in the block."""
    try:
        yield
    except OSError as exc:
        raise translate_os_error(exc) from exc
    except ValueError as exc:
        # e.g. an embedded NUL byte in the path
        raise IOFailureError(str(exc)) from exc


def _iter_chunks(stream: BinaryIO) -> Iterator[bytes]:
    """Yield successive chunks of *stream* until it is exhausted."""
    while chunk := stream.read(CHUNK_SIZE):
        yield chunk


def _require_file(path: Path) -> None:
    """Raise unless *path* is an existing regular file."""
    if not path.exists():
        msg = f"no such file: {path}"
        raise NotFoundError(msg)
    if not path.is_file():
        msg = f"not a regular file: {path}"
        raise WrongTypeError(msg)


def _refuse_same_file(src: Path, dest: Path) -> None:
    """Raise if *dest* is *src*; opening it for writing would empty the source."""
    if dest.exists() and dest.samefile(src):
        msg = f"source and destination are the same file: {src}"
        raise IOFailureError(msg)


def _require_directory(path: Path) -> None:
    """Raise unless *path* is an existing directory."""
    if not path.exists():
        msg = f"no such directory: {path}"
        raise NotFoundError(msg)
    if not path.is_dir():
        msg = f"not a directory: {path}"
        raise WrongTypeError(msg)


# -- Reading -----------------------------------------------------------------


def list_directory(path: Path) -> list[DirEntry]:
    """Return the direct children of *path*, directories first.

    Each group is sorted alphabetically (case-insensitively, ties broken
    by the exact name).  Entries that are neither a directory nor a
    regular file (sockets, broken symlinks) are left out.
    """
    directories: list[DirEntry] = []
    files: list[DirEntry] = []
    with _os_errors():
        for child in path.iterdir():
            if child.is_dir():
                directories.append(DirEntry(child.name, FileType.DIRECTORY))
            elif child.is_file():
                files.append(DirEntry(child.name, FileType.FILE))

    def _key(entry: DirEntry) -> tuple[str, str]:
        return entry.name.casefold(), entry.name

    return sorted(directories, key=_key) + sorted(files, key=_key)


def stream_file(path: Path, sink: BinaryIO) -> int:
    """Copy the bytes of *path* into *sink*; return the byte count."""
    _require_file(path)
    written = 0
    with _os_errors(), path.open("rb") as src:
        for chunk in _iter_chunks(src):
            sink.write(chunk)
            written += len(chunk)
    sink.flush()
    return written


def sha256_digest(path: Path) -> str:
    """Return the lowercase hex SHA-256 digest of the file at *path*."""
    _require_file(path)
    digest = hashlib.sha256()
    with _os_errors(), path.open("rb") as src:
        for chunk in _iter_chunks(src):
            digest.update(chunk)
    return digest.hexdigest()


# -- Mutating ----------------------------------------------------------------


def create_file(path: Path) -> None:
    """Create an empty file; an existing entry of any kind is an error."""
    with _os_errors(), path.open("xb"):
        pass


def rename_entry(src: Path, dest: Path) -> None:
    """Rename *src* to *dest*, refusing to replace an existing entry."""
    if not src.exists():
        msg = f"no such entry: {src}"
        raise NotFoundError(msg)
    if dest.exists():
        msg = f"destination already exists: {dest}"
        raise IOFailureError(msg)
    with _os_errors():
        src.rename(dest)


def copy_file(src: Path, dest_dir: Path) -> Path:
    """Copy the file *src* into *dest_dir*, keeping its base name.

    Returns:
        The path of the new copy.

    """
    _require_file(src)
    _require_directory(dest_dir)
    dest = dest_dir / src.name
    _refuse_same_file(src, dest)
    with _os_errors(), src.open("rb") as reader, dest.open("wb") as writer:
        shutil.copyfileobj(reader, writer, CHUNK_SIZE)
    return dest


def move_file(src: Path, dest_dir: Path) -> Path:
    """Copy *src* into *dest_dir*, then delete *src*.

    The source is only removed once the copy has completed.  If the
    removal itself fails the copy stays where it is and the error
    propagates; nothing is rolled back.
    """
    dest = copy_file(src, dest_dir)
    remove_file(src)
    return dest


def remove_file(path: Path) -> None:
    """Delete the file at *path*."""
    _require_file(path)
    with _os_errors():
        path.unlink()


# -- Compression -------------------------------------------------------------


def compress_file(src: Path, dest: Path) -> None:
    """Brotli-compress *src* into *dest* one chunk at a time."""
    _require_file(src)
    _refuse_same_file(src, dest)
    compressor = brotli.Compressor()
    with _os_errors(), src.open("rb") as reader, dest.open("wb") as writer:
        for chunk in _iter_chunks(reader):
            writer.write(compressor.process(chunk))
        writer.write(compressor.finish())


def decompress_file(src: Path, dest: Path) -> None:
    """Inverse of ``compress_file``.

    Raises:
        IOFailureError: If *src* is not a complete Brotli stream; the
            partial output is removed.

    """
    _require_file(src)
    _refuse_same_file(src, dest)
    decompressor = brotli.Decompressor()
    with _os_errors(), src.open("rb") as reader, dest.open("wb") as writer:
        try:
            for chunk in _iter_chunks(reader):
                writer.write(decompressor.process(chunk))
        except brotli.error:
            complete = False
        else:
            complete = decompressor.is_finished()
    if not complete:
        _discard(dest)
        msg = f"invalid or truncated compressed stream: {src}"
        raise IOFailureError(msg)


def _discard(path: Path) -> None:
    """Remove a partially written output file, if there is one."""
    with contextlib.suppress(OSError):
        path.unlink(missing_ok=True)
