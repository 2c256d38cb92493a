"""Filesystem query collaborator used to build listing snapshots.

``scan_directory`` never raises for I/O problems; it returns
``(entries, scan_error)`` instead.
Entries whose ``lstat`` fails are skipped; no partial entry is stored.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import stat
from pathlib import Path
from typing import Protocol

from .types import DirEntry, entry_from_stat

logger = logging.getLogger(__name__)

PATTERN_CHARS = frozenset("*?[")


class FileSystem(Protocol):
    """Minimal filesystem surface consumed by listing sessions."""

    def list_names(self, directory: Path) -> list[str]:
        """Return child names of ``directory``; raise ``OSError`` on failure."""
        ...

    def lstat(self, path: Path) -> os.stat_result:
        """Return metadata for ``path`` without following symlinks."""
        ...

    def stat(self, path: Path) -> os.stat_result:
        """Return metadata for ``path`` following symlinks."""
        ...

    def read_link(self, path: Path) -> str:
        """Return the raw symlink target of ``path``."""
        ...


class LocalFileSystem:
    """``FileSystem`` backed by the host operating system."""

    def list_names(self, directory: Path) -> list[str]:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries]

    def lstat(self, path: Path) -> os.stat_result:
        return os.lstat(path)

    def stat(self, path: Path) -> os.stat_result:
        return os.stat(path)

    def read_link(self, path: Path) -> str:
        return os.readlink(path)


def is_file_pattern(path: Path) -> bool:
    """Return whether the last component of ``path`` is a shell pattern."""
    return any(ch in PATTERN_CHARS for ch in path.name)


def is_directory(fs: FileSystem, path: Path) -> bool:
    """Return whether ``path`` resolves to a directory, ``False`` on error."""
    try:
        return stat.S_ISDIR(fs.stat(path).st_mode)
    except OSError:
        return False


def split_listing_target(fs: FileSystem, path: Path) -> tuple[Path, str | None]:
    """Split a listing target into ``(directory, pattern)``.

    Directories list everything (``pattern`` is ``None``); anything else is
    treated as a pattern over its parent directory.
    """
    if is_directory(fs, path):
        return path, None
    return path.parent, path.name


def read_link_target(fs: FileSystem, path: Path) -> str | None:
    """Return the symlink target of ``path`` or ``None`` when unreadable."""
    try:
        target = fs.read_link(path)
    except (OSError, ValueError):
        return None
    return target or None


def scan_directory(
    fs: FileSystem,
    directory: Path,
    pattern: str | None = None,
) -> tuple[list[DirEntry], Exception | None]:
    """List ``directory`` entries with ``lstat`` metadata.

    Returns ``(entries, scan_error)``; ``scan_error`` is set when the
    directory itself cannot be read, in which case ``entries`` is empty.
    ``.`` and ``..`` are never included.
    """
    try:
        names = fs.list_names(directory)
    except OSError as exc:
        return [], exc

    entries: list[DirEntry] = []
    for name in names:
        if name in (".", ".."):
            continue
        if pattern is not None and not fnmatch.fnmatch(name, pattern):
            continue
        full_path = directory / name
        try:
            st = fs.lstat(full_path)
        except OSError as exc:
            logger.debug("skipping %s: %s", full_path, exc)
            continue
        entries.append(entry_from_stat(name, full_path, st))
    return entries, None


__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "is_file_pattern",
    "is_directory",
    "split_listing_target",
    "read_link_target",
    "scan_directory",
]
