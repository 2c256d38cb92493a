"""Visibility filtering and aggregate counts for listing entries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .types import DirEntry

DEFAULT_SYSTEM_NAMES = frozenset({".DS_Store"})


@dataclass(frozen=True)
class FilterSettings:
    """Dot-file policy: which entries starting with ``.`` are hidden."""

    show_dot_files: bool = True
    show_system_files: bool = False
    system_names: frozenset[str] = DEFAULT_SYSTEM_NAMES


@dataclass(frozen=True)
class ListingCounts:
    """Aggregate counts over one filtered snapshot.

    ``total_bytes`` sums sizes of visible non-directory entries only.
    """

    dirs: int = 0
    files: int = 0
    hidden_dirs: int = 0
    hidden_files: int = 0
    total_bytes: int = 0

    @property
    def total_entries(self) -> int:
        return self.dirs + self.files + self.hidden_dirs + self.hidden_files

    @property
    def is_empty(self) -> bool:
        return self.total_entries == 0


def is_hidden_name(name: str, settings: FilterSettings) -> bool:
    """Return whether an entry named ``name`` is hidden under ``settings``."""
    if not name.startswith("."):
        return False
    if not settings.show_dot_files:
        return True
    return not settings.show_system_files and name in settings.system_names


def filter_entries(entries: Iterable[DirEntry], settings: FilterSettings) -> ListingCounts:
    """Set ``hidden`` on every entry and recount aggregates from scratch.

    Entries are never removed; only their flags change.
    """
    dirs = files = hidden_dirs = hidden_files = 0
    total_bytes = 0
    for entry in entries:
        entry.hidden = is_hidden_name(entry.name, settings)
        if entry.hidden:
            if entry.is_dir:
                hidden_dirs += 1
            else:
                hidden_files += 1
        elif entry.is_dir:
            dirs += 1
        else:
            files += 1
            total_bytes += entry.size
    return ListingCounts(
        dirs=dirs,
        files=files,
        hidden_dirs=hidden_dirs,
        hidden_files=hidden_files,
        total_bytes=total_bytes,
    )


__all__ = [
    "DEFAULT_SYSTEM_NAMES",
    "FilterSettings",
    "ListingCounts",
    "is_hidden_name",
    "filter_entries",
]
