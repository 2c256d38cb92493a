"""Live state of one browsed directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .columns import ColumnLayout, DetailMode, DetailsMask, FieldWidths
from .filtering import FilterSettings, ListingCounts
from .formatting import IdDisplay, SizeMode, TimeFormat
from .sorting import SortSpec
from .types import DirEntry


@dataclass
class ListingSession:
    """Entries of one directory plus the settings last used to render them.

    The ``last_*`` fields are ``None`` until the first rebuild so that any
    settings value is seen as a change. ``entries`` is replaced wholesale on
    every scan and keeps the last applied sort order.
    """

    path: Path
    pattern: str | None = None
    entries: list[DirEntry] = field(default_factory=list)
    counts: ListingCounts = field(default_factory=ListingCounts)
    last_sort_spec: SortSpec | None = None
    last_filter: FilterSettings | None = None
    last_time_format: TimeFormat | None = None
    last_size_mode: SizeMode | None = None
    last_id_display: IdDisplay | None = None
    last_detail_mode: DetailMode | None = None
    last_width: int = 0
    field_widths: FieldWidths = field(default_factory=FieldWidths)
    layout: ColumnLayout = field(
        default_factory=lambda: ColumnLayout(mask=DetailsMask.NONE, widths=FieldWidths(), name_width=0)
    )
    name_column: int = 0
    cursor_entry: DirEntry | None = None
    now: float = 0.0

    @property
    def display_path(self) -> Path:
        """Return the listed directory, with the pattern appended if any."""
        if self.pattern is None:
            return self.path
        return self.path / self.pattern

    def replace_entries(self, entries: list[DirEntry]) -> None:
        """Swap in a freshly scanned snapshot; callers rebuild with ``UpdateFlags.ALL``."""
        self.entries = list(entries)
        self.counts = ListingCounts()
        self.cursor_entry = None
        self.last_width = 0

    def visible_entries(self) -> list[DirEntry]:
        return [entry for entry in self.entries if not entry.hidden]

    def find_entry(self, name: str) -> DirEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None


__all__ = ["ListingSession"]
