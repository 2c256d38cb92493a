"""Display settings passed explicitly to the rebuild controller.

``DiredSettings`` is immutable; commands derive a new value with one of the
``with_*``/``cycle_*`` helpers and hand it to the next refresh, where it is
compared field by field against what the session last rendered with.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .listing.columns import DetailMode
from .listing.filtering import FilterSettings
from .listing.formatting import IdDisplay, SizeMode, TimeFormat, lookup_time_format
from .listing.sorting import DEFAULT_SORT_SPEC, SortSpec, parse_sort_spec


def _next_member(value, enum_type):
    members = list(enum_type)
    return members[(members.index(enum_type(value)) + 1) % len(members)]


@dataclass(frozen=True)
class DiredSettings:
    sort_spec: SortSpec = DEFAULT_SORT_SPEC
    time_format: TimeFormat = TimeFormat.COMPACT
    size_mode: SizeMode = SizeMode.EXACT
    id_display: IdDisplay = IdDisplay.NAME
    filter: FilterSettings = field(default_factory=FilterSettings)
    detail_mode: DetailMode = DetailMode.AUTO

    def with_sort(self, grammar: str) -> DiredSettings:
        """Apply a sort grammar string on top of the current sort spec."""
        return replace(self, sort_spec=parse_sort_spec(grammar, self.sort_spec))

    def with_time_format(self, value: str | int) -> DiredSettings:
        """Select a time format by name or value.

        Raises ``UnknownTimeFormatError`` and leaves ``self`` untouched when
        the value is not recognized.
        """
        return replace(self, time_format=lookup_time_format(value))

    def cycle_time_format(self) -> DiredSettings:
        return replace(self, time_format=_next_member(self.time_format, TimeFormat))

    def cycle_size_mode(self) -> DiredSettings:
        return replace(self, size_mode=_next_member(self.size_mode, SizeMode))

    def cycle_id_display(self) -> DiredSettings:
        return replace(self, id_display=_next_member(self.id_display, IdDisplay))

    def cycle_detail_mode(self) -> DiredSettings:
        return replace(self, detail_mode=_next_member(self.detail_mode, DetailMode))

    def with_dot_files(self, show: bool | None = None) -> DiredSettings:
        """Set dot-file visibility, toggling it when ``show`` is ``None``."""
        if show is None:
            show = not self.filter.show_dot_files
        return replace(self, filter=replace(self.filter, show_dot_files=bool(show)))


DEFAULT_SETTINGS = DiredSettings()


__all__ = ["DiredSettings", "DEFAULT_SETTINGS"]
