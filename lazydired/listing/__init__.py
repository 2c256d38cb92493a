"""Directory-listing domain model.

This package contains non-UI listing primitives:
- entry datatypes and the filesystem scanning collaborator
- visibility filtering and aggregate counts
- the sort-spec grammar and stable multi-key sort
- column formatters and width-constrained column negotiation
- the per-directory ``ListingSession`` state
"""

from __future__ import annotations

from .types import UNMARKED, DirEntry, entry_from_stat
from .fs import (
    FileSystem,
    LocalFileSystem,
    is_directory,
    is_file_pattern,
    read_link_target,
    scan_directory,
    split_listing_target,
)
from .filtering import FilterSettings, ListingCounts, filter_entries, is_hidden_name
from .sorting import DEFAULT_SORT_SPEC, SortKey, SortSpec, parse_sort_spec, sort_entries
from .formatting import (
    IdDisplay,
    SizeMode,
    TimeFormat,
    format_date,
    format_group,
    format_mode,
    format_number,
    format_owner,
    format_size,
    lookup_time_format,
    time_format_name,
    trail_char,
)
from .columns import (
    ColumnLayout,
    DetailMode,
    DetailsMask,
    FieldWidths,
    compute_field_widths,
    layout_columns,
)
from .session import ListingSession

__all__ = [
    "UNMARKED",
    "DirEntry",
    "entry_from_stat",
    "FileSystem",
    "LocalFileSystem",
    "is_directory",
    "is_file_pattern",
    "read_link_target",
    "scan_directory",
    "split_listing_target",
    "FilterSettings",
    "ListingCounts",
    "filter_entries",
    "is_hidden_name",
    "DEFAULT_SORT_SPEC",
    "SortKey",
    "SortSpec",
    "parse_sort_spec",
    "sort_entries",
    "IdDisplay",
    "SizeMode",
    "TimeFormat",
    "format_date",
    "format_group",
    "format_mode",
    "format_number",
    "format_owner",
    "format_size",
    "lookup_time_format",
    "time_format_name",
    "trail_char",
    "ColumnLayout",
    "DetailMode",
    "DetailsMask",
    "FieldWidths",
    "compute_field_widths",
    "layout_columns",
    "ListingSession",
]
