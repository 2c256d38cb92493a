"""Rebuild controller: dirty-flag reconciliation and listing rendering.

Each refresh compares the settings a session was last rendered with against
the current ``DiredSettings`` and the canvas width, derives the set of stale
stages, and re-runs only those. Stages always run as
filter -> sort -> columns -> render, and any upstream stage forces a render.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import IntFlag

from .canvas import (
    STYLE_DIRECTORY,
    STYLE_FILENAME,
    STYLE_HEADER,
    STYLE_NORMAL,
    STYLE_SYMLINK_TARGET,
    Canvas,
)
from .listing.columns import ColumnLayout, DetailsMask, compute_field_widths, layout_columns
from .listing.filtering import ListingCounts, filter_entries
from .listing.formatting import (
    block_count,
    format_date,
    format_group,
    format_mode,
    format_number,
    format_owner,
    format_size,
    trail_char,
)
from .listing.fs import FileSystem, LocalFileSystem, read_link_target
from .listing.session import ListingSession
from .listing.sorting import sort_entries
from .listing.types import DirEntry
from .settings import DiredSettings
from .text import LINE_MAX_COLS, bounded, display_width, pad_left, pad_right

logger = logging.getLogger(__name__)

HEADER_LINES = 2


class UpdateFlags(IntFlag):
    NONE = 0
    SORT = 1
    FILTER = 2
    COLUMNS = 4
    REBUILD = 8
    ALL = 15


def compute_update_flags(
    session: ListingSession,
    settings: DiredSettings,
    width: int,
    flags: UpdateFlags = UpdateFlags.NONE,
) -> UpdateFlags:
    """Return the stages that must re-run for ``settings`` at ``width``.

    Filtering changes which entries feed the column maxima, so FILTER also
    implies COLUMNS. Every upstream flag implies REBUILD.
    """
    flags = UpdateFlags(flags)
    if session.last_sort_spec != settings.sort_spec:
        flags |= UpdateFlags.SORT
    if session.last_filter != settings.filter:
        flags |= UpdateFlags.FILTER
    if flags & UpdateFlags.FILTER:
        flags |= UpdateFlags.COLUMNS
    if (
        session.last_time_format != settings.time_format
        or session.last_size_mode != settings.size_mode
        or session.last_id_display != settings.id_display
        or session.last_detail_mode != settings.detail_mode
    ):
        flags |= UpdateFlags.COLUMNS
    if width != session.last_width:
        flags |= UpdateFlags.REBUILD
    if flags & (UpdateFlags.SORT | UpdateFlags.FILTER | UpdateFlags.COLUMNS):
        flags |= UpdateFlags.REBUILD
    return flags


def entry_at_line(session: ListingSession, line: int) -> DirEntry | None:
    """Return the visible entry rendered on canvas ``line``."""
    index = line - HEADER_LINES
    if index < 0:
        return None
    for entry in session.entries:
        if entry.hidden:
            continue
        if index == 0:
            return entry
        index -= 1
    return None


def line_of_entry(canvas: Canvas, entry: DirEntry) -> int:
    """Return the canvas line where ``entry`` was last rendered.

    Hidden entries carry the offset of the next visible line.
    """
    line, _col = canvas.line_col(entry.render_offset)
    return line


def _inflect(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def format_summary(counts: ListingCounts, settings: DiredSettings) -> str:
    """Return the pluralized aggregate summary shown under the header."""
    parts: list[str] = []
    if counts.dirs:
        parts.append(f"{counts.dirs} {_inflect(counts.dirs, 'directory', 'directories')}")
    if counts.hidden_dirs:
        parts.append(
            f"{counts.hidden_dirs} {_inflect(counts.hidden_dirs, 'hidden directory', 'hidden directories')}"
        )
    if counts.files:
        parts.append(f"{counts.files} {_inflect(counts.files, 'file', 'files')}")
    if counts.hidden_files:
        parts.append(f"{counts.hidden_files} {_inflect(counts.hidden_files, 'hidden file', 'hidden files')}")
    if counts.total_bytes:
        total = format_number(counts.total_bytes, settings.size_mode)
        parts.append(f"{total} {_inflect(counts.total_bytes, 'byte', 'bytes')}")
    if counts.is_empty:
        parts.append("empty")
    return ", ".join(parts)


def format_detail_columns(entry: DirEntry, layout: ColumnLayout, settings: DiredSettings, now: float) -> str:
    """Return the optional columns selected by ``layout`` for one entry."""
    mask = layout.mask
    widths = layout.widths
    out: list[str] = []
    if mask & DetailsMask.BLOCKS:
        out.append(pad_left(str(block_count(entry.size)), widths.blocks) + " ")
    if mask & DetailsMask.MODE:
        out.append(format_mode(entry.mode) + " ")
    if mask & DetailsMask.LINKS:
        out.append(pad_left(str(entry.nlink), widths.links) + " ")
    if mask & DetailsMask.UID:
        out.append(pad_right(format_owner(entry.uid, settings.id_display), widths.uid) + " ")
    if mask & DetailsMask.GID:
        out.append(pad_right(format_group(entry.gid, settings.id_display), widths.gid) + " ")
    if mask & DetailsMask.SIZE:
        out.append(" " + pad_left(format_size(entry, settings.size_mode), widths.size) + "  ")
    if mask & DetailsMask.DATE:
        out.append(format_date(entry.mtime, settings.time_format, now) + "  ")
    return "".join(out)


def render_listing(
    session: ListingSession,
    settings: DiredSettings,
    canvas: Canvas,
    fs: FileSystem,
) -> None:
    """Clear ``canvas`` and emit the header plus one line per visible entry.

    Every entry, hidden or not, gets ``render_offset`` set to the canvas
    offset where its line starts (or would start).
    """
    canvas.clear()
    canvas.write("  Directory of ", STYLE_HEADER)
    canvas.write(bounded(str(session.display_path), LINE_MAX_COLS), STYLE_DIRECTORY)
    canvas.write(f"\n   {format_summary(session.counts, settings)}\n", STYLE_HEADER)

    name_column = 2
    for entry in session.entries:
        entry.render_offset = canvas.offset
        if entry.hidden:
            continue
        prefix = f"{entry.mark or ' '} " + format_detail_columns(entry, session.layout, settings, session.now)
        canvas.write(prefix, STYLE_NORMAL)
        name_column = display_width(prefix)

        style = STYLE_DIRECTORY if entry.is_dir else STYLE_FILENAME
        canvas.write(bounded(entry.name, LINE_MAX_COLS) + trail_char(entry.mode), style)
        if entry.is_symlink:
            target = read_link_target(fs, entry.full_path)
            if target is not None:
                canvas.write(" -> " + bounded(target, LINE_MAX_COLS), STYLE_SYMLINK_TARGET)
        canvas.write("\n", STYLE_NORMAL)
    session.name_column = name_column


def update_listing(
    session: ListingSession,
    settings: DiredSettings,
    canvas: Canvas,
    flags: UpdateFlags = UpdateFlags.NONE,
    *,
    fs: FileSystem | None = None,
    target: DirEntry | None = None,
    clock: Callable[[], float] = time.time,
) -> UpdateFlags:
    """Reconcile ``session`` with ``settings`` and re-render when needed.

    Returns the flags that were acted on; ``UpdateFlags.NONE`` means nothing
    was stale and the canvas was left untouched. After a render the cursor is
    placed on ``target`` when given, otherwise on the entry that was under
    it before, and the scroll position is kept.
    """
    width = canvas.width
    flags = compute_update_flags(session, settings, width, flags)
    if not flags & UpdateFlags.REBUILD:
        return UpdateFlags.NONE

    cursor_line, _cursor_col = canvas.get_cursor()
    cursor_entry = target or entry_at_line(session, cursor_line) or session.cursor_entry
    top_line = canvas.get_top_line()
    logger.debug("updating %s with flags %r", session.display_path, flags)

    if flags & UpdateFlags.FILTER:
        session.counts = filter_entries(session.entries, settings.filter)
        session.last_filter = settings.filter
    if flags & UpdateFlags.SORT:
        session.entries = sort_entries(session.entries, settings.sort_spec)
        session.last_sort_spec = settings.sort_spec
    if flags & UpdateFlags.COLUMNS:
        session.now = clock()
        session.field_widths = compute_field_widths(
            session.entries,
            time_format=settings.time_format,
            size_mode=settings.size_mode,
            id_display=settings.id_display,
            detail_mode=settings.detail_mode,
            now=session.now,
        )
        session.last_time_format = settings.time_format
        session.last_size_mode = settings.size_mode
        session.last_id_display = settings.id_display
        session.last_detail_mode = settings.detail_mode

    session.layout = layout_columns(session.field_widths, width, settings.detail_mode, settings.id_display)
    session.last_width = width
    render_listing(session, settings, canvas, fs if fs is not None else LocalFileSystem())

    session.cursor_entry = cursor_entry
    if cursor_entry is not None and any(entry is cursor_entry for entry in session.entries):
        canvas.set_cursor(line_of_entry(canvas, cursor_entry), session.name_column)
    else:
        session.cursor_entry = None
        canvas.set_cursor(HEADER_LINES, session.name_column)
    canvas.set_top_line(top_line)
    return flags


__all__ = [
    "HEADER_LINES",
    "UpdateFlags",
    "compute_update_flags",
    "entry_at_line",
    "line_of_entry",
    "format_summary",
    "format_detail_columns",
    "render_listing",
    "update_listing",
]
