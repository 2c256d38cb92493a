"""Interactive listing view: one session, its canvas and the command surface.

``DiredView`` is the glue a host binds keys to. It owns the current
``DiredSettings`` value and the ``ListingSession``; every command derives new
settings or moves the cursor and then runs one controller refresh.
"""

from __future__ import annotations

import logging
import stat
import time
from collections.abc import Callable
from pathlib import Path

from ..canvas import Canvas
from ..controller import UpdateFlags, entry_at_line, line_of_entry, update_listing
from ..errors import DirectoryOpenError
from ..listing.formatting import time_format_name
from ..listing.fs import FileSystem, LocalFileSystem, scan_directory, split_listing_target
from ..listing.session import ListingSession
from ..listing.types import UNMARKED, DirEntry
from ..settings import DEFAULT_SETTINGS, DiredSettings

logger = logging.getLogger(__name__)

MARK_SELECT = "*"
MARK_DELETE = "D"
MARK_COPY = "C"


class DiredView:
    def __init__(
        self,
        canvas: Canvas,
        settings: DiredSettings = DEFAULT_SETTINGS,
        *,
        fs: FileSystem | None = None,
        open_file: Callable[[Path], None] | None = None,
        preview_file: Callable[[Path], None] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.canvas = canvas
        self.settings = settings
        self.fs = fs if fs is not None else LocalFileSystem()
        self.open_file = open_file
        self.preview_file = preview_file
        self.clock = clock
        self.session: ListingSession | None = None
        self.status = ""

    # -- lifecycle -------------------------------------------------------

    def open_directory(self, path: Path | str, target: str | None = None) -> ListingSession:
        """Scan ``path`` and rebuild the listing, placing the cursor on ``target``.

        ``path`` may name a directory or a shell pattern inside one. When the
        scan fails, ``DirectoryOpenError`` is raised and the current session
        and canvas are left as they were.
        """
        path = Path(path)
        directory, pattern = split_listing_target(self.fs, path)
        entries, scan_error = scan_directory(self.fs, directory, pattern)
        if scan_error is not None:
            logger.warning("cannot open %s: %s", path, scan_error)
            raise DirectoryOpenError(path, str(scan_error)) from scan_error

        logger.info("listing %s (%d entries)", path, len(entries))
        if self.session is None:
            self.session = ListingSession(path=directory, pattern=pattern)
        else:
            self.session.path = directory
            self.session.pattern = pattern
        self.session.replace_entries(entries)

        self.canvas.set_cursor(0, 0)
        self.canvas.set_top_line(0)
        target_entry = self.session.find_entry(target) if target else None
        update_listing(
            self.session,
            self.settings,
            self.canvas,
            UpdateFlags.ALL,
            fs=self.fs,
            target=target_entry,
            clock=self.clock,
        )
        return self.session

    def close(self) -> None:
        """Drop the session and its entries."""
        self.session = None
        self.canvas.clear()

    def refresh_display(self, flags: UpdateFlags = UpdateFlags.NONE) -> UpdateFlags:
        """Run one reconciliation pass; a no-op when nothing is stale."""
        if self.session is None:
            return UpdateFlags.NONE
        return update_listing(self.session, self.settings, self.canvas, flags, fs=self.fs, clock=self.clock)

    def apply_settings(self, settings: DiredSettings) -> UpdateFlags:
        self.settings = settings
        return self.refresh_display()

    # -- cursor ----------------------------------------------------------

    def current_entry(self) -> DirEntry | None:
        if self.session is None:
            return None
        line, _col = self.canvas.get_cursor()
        return entry_at_line(self.session, line)

    def current_path(self) -> Path | None:
        entry = self.current_entry()
        return entry.full_path if entry is not None else None

    def move(self, delta: int) -> DirEntry | None:
        """Move the cursor ``delta`` visible entries, clamped to the list."""
        if self.session is None:
            return None
        visible = self.session.visible_entries()
        if not visible:
            return None
        current = self.current_entry()
        # Off an entry line (header or summary) the first entry counts as next.
        index = next((idx for idx, entry in enumerate(visible) if entry is current), -1 if delta > 0 else 0)
        index = max(0, min(len(visible) - 1, index + delta))
        entry = visible[index]
        self.canvas.set_cursor(line_of_entry(self.canvas, entry), self.session.name_column)
        self.session.cursor_entry = entry
        return entry

    def next_entry(self) -> DirEntry | None:
        return self.move(1)

    def previous_entry(self) -> DirEntry | None:
        return self.move(-1)

    # -- marks -----------------------------------------------------------

    def mark(self, mark: str = MARK_SELECT) -> DirEntry | None:
        """Set ``mark`` on the current entry and advance to the next one."""
        entry = self.current_entry()
        if entry is not None:
            entry.mark = (mark or UNMARKED)[0]
            self.refresh_display(UpdateFlags.REBUILD)
        self.move(1)
        return entry

    def unmark(self) -> DirEntry | None:
        return self.mark(UNMARKED)

    def unmark_backward(self) -> DirEntry | None:
        """Move to the previous entry and clear its mark."""
        entry = self.move(-1)
        if entry is not None:
            entry.mark = UNMARKED
            self.refresh_display(UpdateFlags.REBUILD)
        return entry

    # -- settings commands -----------------------------------------------

    def sort(self, grammar: str) -> UpdateFlags:
        return self.apply_settings(self.settings.with_sort(grammar))

    def set_time_format(self, value: str | int) -> UpdateFlags:
        """Select a time format; ``UnknownTimeFormatError`` keeps the old one."""
        return self.apply_settings(self.settings.with_time_format(value))

    def cycle_time_format(self) -> UpdateFlags:
        flags = self.apply_settings(self.settings.cycle_time_format())
        self.status = f"time format: {time_format_name(self.settings.time_format)}"
        return flags

    def toggle_human(self) -> UpdateFlags:
        return self.apply_settings(self.settings.cycle_size_mode())

    def toggle_numeric_ids(self) -> UpdateFlags:
        return self.apply_settings(self.settings.cycle_id_display())

    def cycle_details(self) -> UpdateFlags:
        return self.apply_settings(self.settings.cycle_detail_mode())

    def toggle_dot_files(self, show: bool | None = None) -> UpdateFlags:
        settings = self.settings.with_dot_files(show)
        if settings == self.settings:
            return UpdateFlags.NONE
        flags = self.apply_settings(settings)
        self.status = f"dot files are {'visible' if settings.filter.show_dot_files else 'hidden'}"
        return flags

    # -- navigation ------------------------------------------------------

    def refresh(self) -> ListingSession | None:
        """Re-scan the current directory, keeping the cursor on the same name."""
        if self.session is None:
            return None
        current = self.current_entry()
        target = current.name if current is not None else None
        return self.open_directory(self.session.display_path, target=target)

    def parent(self) -> ListingSession | None:
        """List the parent directory with the cursor on the one just left."""
        session = self.session
        if session is None:
            return None
        if session.pattern is not None:
            return self.open_directory(session.path)
        return self.open_directory(session.path.parent, target=session.path.name)

    def select(self) -> Path | None:
        """Descend into the current directory or hand a file to ``open_file``.

        Symlinks are followed. Returns the selected path, or ``None`` when the
        cursor is not on an entry or the path no longer resolves.
        """
        entry = self.current_entry()
        if entry is None:
            return None
        try:
            st = self.fs.stat(entry.full_path)
        except OSError as exc:
            self.status = f"cannot access {entry.full_path}: {exc.strerror or exc}"
            return None
        if stat.S_ISDIR(st.st_mode):
            self.open_directory(entry.full_path)
        elif stat.S_ISREG(st.st_mode) and self.open_file is not None:
            self.open_file(entry.full_path)
        return entry.full_path


__all__ = [
    "MARK_SELECT",
    "MARK_DELETE",
    "MARK_COPY",
    "DiredView",
]
