"""Human-readable formatting for listing columns.

Sizes, timestamps, permission strings and owner/group names. Every formatter
returns a plain string bounded to ``FIELD_MAX_COLS`` columns except
``format_date``, whose variants are all fixed-width.
"""

from __future__ import annotations

import grp
import os
import pwd
import stat
import time
from enum import IntEnum
from functools import lru_cache

from ..errors import UnknownTimeFormatError
from ..text import bounded
from .types import DirEntry

COMPACT_RECENT_SECONDS = 182 * 86400
DEFAULT_BLOCK_SIZE = 1024

MONTH_NAMES = (
    "***",
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class SizeMode(IntEnum):
    """Size column display; the toggle cycles in value order."""

    EXACT = 0
    HUMAN_BINARY = 1
    HUMAN_DECIMAL = 2


class IdDisplay(IntEnum):
    NAME = 0
    NUMERIC = 1
    HIDDEN = 2


class TimeFormat(IntEnum):
    COMPACT = 0
    DOS = 1
    DOS_LONG = 2
    TOUCH = 3
    TOUCH_LONG = 4
    FULL = 5
    SECONDS = 6


TIME_FORMAT_NAMES: dict[str, TimeFormat] = {
    "default": TimeFormat.COMPACT,
    "compact": TimeFormat.COMPACT,
    "dos": TimeFormat.DOS,
    "dos-long": TimeFormat.DOS_LONG,
    "touch": TimeFormat.TOUCH,
    "touch-long": TimeFormat.TOUCH_LONG,
    "full": TimeFormat.FULL,
    "seconds": TimeFormat.SECONDS,
}


def time_format_name(time_format: TimeFormat) -> str:
    """Return the canonical name for ``time_format``."""
    return TimeFormat(time_format).name.lower().replace("_", "-")


def lookup_time_format(value: str | int) -> TimeFormat:
    """Resolve a time-format name or integer value.

    Raises ``UnknownTimeFormatError`` (a ``LookupError``) when nothing matches.
    """
    if isinstance(value, str):
        key = value.strip().lower().replace("_", "-")
        if key in TIME_FORMAT_NAMES:
            return TIME_FORMAT_NAMES[key]
        if not key.isdigit():
            raise UnknownTimeFormatError(value)
        value = int(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnknownTimeFormatError(value)
    try:
        return TimeFormat(value)
    except ValueError:
        raise UnknownTimeFormatError(value) from None


def format_number(number: int, size_mode: SizeMode) -> str:
    """Format a byte count exactly or scaled to at most four characters.

    Decimal mode scales by 1000 with suffixes ``BkMGTPEZY``; binary mode
    scales by 1024 with ``BKMGTPEZY``. Values just above a unit get one
    decimal digit (``1.5M``), larger ones are truncated to an integer.
    """
    if size_mode == SizeMode.EXACT:
        return str(number)
    if size_mode == SizeMode.HUMAN_DECIMAL:
        suffixes = "BkMGTPEZY"
        idx = 0
        while idx + 1 < len(suffixes) and number >= 1000:
            if number < 10000:
                return f"{number // 1000}.{(number // 100) % 10}{suffixes[idx + 1]}"
            number //= 1000
            idx += 1
        return f"{number}{suffixes[idx]}"

    suffixes = "BKMGTPEZY"
    idx = 0
    while idx + 1 < len(suffixes) and number >= 1024:
        if number < 10200:
            return f"{number // 1020}.{(number // 102) % 10}{suffixes[idx + 1]}"
        number >>= 10
        idx += 1
    return f"{number}{suffixes[idx]}"


def format_size(entry: DirEntry, size_mode: SizeMode) -> str:
    """Format the size column; devices show ``major, minor`` instead."""
    if entry.is_device:
        return f"{os.major(entry.rdev):3d}, {os.minor(entry.rdev):3d}"
    return bounded(format_number(entry.size, size_mode))


def block_count(size: int, block_size: int = DEFAULT_BLOCK_SIZE) -> int:
    """Return the number of ``block_size`` blocks needed for ``size`` bytes."""
    return (size + block_size - 1) // block_size


def _local_time(seconds: float) -> time.struct_time | None:
    try:
        return time.localtime(seconds)
    except (OverflowError, OSError, ValueError):
        return None


def format_date(mtime: float, time_format: TimeFormat, now: float) -> str:
    """Format ``mtime`` with one of the fixed-width ``TimeFormat`` layouts.

    ``now`` anchors the compact format's six-month window. Timestamps the
    platform cannot convert render as blanks of the layout's width.
    """
    tm = _local_time(mtime)
    if tm is None:
        month = 0
        year, mday, hour, minute, sec = 0, 0, 0, 0, 0
    else:
        month = tm.tm_mon if 1 <= tm.tm_mon <= 12 else 0
        year, mday, hour, minute, sec = tm.tm_year, tm.tm_mday, tm.tm_hour, tm.tm_min, tm.tm_sec
    name = MONTH_NAMES[month]

    if time_format in (TimeFormat.TOUCH, TimeFormat.TOUCH_LONG):
        text = f"{year % 100:02d}{month:02d}{mday:02d}{hour:02d}{minute:02d}"
        if time_format == TimeFormat.TOUCH_LONG:
            text += f".{sec:02d}"
    elif time_format in (TimeFormat.DOS, TimeFormat.DOS_LONG):
        text = f"{name} {mday:2d} {year:4d}  {hour:2d}:{minute:02d}"
        if time_format == TimeFormat.DOS_LONG:
            text += f":{sec:02d}"
    elif time_format == TimeFormat.FULL:
        text = f"{name} {mday:2d} {hour:02d}:{minute:02d}:{sec:02d} {year:4d}"
    elif time_format == TimeFormat.SECONDS:
        text = f"{int(mtime):10d}"
    elif now - COMPACT_RECENT_SECONDS < mtime < now + COMPACT_RECENT_SECONDS:
        text = f"{name} {mday:2d} {hour:02d}:{minute:02d}"
    else:
        text = f"{name} {mday:2d}  {year:4d}"

    if month == 0:
        return " " * len(text)
    return text


def format_mode(mode: int) -> str:
    """Return the 10-character ``ls -l`` style type and permission string."""
    atts = ["-"] * 10
    if not stat.S_ISREG(mode):
        if stat.S_ISDIR(mode):
            atts[0] = "d"
        elif stat.S_ISBLK(mode):
            atts[0] = "b"
        elif stat.S_ISCHR(mode):
            atts[0] = "c"
        elif stat.S_ISFIFO(mode):
            atts[0] = "p"
        elif stat.S_ISSOCK(mode):
            atts[0] = "s"
        if stat.S_ISLNK(mode):
            atts[0] = "l"

    for offset, (read_bit, write_bit, exec_bit) in enumerate(
        (
            (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR),
            (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP),
            (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH),
        )
    ):
        base = 1 + offset * 3
        if mode & read_bit:
            atts[base] = "r"
        if mode & write_bit:
            atts[base + 1] = "w"
        if mode & exec_bit:
            atts[base + 2] = "x"

    if mode & stat.S_ISUID:
        atts[3] = "s" if mode & stat.S_IXUSR else "S"
    if mode & stat.S_ISGID:
        atts[6] = "s" if mode & stat.S_IXGRP else "S"
    if mode & stat.S_ISVTX:
        atts[9] = "t" if mode & stat.S_IXOTH else "T"
    return "".join(atts)


@lru_cache(maxsize=256)
def user_name(uid: int) -> str | None:
    """Return the login name for ``uid`` or ``None`` when unknown."""
    try:
        return pwd.getpwuid(uid).pw_name or None
    except (KeyError, OverflowError):
        return None


@lru_cache(maxsize=256)
def group_name(gid: int) -> str | None:
    """Return the group name for ``gid`` or ``None`` when unknown."""
    try:
        return grp.getgrgid(gid).gr_name or None
    except (KeyError, OverflowError):
        return None


def format_owner(uid: int, id_display: IdDisplay) -> str:
    name = user_name(uid) if id_display == IdDisplay.NAME else None
    return bounded(name) if name else str(uid)


def format_group(gid: int, id_display: IdDisplay) -> str:
    name = group_name(gid) if id_display == IdDisplay.NAME else None
    return bounded(name) if name else str(gid)


def trail_char(mode: int) -> str:
    """Return the ``ls -F`` style type suffix for ``mode`` (may be empty)."""
    trail = ""
    if mode & stat.S_IXUSR:
        trail = "*"
    if stat.S_ISDIR(mode):
        trail = "/"
    if stat.S_ISLNK(mode):
        trail = "@"
    if stat.S_ISSOCK(mode):
        trail = "="
    if stat.S_ISWHT(mode):
        trail = "%"
    if stat.S_ISFIFO(mode):
        trail = "|"
    return trail


__all__ = [
    "COMPACT_RECENT_SECONDS",
    "DEFAULT_BLOCK_SIZE",
    "SizeMode",
    "IdDisplay",
    "TimeFormat",
    "TIME_FORMAT_NAMES",
    "time_format_name",
    "lookup_time_format",
    "format_number",
    "format_size",
    "block_count",
    "format_date",
    "format_mode",
    "user_name",
    "group_name",
    "format_owner",
    "format_group",
    "trail_char",
]
