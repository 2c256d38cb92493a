"""Column width maxima and width-constrained column negotiation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum, IntFlag

from ..text import display_width
from .formatting import (
    DEFAULT_BLOCK_SIZE,
    IdDisplay,
    SizeMode,
    TimeFormat,
    block_count,
    format_date,
    format_group,
    format_owner,
    format_size,
)
from .types import DirEntry

MODE_WIDTH = 10
NAME_MIN_WIDTH = 16
NAME_MAX_WIDTH = 40


class DetailMode(IntEnum):
    AUTO = 0
    HIDE = 1
    SHOW = 2


class DetailsMask(IntFlag):
    NONE = 0
    BLOCKS = 0x01
    MODE = 0x02
    LINKS = 0x04
    UID = 0x08
    GID = 0x10
    SIZE = 0x20
    DATE = 0x40
    ALL = 0x7F


@dataclass(frozen=True)
class FieldWidths:
    """Maximum formatted width per column over the visible entries."""

    blocks: int = 0
    mode: int = 0
    links: int = 0
    uid: int = 0
    gid: int = 0
    size: int = 0
    date: int = 0
    name: int = 0


@dataclass(frozen=True)
class ColumnLayout:
    """Resolved column set plus the widths used to pad each column."""

    mask: DetailsMask
    widths: FieldWidths
    name_width: int


def compute_field_widths(
    entries: Iterable[DirEntry],
    *,
    time_format: TimeFormat,
    size_mode: SizeMode,
    id_display: IdDisplay,
    detail_mode: DetailMode,
    now: float,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> FieldWidths:
    """Scan visible entries and track the widest formatted value per column.

    Only the name width is measured when details are hidden.
    """
    blocks = mode = links = uid = gid = size = date = name = 0
    for entry in entries:
        if entry.hidden:
            continue
        name = max(name, display_width(entry.name))
        if detail_mode == DetailMode.HIDE:
            continue
        blocks = max(blocks, len(str(block_count(entry.size, block_size))))
        mode = MODE_WIDTH
        links = max(links, len(str(entry.nlink)))
        uid = max(uid, display_width(format_owner(entry.uid, id_display)))
        gid = max(gid, display_width(format_group(entry.gid, id_display)))
        size = max(size, len(format_size(entry, size_mode)))
        date = max(date, len(format_date(entry.mtime, time_format, now)))
    return FieldWidths(
        blocks=blocks,
        mode=mode,
        links=links,
        uid=uid,
        gid=gid,
        size=size,
        date=date,
        name=name,
    )


def clamp_name_width(name_width: int) -> int:
    """Clamp the name-column budget to ``[NAME_MIN_WIDTH, NAME_MAX_WIDTH]``."""
    return max(NAME_MIN_WIDTH, min(NAME_MAX_WIDTH, name_width))


def layout_columns(
    widths: FieldWidths,
    available_width: int,
    detail_mode: DetailMode,
    id_display: IdDisplay = IdDisplay.NAME,
) -> ColumnLayout:
    """Choose which optional columns fit in ``available_width`` cells.

    AUTO charges each column against the width left after the name budget,
    in the order size, date, mode, owner, group, link count, and drops a
    column as soon as the remainder goes negative. The block-count column is
    never shown in AUTO or SHOW. Mark and name columns are always kept.
    """
    name_width = clamp_name_width(widths.name)
    hide_ids = id_display == IdDisplay.HIDDEN

    if detail_mode == DetailMode.HIDE:
        return ColumnLayout(mask=DetailsMask.NONE, widths=widths, name_width=name_width)

    mask = DetailsMask.ALL & ~DetailsMask.BLOCKS
    if detail_mode == DetailMode.SHOW:
        if hide_ids:
            mask &= ~(DetailsMask.UID | DetailsMask.GID)
        return ColumnLayout(mask=mask, widths=widths, name_width=name_width)

    remaining = available_width - name_width
    remaining -= widths.size + 2
    if remaining < 0:
        mask &= ~DetailsMask.SIZE
    remaining -= widths.date + 2
    if remaining < 0:
        mask &= ~DetailsMask.DATE
    remaining -= widths.mode + 1
    if remaining < 0:
        mask &= ~DetailsMask.MODE
    if hide_ids:
        mask &= ~DetailsMask.UID
    else:
        remaining -= widths.uid + 1
        if remaining < 0:
            mask &= ~DetailsMask.UID
    if hide_ids:
        mask &= ~DetailsMask.GID
    else:
        remaining -= widths.gid + 1
        if remaining < 0:
            mask &= ~DetailsMask.GID
    remaining -= widths.links + 1
    if remaining < 0:
        mask &= ~DetailsMask.LINKS
    return ColumnLayout(mask=mask, widths=widths, name_width=name_width)


__all__ = [
    "MODE_WIDTH",
    "NAME_MIN_WIDTH",
    "NAME_MAX_WIDTH",
    "DetailMode",
    "DetailsMask",
    "FieldWidths",
    "ColumnLayout",
    "compute_field_widths",
    "clamp_name_width",
    "layout_columns",
]
