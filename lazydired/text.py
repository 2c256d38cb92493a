"""Display-width measurement and bounded text helpers.

Formatted values are built as Python strings and then clipped to explicit
column limits, so an oversized value is shortened rather than breaking the
column layout or aborting a render.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8
FIELD_MAX_COLS = 31
LINE_MAX_COLS = 1023


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies."""
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns.

    Wide characters that would straddle the limit are dropped entirely.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def bounded(text: str, max_cols: int = FIELD_MAX_COLS) -> str:
    """Return ``text`` clipped to a field capacity of ``max_cols`` columns."""
    if len(text) <= max_cols and text.isascii():
        return text
    return clip_text(text, max_cols)


def pad_right(text: str, width: int) -> str:
    """Left-align ``text`` in a field of ``width`` display columns."""
    return text + " " * max(0, width - display_width(text))


def pad_left(text: str, width: int) -> str:
    """Right-align ``text`` in a field of ``width`` display columns."""
    return " " * max(0, width - display_width(text)) + text


__all__ = [
    "FIELD_MAX_COLS",
    "LINE_MAX_COLS",
    "char_display_width",
    "display_width",
    "clip_text",
    "bounded",
    "pad_right",
    "pad_left",
]
