"""Canvas collaborator: the styled text sink a listing is rendered into.

``Canvas`` is the surface the rebuild controller needs from a host text
buffer. ``TextCanvas`` is an in-memory implementation that records styled
spans and can export them as ANSI text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .ui_theme import UITheme

STYLE_NORMAL = "normal"
STYLE_HEADER = "header"
STYLE_DIRECTORY = "directory"
STYLE_FILENAME = "filename"
STYLE_SYMLINK_TARGET = "symlink_target"


class Canvas(Protocol):
    """Host text buffer operations consumed by the renderer."""

    @property
    def width(self) -> int:
        """Display width in character cells."""
        ...

    @property
    def offset(self) -> int:
        """Offset just past the last appended character."""
        ...

    def clear(self) -> None: ...

    def write(self, text: str, style: str = STYLE_NORMAL) -> int:
        """Append ``text`` with ``style`` and return its length."""
        ...

    def line_col(self, offset: int) -> tuple[int, int]: ...

    def get_cursor(self) -> tuple[int, int]: ...

    def set_cursor(self, line: int, col: int) -> None: ...

    def get_top_line(self) -> int: ...

    def set_top_line(self, line: int) -> None: ...


@dataclass(frozen=True)
class StyledSpan:
    start: int
    end: int
    style: str


class TextCanvas:
    """In-memory ``Canvas`` holding plain text plus style spans."""

    def __init__(self, width: int = 80) -> None:
        self._width = max(1, width)
        self._parts: list[str] = []
        self._spans: list[StyledSpan] = []
        self._length = 0
        self._cursor = (0, 0)
        self._top_line = 0

    @property
    def width(self) -> int:
        return self._width

    def resize(self, width: int) -> None:
        self._width = max(1, width)

    @property
    def offset(self) -> int:
        return self._length

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def spans(self) -> tuple[StyledSpan, ...]:
        return tuple(self._spans)

    def lines(self) -> list[str]:
        """Return canvas content split into lines without terminators."""
        return self.text.splitlines()

    @property
    def line_count(self) -> int:
        return max(1, len(self.lines()))

    def clear(self) -> None:
        self._parts.clear()
        self._spans.clear()
        self._length = 0
        self._cursor = (0, 0)
        self._top_line = 0

    def write(self, text: str, style: str = STYLE_NORMAL) -> int:
        if not text:
            return 0
        start = self._length
        self._parts.append(text)
        self._length += len(text)
        if self._spans and self._spans[-1].style == style and self._spans[-1].end == start:
            self._spans[-1] = StyledSpan(self._spans[-1].start, self._length, style)
        else:
            self._spans.append(StyledSpan(start, self._length, style))
        return len(text)

    def line_col(self, offset: int) -> tuple[int, int]:
        """Convert a character offset into ``(line, column)``."""
        text = self.text[: max(0, offset)]
        line = text.count("\n")
        col = len(text) - (text.rfind("\n") + 1)
        return line, col

    def style_at(self, offset: int) -> str:
        for span in self._spans:
            if span.start <= offset < span.end:
                return span.style
        return STYLE_NORMAL

    def get_cursor(self) -> tuple[int, int]:
        return self._cursor

    def set_cursor(self, line: int, col: int) -> None:
        line = max(0, min(line, self.line_count - 1))
        self._cursor = (line, max(0, col))

    def get_top_line(self) -> int:
        return self._top_line

    def set_top_line(self, line: int) -> None:
        self._top_line = max(0, min(line, self.line_count - 1))

    def to_ansi(self, theme: UITheme) -> str:
        """Render content with each styled span wrapped in theme escapes."""
        text = self.text
        out: list[str] = []
        for span in self._spans:
            chunk = text[span.start : span.end]
            code = theme.style_code(span.style)
            if not code:
                out.append(chunk)
                continue
            segments = chunk.split("\n")
            for idx, segment in enumerate(segments):
                if idx:
                    out.append("\n")
                if segment:
                    out.append(f"{code}{segment}{theme.reset}")
        return "".join(out)


__all__ = [
    "STYLE_NORMAL",
    "STYLE_HEADER",
    "STYLE_DIRECTORY",
    "STYLE_FILENAME",
    "STYLE_SYMLINK_TARGET",
    "Canvas",
    "StyledSpan",
    "TextCanvas",
]
