"""Color palettes for listing styles and theme lookup.

Themes map canvas style tags to ANSI escape sequences. The plain theme is used when color is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """ANSI escape per canvas style tag."""

    name: str
    reset: str
    normal: str
    header: str
    directory: str
    filename: str
    symlink_target: str
    status: str

    def style_code(self, style: str) -> str:
        """Return the escape sequence for a canvas style tag."""
        return getattr(self, style, "") if style in _STYLE_FIELDS else ""


_STYLE_FIELDS = frozenset({"normal", "header", "directory", "filename", "symlink_target", "status"})


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    normal="",
    header="\033[38;5;250m",
    directory="\033[1;34m",
    filename="\033[38;5;252m",
    symlink_target="\033[38;5;109m",
    status="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    normal="",
    header="\033[38;5;153m",
    directory="\033[1;38;5;45m",
    filename="\033[38;5;117m",
    symlink_target="\033[38;5;73m",
    status="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    normal="",
    header="",
    directory="",
    filename="",
    symlink_target="",
    status="",
)

_THEMES = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}


def available_theme_names() -> tuple[str, ...]:
    """Return the names accepted by ``--theme``, sorted."""
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Map ``name`` onto a known theme, case-insensitively; unknown means default."""
    candidate = (name or "").strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return the palette for ``name``; ``no_color`` always yields the plain theme."""
    return PLAIN_THEME if no_color else _THEMES[normalize_theme_name(name)]
