"""Command-line front door for lazydired.

Loads persisted display settings, applies command-line overrides, lists one
directory (or single-directory pattern) and prints the rendered listing.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from dataclasses import replace
from pathlib import Path

from .canvas import TextCanvas
from .errors import DirectoryOpenError, UnknownTimeFormatError
from .listing.columns import DetailMode
from .listing.formatting import IdDisplay, SizeMode
from .listing.fs import is_file_pattern
from .runtime import config
from .runtime.view import DiredView
from .settings import DiredSettings
from .ui_theme import available_theme_names, resolve_theme

SIZE_MODE_CHOICES = {
    "exact": SizeMode.EXACT,
    "decimal": SizeMode.HUMAN_DECIMAL,
    "binary": SizeMode.HUMAN_BINARY,
}
ID_DISPLAY_CHOICES = {
    "name": IdDisplay.NAME,
    "numeric": IdDisplay.NUMERIC,
    "hidden": IdDisplay.HIDDEN,
}
DETAIL_MODE_CHOICES = {
    "auto": DetailMode.AUTO,
    "hide": DetailMode.HIDE,
    "show": DetailMode.SHOW,
}


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default listing width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List a directory with sortable, width-aware detail columns.")
    parser.add_argument("path", nargs="?", default=None, help="Directory or pattern. Defaults to current directory.")
    parser.add_argument("--sort", metavar="SPEC", help="Sort order: any combination of 'nesdgur+-'.")
    parser.add_argument(
        "--time-format",
        metavar="NAME",
        help="compact, dos, dos-long, touch, touch-long, full or seconds.",
    )
    parser.add_argument("--human", choices=sorted(SIZE_MODE_CHOICES), help="Size display.")
    parser.add_argument("--ids", choices=sorted(ID_DISPLAY_CHOICES), help="Owner/group display.")
    parser.add_argument("--details", choices=sorted(DETAIL_MODE_CHOICES), help="Detail column policy.")
    parser.add_argument("-a", "--all", action="store_true", help="Show dot files and system files.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Display width (default: terminal width).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--save", action="store_true", help="Persist the resulting display settings.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def settings_from_args(args: argparse.Namespace, base: DiredSettings) -> DiredSettings:
    """Apply command-line overrides on top of ``base``."""
    settings = base
    if args.sort:
        settings = settings.with_sort(args.sort)
    if args.time_format:
        settings = settings.with_time_format(args.time_format)
    if args.human:
        settings = replace(settings, size_mode=SIZE_MODE_CHOICES[args.human])
    if args.ids:
        settings = replace(settings, id_display=ID_DISPLAY_CHOICES[args.ids])
    if args.details:
        settings = replace(settings, detail_mode=DETAIL_MODE_CHOICES[args.details])
    if args.all:
        settings = replace(
            settings,
            filter=replace(settings.filter, show_dot_files=True, show_system_files=True),
        )
    return settings


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the listing for a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists() and not is_file_pattern(path):
        raise SystemExit(f"Path not found: {path}")

    try:
        settings = settings_from_args(args, config.load_settings())
    except UnknownTimeFormatError as exc:
        raise SystemExit(str(exc)) from None
    if args.save:
        config.save_settings(settings)

    width = args.width if args.width is not None else _default_render_width()
    canvas = TextCanvas(width)
    view = DiredView(canvas, settings)
    try:
        view.open_directory(path.absolute())
    except DirectoryOpenError as exc:
        raise SystemExit(str(exc)) from None

    no_color = args.no_color or not sys.stdout.isatty()
    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=no_color)
    sys.stdout.write(canvas.to_ansi(theme))


if __name__ == "__main__":
    main()
