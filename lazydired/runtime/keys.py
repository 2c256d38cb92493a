"""Listing key table: named key tokens bound to view commands.

Tokens are Emacs-style names (``RET``, ``SPC``, ``C-n``) or single printable
characters. Raw control characters from a terminal are mapped onto the same
names before lookup.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..errors import DiredError
from .view import MARK_COPY, MARK_DELETE, MARK_SELECT, DiredView

RAW_KEY_NAMES = {
    "\r": "RET",
    "\n": "LF",
    " ": "SPC",
    "\x7f": "DEL",
    "\x0e": "C-n",
    "\x10": "C-p",
}


@dataclass(frozen=True)
class KeyBinding:
    keys: tuple[str, ...]
    command: Callable[[], object]


class KeyTable:
    """Token to command lookup; a later binding for a token replaces the earlier one."""

    def __init__(self, *bindings: KeyBinding) -> None:
        self._commands: dict[str, Callable[[], object]] = {}
        self.bind(*bindings)

    def bind(self, *bindings: KeyBinding) -> KeyTable:
        for binding in bindings:
            for key in binding.keys:
                self._commands[key] = binding.command
        return self

    def dispatch(self, key: str) -> bool:
        """Run the command bound to ``key``; return whether one was bound."""
        command = self._commands.get(RAW_KEY_NAMES.get(key, key))
        if command is None:
            return False
        command()
        return True


def _reporting(view: DiredView, action: Callable[[], object]) -> Callable[[], None]:
    """Wrap ``action`` so listing errors become the view status line."""

    def run() -> None:
        try:
            action()
        except DiredError as exc:
            view.status = str(exc)

    return run


def build_dired_key_table(
    view: DiredView,
    prompt: Callable[[str], str | None] | None = None,
) -> KeyTable:
    """Bind the listing command surface to its default keys.

    ``prompt`` asks the host for a line of input; the sort and time-format
    keys are only bound when it is provided.
    """

    def sort_from_prompt() -> None:
        assert prompt is not None
        answer = prompt("Sort order [nesdug+-r]: ")
        if answer:
            view.sort(answer)

    def time_format_from_prompt() -> None:
        assert prompt is not None
        answer = prompt("Time format: ")
        if answer:
            view.set_time_format(answer)

    table = KeyTable(
        KeyBinding(("RET", "LF", "right"), _reporting(view, view.select)),
        KeyBinding(("SPC", "n", "C-n", "down"), view.next_entry),
        KeyBinding(("p", "C-p", "up"), view.previous_entry),
        KeyBinding(("m",), lambda: view.mark(MARK_SELECT)),
        KeyBinding(("d",), lambda: view.mark(MARK_DELETE)),
        KeyBinding(("c",), lambda: view.mark(MARK_COPY)),
        KeyBinding(("u",), view.unmark),
        KeyBinding(("DEL",), view.unmark_backward),
        KeyBinding(("g",), _reporting(view, view.refresh)),
        KeyBinding((".",), view.toggle_dot_files),
        KeyBinding(("^", "left", "U"), _reporting(view, view.parent)),
        KeyBinding(("H",), view.toggle_human),
        KeyBinding(("N",), view.toggle_numeric_ids),
        KeyBinding(("(",), view.cycle_details),
        KeyBinding(("T",), view.cycle_time_format),
    )
    if prompt is not None:
        table.bind(
            KeyBinding(("s",), sort_from_prompt),
            KeyBinding(("t",), _reporting(view, time_format_from_prompt)),
        )
    return table


__all__ = [
    "RAW_KEY_NAMES",
    "KeyBinding",
    "KeyTable",
    "build_dired_key_table",
]
