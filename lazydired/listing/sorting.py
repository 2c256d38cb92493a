"""Sort specification grammar and the stable multi-key entry sort.

A ``SortSpec`` combines one primary key, a directories-first grouping flag
and a direction. Ties on the primary key fall through to extension and then
name, so distinct names never compare equal and every sort is a total order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import IntEnum

from .types import DirEntry


class SortKey(IntEnum):
    NAME = 1
    EXTENSION = 2
    SIZE = 4
    DATE = 8


_KEY_CHARS = {
    "n": SortKey.NAME,
    "e": SortKey.EXTENSION,
    "s": SortKey.SIZE,
    "d": SortKey.DATE,
}
_CHAR_FOR_KEY = {key: ch for ch, key in _KEY_CHARS.items()}


@dataclass(frozen=True)
class SortSpec:
    """Primary key plus grouping and direction flags."""

    key: SortKey = SortKey.NAME
    group_dirs: bool = True
    descending: bool = False

    def to_grammar(self) -> str:
        """Return a grammar string that reproduces this spec from any base."""
        return "".join(
            (
                _CHAR_FOR_KEY[self.key],
                "g" if self.group_dirs else "u",
                "-" if self.descending else "+",
            )
        )


DEFAULT_SORT_SPEC = SortSpec()


def parse_sort_spec(text: str, base: SortSpec = DEFAULT_SORT_SPEC) -> SortSpec:
    """Apply grammar characters in ``text`` to ``base`` from left to right.

    ``n``/``e``/``s``/``d`` select the primary key (last one wins), ``g`` and
    ``u`` turn directory grouping on and off, ``r`` flips the direction and
    ``+``/``-`` set it. Matching is case-insensitive; any other character is
    ignored.
    """
    spec = base
    for ch in text or "":
        ch = ch.lower()
        if ch in _KEY_CHARS:
            spec = replace(spec, key=_KEY_CHARS[ch])
        elif ch == "g":
            spec = replace(spec, group_dirs=True)
        elif ch == "u":
            spec = replace(spec, group_dirs=False)
        elif ch == "r":
            spec = replace(spec, descending=not spec.descending)
        elif ch == "+":
            spec = replace(spec, descending=False)
        elif ch == "-":
            spec = replace(spec, descending=True)
    return spec


def _collate(text: str) -> tuple[str, str]:
    return (text.casefold(), text)


def sort_key_for(entry: DirEntry, key: SortKey) -> tuple:
    """Return the comparison tuple for ``entry`` under primary ``key``."""
    name = _collate(entry.name)
    if key == SortKey.NAME:
        return (name,)
    extension = _collate(entry.extension)
    if key == SortKey.EXTENSION:
        return (extension, name)
    if key == SortKey.SIZE:
        return (entry.size, extension, name)
    return (entry.mtime, extension, name)


def sort_entries(entries: Iterable[DirEntry], spec: SortSpec) -> list[DirEntry]:
    """Return ``entries`` ordered by ``spec``.

    Hidden entries are sorted with visible ones. Descending order reverses
    the key comparison but directories stay first when grouping is on.
    """
    ordered = sorted(entries, key=lambda entry: sort_key_for(entry, spec.key), reverse=spec.descending)
    if not spec.group_dirs:
        return ordered
    return [entry for entry in ordered if entry.is_dir] + [entry for entry in ordered if not entry.is_dir]


__all__ = [
    "SortKey",
    "SortSpec",
    "DEFAULT_SORT_SPEC",
    "parse_sort_spec",
    "sort_key_for",
    "sort_entries",
]
