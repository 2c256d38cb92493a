"""Host-facing runtime pieces: settings persistence, the listing view,
mode hooks and key bindings."""

from __future__ import annotations

from .keys import KeyBinding, KeyTable, build_dired_key_table
from .mode import DiredMode, ListMode
from .view import DiredView

__all__ = [
    "DiredView",
    "DiredMode",
    "ListMode",
    "KeyBinding",
    "KeyTable",
    "build_dired_key_table",
]
