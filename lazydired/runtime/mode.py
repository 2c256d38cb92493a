"""Display-mode hooks composed by delegation.

``ListMode`` is the base capability set a host calls into. ``DiredMode``
implements the hooks it cares about and forwards every other hook to the
``ListMode`` instance it references.
"""

from __future__ import annotations

from pathlib import Path

from ..listing.fs import FileSystem, LocalFileSystem, is_directory, is_file_pattern
from .view import DiredView

PROBE_EXISTING_SESSION = 100
PROBE_DIRECTORY = 95
PROBE_FILE_PATTERN = 90


class ListMode:
    """Base mode: a read-only list of lines with no listing semantics."""

    name = "list"

    def probe(self, path: Path, fs: FileSystem, view: DiredView | None = None) -> int:
        return 0

    def initialize(self, view: DiredView, path: Path) -> None:
        view.status = ""

    def display(self, view: DiredView) -> None:
        return None

    def teardown(self, view: DiredView) -> None:
        view.status = ""

    def default_path(self, view: DiredView) -> Path | None:
        return None

    def describe(self) -> str:
        return f"{self.name} mode"


class DiredMode:
    """Directory-listing mode layered over a ``ListMode`` base."""

    name = "dired"

    def __init__(self, base: ListMode | None = None, fs: FileSystem | None = None) -> None:
        self.base = base if base is not None else ListMode()
        self.fs = fs if fs is not None else LocalFileSystem()
        self._last_previewed: Path | None = None

    def __getattr__(self, name: str):
        # Only reached for hooks this class does not define.
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)

    def probe(self, path: Path, fs: FileSystem | None = None, view: DiredView | None = None) -> int:
        """Score how well this mode fits ``path`` (0 means not applicable)."""
        fs = fs if fs is not None else self.fs
        if view is not None and view.session is not None and view.session.display_path == path:
            return PROBE_EXISTING_SESSION
        if is_directory(fs, path):
            return PROBE_DIRECTORY
        try:
            fs.lstat(path)
        except FileNotFoundError:
            if is_file_pattern(path):
                return PROBE_FILE_PATTERN
        except OSError:
            return 0
        return 0

    def initialize(self, view: DiredView, path: Path) -> None:
        self.base.initialize(view, path)
        self._last_previewed = None
        view.open_directory(path)

    def display(self, view: DiredView) -> None:
        """Refresh the listing and preview the entry under the cursor once."""
        view.refresh_display()
        current = view.current_path()
        if current is not None and current != self._last_previewed:
            self._last_previewed = current
            if view.preview_file is not None and not is_directory(view.fs, current):
                view.preview_file(current)

    def teardown(self, view: DiredView) -> None:
        view.close()
        self._last_previewed = None
        self.base.teardown(view)

    def default_path(self, view: DiredView) -> Path | None:
        """Return the directory new file prompts should start in."""
        if view.session is None:
            return self.base.default_path(view)
        return view.session.path


__all__ = [
    "PROBE_EXISTING_SESSION",
    "PROBE_DIRECTORY",
    "PROBE_FILE_PATTERN",
    "ListMode",
    "DiredMode",
]
