"""Domain datatypes for one directory listing snapshot."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path

UNMARKED = " "


@dataclass(eq=False)
class DirEntry:
    """One filesystem object observed by ``lstat`` within a listing.

    ``hidden``, ``mark`` and ``render_offset`` change over the life of a
    snapshot; everything else is captured once at scan time. Entries compare
    by identity so a session can track "the entry under the cursor" across
    re-sorts.
    """

    name: str
    full_path: Path
    mode: int
    nlink: int = 1
    uid: int = 0
    gid: int = 0
    rdev: int = 0
    mtime: float = 0.0
    size: int = 0
    hidden: bool = False
    mark: str = UNMARKED
    render_offset: int = 0

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def is_device(self) -> bool:
        """Return whether this is a character or block special file."""
        return stat.S_ISCHR(self.mode) or stat.S_ISBLK(self.mode)

    @property
    def extension(self) -> str:
        """Return the name suffix starting at the last dot, or ``""``.

        A leading dot alone (``.bashrc``) does not start an extension.
        """
        idx = self.name.rfind(".")
        if idx <= 0:
            return ""
        return self.name[idx:]


def entry_from_stat(name: str, full_path: Path, st) -> DirEntry:
    """Build a ``DirEntry`` from an ``os.stat_result``-like object."""
    return DirEntry(
        name=name,
        full_path=full_path,
        mode=int(st.st_mode),
        nlink=int(st.st_nlink),
        uid=int(st.st_uid),
        gid=int(st.st_gid),
        rdev=int(getattr(st, "st_rdev", 0) or 0),
        mtime=float(st.st_mtime),
        size=int(st.st_size),
    )


__all__ = [
    "UNMARKED",
    "DirEntry",
    "entry_from_stat",
]
