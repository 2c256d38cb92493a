"""Exception types raised by listing sessions and the command surface."""

from __future__ import annotations

from pathlib import Path


class DiredError(Exception):
    """Base class for lazydired errors."""


class DirectoryOpenError(DiredError):
    """A directory could not be scanned; the previous snapshot is kept."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"cannot open directory {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownTimeFormatError(DiredError, LookupError):
    """A time-format name or value did not match any known format."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"unknown time format: {value!r}")


__all__ = [
    "DiredError",
    "DirectoryOpenError",
    "UnknownTimeFormatError",
]
