from __future__ import annotations

from pathlib import Path
from typing import Any


class StoreError(Exception):
    """Base class for every failure surfaced by a TypedFileStore."""

    def __init__(self, message: str, path: Any = None):
        super().__init__(message)
        self.path = path

    def __reduce__(self):
        # Keep ``path`` when pickled; Exception only round-trips ``args``.
        return (type(self), (str(self), self.path))


class PathNotValidError(StoreError):
    """The path cannot be represented as a native filesystem string. No I/O was attempted."""


class StoreFileNotFoundError(StoreError):
    """The data file is missing or could not be read."""


class ContentCorruptError(StoreError):
    """
    The file was read but does not parse as the store's type.

    Never raised directly: a backup of the corrupt file is attempted first and
    one of the two subclasses below reports how that went. ``backup_path`` is
    None when the configured backup name could not form a path.
    """

    def __init__(self, message: str, path: Path, backup_path: Path | None):
        super().__init__(message, path)
        self.backup_path = backup_path

    def __reduce__(self):
        return (type(self), (str(self), self.path, self.backup_path))


class ContentCorruptBackupCreatedError(ContentCorruptError):
    """The corrupt original is preserved at ``backup_path``; starting fresh is safe."""


class ContentCorruptBackupFailedError(ContentCorruptError):
    """Copying the corrupt original failed; overwriting it may lose data."""


class StoreWriteError(StoreError):
    """Serializing or writing the value failed."""
