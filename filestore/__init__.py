from __future__ import annotations

from .disk_store import DiskFileSystem
from .errors import (
    ContentCorruptBackupCreatedError,
    ContentCorruptBackupFailedError,
    ContentCorruptError,
    PathNotValidError,
    StoreError,
    StoreFileNotFoundError,
    StoreWriteError,
)
from .interfaces import FileSystem
from .typed_store import MAX_DIRTY_COUNT, TypedFileStore, load_or_setup

__all__ = [
    "TypedFileStore",
    "load_or_setup",
    "MAX_DIRTY_COUNT",
    "FileSystem",
    "DiskFileSystem",
    "StoreError",
    "PathNotValidError",
    "StoreFileNotFoundError",
    "ContentCorruptError",
    "ContentCorruptBackupCreatedError",
    "ContentCorruptBackupFailedError",
    "StoreWriteError",
]
