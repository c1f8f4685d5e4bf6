from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from .errors import PathNotValidError

DEFAULT_BACKUP_NAME = "backup.json"


def validate_path(path: Any) -> Path:
    """
    Convert ``path`` to a Path usable by the OS, without touching the filesystem.

    Raises PathNotValidError for non path-like values, empty paths, embedded NUL
    characters, and text that the filesystem encoding cannot represent (such as
    lone surrogates left over from undecodable bytes).
    """
    try:
        raw = os.fspath(path)
    except TypeError as exc:
        raise PathNotValidError(f"not a filesystem path: {path!r}", path) from exc

    encoding = sys.getfilesystemencoding()
    if isinstance(raw, bytes):
        try:
            raw = raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise PathNotValidError(f"path bytes are not valid {encoding}: {path!r}", path) from exc

    if not raw:
        raise PathNotValidError("path is empty", path)
    if "\x00" in raw:
        raise PathNotValidError(f"path contains a NUL character: {raw!r}", path)
    try:
        raw.encode(encoding)
    except UnicodeEncodeError as exc:
        raise PathNotValidError(f"path is not representable in {encoding}: {raw!r}", path) from exc

    return Path(raw)


def backup_path_for(path: Path, backup_name: str = DEFAULT_BACKUP_NAME) -> Path:
    # Fixed sibling name: only the latest corrupt file is kept.
    if not is_valid_backup_name(backup_name):
        raise ValueError(f"backup name must be a single file name: {backup_name!r}")
    return path.with_name(backup_name)


def is_valid_backup_name(name: str) -> bool:
    if not name or name in (".", "..") or "\x00" in name:
        return False
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    return not any(sep in name for sep in separators)
