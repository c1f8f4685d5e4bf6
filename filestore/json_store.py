from __future__ import annotations

import shutil
from pathlib import Path


def read_bytes(path: Path) -> bytes:
    """
    Read the raw file content.

    Raises OSError for missing files, directories, or permission problems.
    """
    return path.read_bytes()


def write_text(path: Path, text: str, *, create_parents: bool = True) -> None:
    """
    Write text in one call, creating the file if absent and truncating it otherwise.
    """
    if create_parents:
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(text)


def atomic_write_text(path: Path, text: str, *, create_parents: bool = True) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    if create_parents:
        path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(text)
    tmp_path.replace(path)


def copy_bytes(src: Path, dst: Path) -> None:
    # Verbatim copy; overwrites dst. Raises shutil.SameFileError when src is dst.
    shutil.copyfile(src, dst)
