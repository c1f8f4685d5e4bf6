from __future__ import annotations

from pathlib import Path

from .json_store import atomic_write_text, copy_bytes, read_bytes, write_text

from .interfaces import FileSystem


class DiskFileSystem(FileSystem):
    """
    Local-disk FileSystem.

    - Writes truncate the target in place unless ``atomic`` is set, in which case
      a temp file is written and moved over the target.
    - Missing parent directories are created on write when ``create_parents`` is set.
    """

    def __init__(self, *, atomic: bool = False, create_parents: bool = True):
        self._atomic = atomic
        self._create_parents = create_parents

    @property
    def atomic(self) -> bool:
        return self._atomic

    def read_bytes(self, path: Path) -> bytes:
        return read_bytes(path)

    def write_text(self, path: Path, text: str) -> None:
        if self._atomic:
            atomic_write_text(path, text, create_parents=self._create_parents)
        else:
            write_text(path, text, create_parents=self._create_parents)

    def copy(self, src: Path, dst: Path) -> None:
        copy_bytes(src, dst)
