from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """
    The filesystem calls a store makes. Swap in a stub to observe or fake I/O.
    """

    def read_bytes(self, path: Path) -> bytes:
        """Return the file content. Raise OSError when it cannot be read."""
        ...

    def write_text(self, path: Path, text: str) -> None:
        """Replace the file content with ``text``. Raise OSError on failure."""
        ...

    def copy(self, src: Path, dst: Path) -> None:
        """Copy ``src`` byte for byte over ``dst``. Raise OSError on failure."""
        ...
