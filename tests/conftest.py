from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import filestore...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


SETTINGS_ENV_VARS = (
    "FILESTORE_BACKUP_NAME",
    "FILESTORE_INDENT",
    "FILESTORE_SORT_KEYS",
    "FILESTORE_ATOMIC_WRITES",
    "FILESTORE_CREATE_PARENTS",
)


class RecordingFileSystem:
    """
    Disk-backed FileSystem that records every call, and can be told to fail writes or copies.
    """

    def __init__(self) -> None:
        from filestore.disk_store import DiskFileSystem

        self._disk = DiskFileSystem()
        self.calls: list[tuple[str, Path]] = []
        self.fail_write = False
        self.fail_copy = False

    def read_bytes(self, path: Path) -> bytes:
        self.calls.append(("read", path))
        return self._disk.read_bytes(path)

    def write_text(self, path: Path, text: str) -> None:
        self.calls.append(("write", path))
        if self.fail_write:
            raise PermissionError(f"write refused: {path}")
        self._disk.write_text(path, text)

    def copy(self, src: Path, dst: Path) -> None:
        self.calls.append(("copy", src))
        if self.fail_copy:
            raise PermissionError(f"copy refused: {src} -> {dst}")
        self._disk.copy(src, dst)

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    d = tmp_path / "store"
    d.mkdir()
    return d


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    return RecordingFileSystem()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """
    Start each settings test without FILESTORE_* variables, and remove any that
    load_dotenv sets once the test finishes.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
