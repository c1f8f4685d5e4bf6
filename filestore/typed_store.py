from __future__ import annotations

import contextlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .disk_store import DiskFileSystem
from .errors import (
    ContentCorruptBackupCreatedError,
    ContentCorruptBackupFailedError,
    ContentCorruptError,
    StoreFileNotFoundError,
    StoreWriteError,
)
from .interfaces import FileSystem
from .paths import backup_path_for, validate_path
from .settings import StoreSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_DIRTY_COUNT = sys.maxsize


def _disk_for(settings: StoreSettings) -> DiskFileSystem:
    return DiskFileSystem(atomic=settings.atomic_writes, create_parents=settings.create_parents)


class TypedFileStore(Generic[T]):
    """
    Keeps one typed value in memory and mirrors it to a JSON file.

    - ``load`` reads an existing file; ``setup`` writes a default value first.
    - ``value_mut`` hands out the live value and counts the access as a pending
      write; ``flush`` persists only when something is pending.
    - ``update`` transforms and persists in one step.

    T is anything pydantic can validate from and dump to JSON: BaseModel
    subclasses, dataclasses, TypedDicts, ``dict[str, int]`` and so on. The default
    used by ``setup`` is validated against T before anything is written.
    Nothing is written when the store is garbage collected.
    """

    def __init__(
        self,
        model: Any,
        value: T,
        path: Path,
        *,
        settings: StoreSettings | None = None,
        fs: FileSystem | None = None,
        adapter: TypeAdapter[T] | None = None,
    ):
        self._settings = settings or StoreSettings()
        self._fs: FileSystem = fs if fs is not None else _disk_for(self._settings)
        self._adapter: TypeAdapter[T] = adapter if adapter is not None else TypeAdapter(model)
        self._model = model
        self._value = value
        self._path = path
        self._dirty_count = 0

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        model: Any,
        path: Any,
        *,
        settings: StoreSettings | None = None,
        fs: FileSystem | None = None,
    ) -> "TypedFileStore[T]":
        """
        Read ``path`` and parse it as ``model``.

        Raises:
            PathNotValidError: ``path`` is unusable; nothing was touched.
            StoreFileNotFoundError: the file is missing or unreadable; nothing was written.
            ContentCorruptBackupCreatedError: the file does not parse, and a copy was
                saved next to it.
            ContentCorruptBackupFailedError: the file does not parse, and the copy failed.
        """
        settings = settings or StoreSettings()
        file_path = validate_path(path)
        fs = fs if fs is not None else _disk_for(settings)

        try:
            raw = fs.read_bytes(file_path)
        except OSError as exc:
            raise StoreFileNotFoundError(f"Cannot read store file {file_path}: {exc}", file_path) from exc

        adapter: TypeAdapter[T] = TypeAdapter(model)
        try:
            value = adapter.validate_json(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValidationError) as exc:
            raise _backup_corrupt(fs, file_path, settings.backup_name) from exc

        logger.debug("Loaded store file %s", file_path)
        return cls(model, value, file_path, settings=settings, fs=fs, adapter=adapter)

    @classmethod
    def setup(
        cls,
        model: Any,
        path: Any,
        *,
        default_factory: Callable[[], T] | None = None,
        settings: StoreSettings | None = None,
        fs: FileSystem | None = None,
    ) -> "TypedFileStore[T]":
        """
        Write a default value to ``path`` (creating or truncating it) and return its store.

        The default comes from ``default_factory`` or, when omitted, from calling
        ``model()``. Raises PathNotValidError before any I/O, or StoreWriteError,
        including when the default itself does not validate as ``model``.
        """
        file_path = validate_path(path)
        factory = default_factory if default_factory is not None else model
        adapter: TypeAdapter[T] = TypeAdapter(model)
        try:
            default = adapter.validate_python(factory())
        except ValidationError as exc:
            raise StoreWriteError(f"Default value for {file_path} is not a valid {model!r}: {exc}", file_path) from exc
        store = cls(model, default, file_path, settings=settings, fs=fs, adapter=adapter)
        store.write()
        return store

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return backup_path_for(self._path, self._settings.backup_name)

    @property
    def value(self) -> T:
        return self._value

    @property
    def dirty_count(self) -> int:
        return self._dirty_count

    @property
    def is_dirty(self) -> bool:
        return self._dirty_count > 0

    def value_mut(self) -> T:
        """
        Return the live value for in-place edits.

        Every call counts as a pending write, whether or not the caller changes anything.
        """
        self._dirty_count = min(self._dirty_count + 1, MAX_DIRTY_COUNT)
        return self._value

    @contextlib.contextmanager
    def editing(self) -> Iterator[T]:
        """Yield the live value and flush when the block exits without an exception."""
        value = self.value_mut()
        yield value
        self.flush()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def update(self, transform: Callable[[T], T]) -> None:
        new_value = transform(self._value)
        self._write(new_value)
        self._value = new_value
        self._dirty_count = 0

    def flush(self) -> bool:
        """Write the value if there are pending mutations. Returns whether a write happened."""
        if self._dirty_count == 0:
            return False
        pending = self._dirty_count
        self._write(self._value)
        self._dirty_count = 0
        logger.debug("Flushed %s (%d pending mutation(s))", self._path, pending)
        return True

    def write(self) -> None:
        self._write(self._value)
        self._dirty_count = 0

    def _serialize(self, value: T) -> str:
        doc = self._adapter.dump_python(value, mode="json")
        text = json.dumps(
            doc,
            indent=self._settings.indent,
            sort_keys=self._settings.sort_keys,
            ensure_ascii=False,
        )
        return text + "\n"

    def _write(self, value: T) -> None:
        try:
            text = self._serialize(value)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise StoreWriteError(f"Cannot serialize value for {self._path}: {exc}", self._path) from exc
        try:
            self._fs.write_text(self._path, text)
        except OSError as exc:
            raise StoreWriteError(f"Cannot write store file {self._path}: {exc}", self._path) from exc
        logger.debug("Wrote store file %s", self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self._path)!r}, dirty_count={self._dirty_count})"


def _backup_corrupt(fs: FileSystem, path: Path, backup_name: str) -> ContentCorruptError:
    try:
        backup = backup_path_for(path, backup_name)
    except ValueError as exc:
        logger.error("Store file %s is corrupt and backup name %r is unusable: %s", path, backup_name, exc)
        return ContentCorruptBackupFailedError(
            f"Store file {path} is corrupt; no backup made, backup name {backup_name!r} is unusable",
            path,
            None,
        )
    try:
        fs.copy(path, backup)
    except OSError as exc:
        logger.error("Store file %s is corrupt and backing it up to %s failed: %s", path, backup, exc)
        return ContentCorruptBackupFailedError(
            f"Store file {path} is corrupt; backup to {backup} failed: {exc}",
            path,
            backup,
        )
    logger.warning("Store file %s is corrupt; original copied to %s", path, backup)
    return ContentCorruptBackupCreatedError(
        f"Store file {path} is corrupt; original copied to {backup}",
        path,
        backup,
    )


def load_or_setup(
    model: Any,
    path: Any,
    *,
    default_factory: Callable[[], T] | None = None,
    settings: StoreSettings | None = None,
    fs: FileSystem | None = None,
) -> TypedFileStore[T]:
    """
    Load ``path``, or start from a default when there is nothing usable to load.

    Falls back to ``setup`` when the file is missing or when it was corrupt but
    its backup succeeded. A failed backup is re-raised so the original is not
    overwritten.
    """
    try:
        return TypedFileStore.load(model, path, settings=settings, fs=fs)
    except StoreFileNotFoundError:
        logger.debug("No store file at %s; writing defaults", path)
    except ContentCorruptBackupCreatedError as exc:
        logger.info("Replacing corrupt store file %s with defaults (backup at %s)", exc.path, exc.backup_path)
    return TypedFileStore.setup(model, path, default_factory=default_factory, settings=settings, fs=fs)
