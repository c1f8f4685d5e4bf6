from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .paths import is_valid_backup_name

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = "local.env"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default


@dataclass(frozen=True)
class StoreSettings:
    # Sibling file that receives a copy of a corrupt data file
    backup_name: str = "backup.json"

    # Serialization
    indent: int = 2
    sort_keys: bool = False

    # Writes (direct truncate unless atomic_writes is enabled)
    atomic_writes: bool = False
    create_parents: bool = True


def get_settings(env_file: str | None = DEFAULT_ENV_FILE) -> StoreSettings:
    if env_file:
        load_dotenv(env_file)

    defaults = StoreSettings()

    backup_name = os.getenv("FILESTORE_BACKUP_NAME", defaults.backup_name).strip() or defaults.backup_name
    if not is_valid_backup_name(backup_name):
        logger.warning("Ignoring FILESTORE_BACKUP_NAME=%r (not a single file name); using %s", backup_name, defaults.backup_name)
        backup_name = defaults.backup_name
    indent = _env_int("FILESTORE_INDENT", defaults.indent)
    sort_keys = _env_bool("FILESTORE_SORT_KEYS", defaults.sort_keys)
    atomic_writes = _env_bool("FILESTORE_ATOMIC_WRITES", defaults.atomic_writes)
    create_parents = _env_bool("FILESTORE_CREATE_PARENTS", defaults.create_parents)

    return StoreSettings(
        backup_name=backup_name,
        indent=indent,
        sort_keys=sort_keys,
        atomic_writes=atomic_writes,
        create_parents=create_parents,
    )
