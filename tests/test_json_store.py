from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from filestore.json_store import atomic_write_text, copy_bytes, read_bytes, write_text


def test_write_text_truncates_existing_content(tmp_path: Path):
    path = tmp_path / "f.json"
    path.write_text("a much longer previous payload", encoding="utf-8")

    write_text(path, "{}\n")

    assert read_bytes(path) == b"{}\n"


def test_write_text_without_create_parents_needs_existing_dir(tmp_path: Path):
    path = tmp_path / "missing" / "f.json"
    with pytest.raises(FileNotFoundError):
        write_text(path, "{}", create_parents=False)

    write_text(path, "{}")
    assert path.read_text(encoding="utf-8") == "{}"


def test_atomic_write_text_replaces_target(tmp_path: Path):
    path = tmp_path / "f.json"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"
    assert not (tmp_path / "f.json.tmp").exists()


def test_copy_bytes_is_verbatim_and_overwrites(tmp_path: Path):
    src = tmp_path / "src.json"
    dst = tmp_path / "backup.json"
    src.write_bytes(b"\x00\xffnot json")
    dst.write_bytes(b"previous backup")

    copy_bytes(src, dst)

    assert dst.read_bytes() == b"\x00\xffnot json"


def test_copy_bytes_onto_itself_is_an_oserror(tmp_path: Path):
    src = tmp_path / "backup.json"
    src.write_bytes(b"x")
    with pytest.raises(shutil.SameFileError) as ei:
        copy_bytes(src, src)
    assert isinstance(ei.value, OSError)


def test_read_bytes_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_bytes(tmp_path / "nope.json")
