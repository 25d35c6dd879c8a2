from __future__ import annotations

import os
from pathlib import Path

import pytest

from release_notifier.platform.files import atomic_write_text, read_text_if_exists


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "cache.json"
    atomic_write_text(path, '{"releases":[]}')

    assert path.read_text(encoding="utf-8") == '{"releases":[]}'


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "cache.json"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload")

    assert list(tmp_path.glob(".cache.json.*.tmp")) == []
    assert not path.exists()


def test_read_text_if_exists_missing(tmp_path: Path) -> None:
    assert read_text_if_exists(tmp_path / "missing.json") is None


def test_read_text_if_exists_reads(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text("{}", encoding="utf-8")

    assert read_text_if_exists(path) == "{}"


def test_read_text_if_exists_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_text_if_exists(tmp_path)
