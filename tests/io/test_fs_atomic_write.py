from __future__ import annotations

import os
from pathlib import Path

import pytest

from aquaview.io import fs


def test_write_atomic_replaces_contents_without_leftovers(tmp_path: Path) -> None:
    target = tmp_path / "doc.json"
    target.write_bytes(b"old")
    fs.write_atomic(str(target), b"new")
    assert target.read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]


def test_write_atomic_cleans_tmp_when_rename_fails(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "doc.json"

    def boom(src: str, dst: str) -> None:
        raise OSError("rename failed")

    monkeypatch.setattr(fs, "rename_atomic", boom)
    with pytest.raises(OSError):
        fs.write_atomic(str(target), b"data")
    assert list(tmp_path.iterdir()) == []


def test_makedirs_is_idempotent(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b"
    fs.makedirs(str(nested))
    fs.makedirs(str(nested))
    assert os.path.isdir(nested)
