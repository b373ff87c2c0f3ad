"""Tests for relcfg.platform.files."""

from __future__ import annotations

from pathlib import Path

import pytest

from relcfg.platform.files import atomic_write_text, read_text


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "release.config.cjs"
    atomic_write_text(target, "module.exports = {};\n")
    assert target.read_text(encoding="utf-8") == "module.exports = {};\n"
    assert [p.name for p in target.parent.iterdir()] == ["release.config.cjs"]


def test_atomic_write_replaces(tmp_path: Path) -> None:
    target = tmp_path / ".releaserc.json"
    target.write_text("{}", encoding="utf-8")
    atomic_write_text(target, '{"branches": ["main"]}\n')
    assert target.read_text(encoding="utf-8") == '{"branches": ["main"]}\n'


def test_atomic_write_keeps_newlines(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    atomic_write_text(target, "a\nb\n")
    assert target.read_bytes() == b"a\nb\n"


def test_read_text_strips_bom(tmp_path: Path) -> None:
    target = tmp_path / "a.json"
    target.write_bytes(b"\xef\xbb\xbf{}")
    assert read_text(target) == "{}"


def test_read_text_rejects_invalid_utf8(tmp_path: Path) -> None:
    target = tmp_path / "a.json"
    target.write_bytes(b"\xff\xfe")
    with pytest.raises(UnicodeDecodeError):
        read_text(target)
