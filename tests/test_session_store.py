from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from wikireader.navigation.history import NavigationHistory
from wikireader.navigation.store import JsonFileSessionStore, MemorySessionStore, atomic_write_text


def test_memory_store_roundtrip() -> None:
    store = MemorySessionStore()
    assert store.get("k") is None
    store.set("k", "v")
    assert store.get("k") == "v"
    store.delete("k")
    assert store.get("k") is None


def test_json_file_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "session.json"
    JsonFileSessionStore(path).set("articleHistory", '["A"]')
    JsonFileSessionStore(path).set("other", "x")

    reopened = JsonFileSessionStore(path)
    assert reopened.get("articleHistory") == '["A"]'
    assert reopened.get("other") == "x"
    assert json.loads(path.read_text(encoding="utf-8")) == {"articleHistory": '["A"]', "other": "x"}


def test_json_file_store_missing_file(tmp_path: Path) -> None:
    store = JsonFileSessionStore(tmp_path / "absent.json")
    assert store.get("anything") is None


def test_json_file_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileSessionStore(path)
    assert store.get("articleHistory") is None
    store.set("articleHistory", "[]")
    assert store.get("articleHistory") == "[]"


def test_json_file_store_ignores_non_object(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileSessionStore(path).get("articleHistory") is None


def test_json_file_store_delete(tmp_path: Path) -> None:
    store = JsonFileSessionStore(tmp_path / "s.json")
    store.set("a", "1")
    store.delete("a")
    assert store.get("a") is None


def test_atomic_write_text_replaces(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    atomic_write_text(path, "one")
    atomic_write_text(path, "two")
    assert path.read_text(encoding="utf-8") == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]


def test_history_survives_reload_through_file_store(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    history = NavigationHistory.load(JsonFileSessionStore(path), "A")
    history.visit("B")

    reloaded = NavigationHistory.load(JsonFileSessionStore(path), "B")
    assert reloaded.entries == ["A", "B"]
    assert reloaded.can_go_back()


def test_atomic_write_text_removes_temp_file_on_failure(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def failing_fsync(fd: int) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "fsync", failing_fsync)
    with pytest.raises(OSError, match="disk full"):
        atomic_write_text(tmp_path / "out.txt", "data")
    assert list(tmp_path.iterdir()) == []
