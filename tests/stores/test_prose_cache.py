"""Tests for the prose cache."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codeprose.stores.prose_cache import ProseCache, cache_key


def test_cache_key_depends_on_every_input() -> None:
    base = cache_key("a.py", "x = 1")

    assert base == cache_key("a.py", "x = 1")
    assert len(base) == 64
    assert base != cache_key("b.py", "x = 1")
    assert base != cache_key("a.py", "x = 2")
    assert base != cache_key("a.py", "x = 1", version="v4")


def test_least_recently_used_entry_is_evicted() -> None:
    cache = ProseCache(max_entries=2)
    cache.store("one", "1")
    cache.store("two", "2")
    assert cache.get("one") == "1"

    cache.store("three", "3")

    assert "two" not in cache
    assert cache.get("one") == "1"
    assert cache.get("three") == "3"
    assert len(cache) == 2


def test_cache_round_trips_through_disk(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prose.json"
    cache = ProseCache(path)
    cache.store("key", "Some prose.")
    cache.persist()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == 1
    assert data["entries"]["key"]["text"] == "Some prose."
    assert data["entries"]["key"]["updated_at"].endswith("Z")

    assert ProseCache(path).get("key") == "Some prose."


def test_unreadable_cache_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "prose.json"
    path.write_text("{not json", encoding="utf-8")

    cache = ProseCache(path)

    assert len(cache) == 0


def test_persist_without_path_is_a_no_op() -> None:
    cache = ProseCache()
    cache.store("k", "v")
    cache.persist()
    cache.clear()

    assert len(cache) == 0


def test_max_entries_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ProseCache(max_entries=0)
