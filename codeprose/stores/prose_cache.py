"""Content-addressed cache for generated file descriptions."""

from __future__ import annotations

from collections import OrderedDict
from datetime import UTC, datetime
import hashlib
import json
from pathlib import Path
from typing import Dict, Optional

from ..logging import get_logger
from ..prompting.constants import CACHE_VERSION

_STORE_VERSION = 1
DEFAULT_MAX_ENTRIES = 256

logger = get_logger("stores.prose_cache")


def cache_key(filename: str, content: str, *, version: str = CACHE_VERSION) -> str:
    """SHA-256 over ``version \\0 filename \\0 content``."""
    data = f"{version}\0{filename}\0{content}".encode("utf-8")
    return hashlib.sha256(data).hexdigest()


class ProseCache:
    """Bounded LRU of description texts, optionally persisted as JSON."""

    def __init__(self, path: Path | None = None, *, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._path = path
        self._max_entries = max_entries
        self._entries: "OrderedDict[str, Dict[str, str]]" = OrderedDict()
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry["text"]

    def store(self, key: str, text: str) -> None:
        self._entries[key] = {
            "text": text,
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached description %s", evicted[:12])
        self._dirty = True

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {
            "version": _STORE_VERSION,
            "entries": self._entries,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        self._dirty = False

    def clear(self) -> None:
        self._entries.clear()
        self._dirty = True

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable prose cache at %s", path)
            return
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        for key, raw in entries.items():
            if not isinstance(key, str) or not isinstance(raw, dict):
                continue
            if not isinstance(raw.get("text"), str):
                continue
            self._entries[key] = raw
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        self._dirty = False


__all__ = ["DEFAULT_MAX_ENTRIES", "ProseCache", "cache_key"]
