"""Filename to grammar id mapping."""

from __future__ import annotations

from pathlib import PurePath

DEFAULT_LANGUAGE = "javascript"

_LANGUAGE_BY_SUFFIX = {
    ".svelte": "svelte",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".pyi": "python",
    ".rs": "rust",
}


def detect_language(filename: str) -> str:
    """Return the grammar id for ``filename``, defaulting to JavaScript."""
    suffix = PurePath(filename).suffix.lower()
    return _LANGUAGE_BY_SUFFIX.get(suffix, DEFAULT_LANGUAGE)


__all__ = ["DEFAULT_LANGUAGE", "detect_language"]
