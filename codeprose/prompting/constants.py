"""Shared constants for the file description prompt and its cache."""

from __future__ import annotations

# Bump whenever the prompt or the markup contract changes; old cache entries
# then stop matching.
CACHE_VERSION = "v5-prose"

MAX_CONTENT_CHARS = 30_000
DEFAULT_MAX_TOKENS = 4096
ANNOTATIONS_PER_PARAGRAPH = "2-4"

SYSTEM_TEMPLATE = "system.j2"
USER_TEMPLATE = "user.j2"


__all__ = [
    "ANNOTATIONS_PER_PARAGRAPH",
    "CACHE_VERSION",
    "DEFAULT_MAX_TOKENS",
    "MAX_CONTENT_CHARS",
    "SYSTEM_TEMPLATE",
    "USER_TEMPLATE",
]
