"""Persistent stores used by codeprose."""

from .prose_cache import ProseCache, cache_key

__all__ = ["ProseCache", "cache_key"]
