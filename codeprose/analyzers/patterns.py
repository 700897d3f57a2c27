"""Text heuristics used when the tree does not carry the needed structure.

Every pattern lives behind a named function so it can be exercised without a
parse tree. Callers are responsible for slicing the source window each
heuristic expects (for example the first 30 characters for keywords).
"""

from __future__ import annotations

import re
from typing import Optional

_KEYWORD_PATTERN = re.compile(
    r"^(?:export\s+(?:default\s+)?)?"
    r"(?:pub(?:\([^)]*\))?\s+)?"
    r"(?:async\s+)?"
    r"(const|let|var|function|class|interface|type|enum|struct|trait|impl|fn|use|import|from|mod|def)\b"
)
_BLOCK_LEAD_PATTERN = re.compile(r"\{[#:@]\w+\s+(.*)\}")
_CONDITION_PATTERN = re.compile(r"if\s*\(?(.*?)[\){:]")
_CALL_TARGET_PATTERN = re.compile(r"(?:await\s+)?(\w[\w.]*)\s*\(")
_RETURN_PREFIX = re.compile(r"^return\s*")

KEYWORD_WINDOW = 30
ASYNC_WINDOW = 20
LABEL_WINDOW = 60
CONDITION_WINDOW = 60
STATEMENT_WINDOW = 80
MAX_CALLEE_LENGTH = 40


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, ending in ``...`` when shortened."""
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def keyword_from_text(text: str, fallback: str) -> str:
    """Return the declaration keyword leading ``text``, else ``fallback``."""
    match = _KEYWORD_PATTERN.match(text[:KEYWORD_WINDOW])
    return match.group(1) if match else fallback


def starts_async(text: str) -> bool:
    return text[:ASYNC_WINDOW].lstrip().startswith("async")


def first_line_label(text: str) -> str:
    """Fallback name: the first line of the node text, at most 40 characters."""
    first = text[:LABEL_WINDOW].split("\n")[0].strip()
    return truncate(first, 40)


def block_lead_expression(opening: str) -> str:
    """Extract ``cond`` from a template block opener such as ``{#if cond}``."""
    match = _BLOCK_LEAD_PATTERN.search(opening)
    return match.group(1).strip() if match else ""


def callee_name(text: str) -> Optional[str]:
    """Reduce an invoked expression such as ``api.client.fetch`` to ``fetch``."""
    name = text.split(".")[-1].split("(")[0].strip()
    if not name or len(name) >= MAX_CALLEE_LENGTH:
        return None
    return name


def condition_from_text(text: str) -> str:
    """Scrape the condition of an ``if`` from raw text, else ``a condition``."""
    match = _CONDITION_PATTERN.search(text[:CONDITION_WINDOW])
    return match.group(1).strip() if match else "a condition"


def call_target(text: str) -> Optional[str]:
    """Return the dotted callee of the first call in ``text``, if any."""
    match = _CALL_TARGET_PATTERN.search(text[:STATEMENT_WINDOW])
    return match.group(1) if match else None


def strip_return(text: str) -> str:
    return _RETURN_PREFIX.sub("", text).strip()


def strip_type_prefix(text: str) -> str:
    """Drop a leading ``:`` or ``->`` from a type annotation."""
    cleaned = re.sub(r"^:\s*", "", text)
    cleaned = re.sub(r"^\s*->\s*", "", cleaned)
    return cleaned.strip()


__all__ = [
    "block_lead_expression",
    "call_target",
    "callee_name",
    "condition_from_text",
    "first_line_label",
    "keyword_from_text",
    "starts_async",
    "strip_return",
    "strip_type_prefix",
    "truncate",
]
