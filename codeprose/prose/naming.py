"""Wording helpers shared by the caption generators."""

from __future__ import annotations

import re

from ..models import CLASS, CONTROL, EXPORT, FUNCTION, IMPORT, TYPE, VARIABLE

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")

_KIND_LABELS = {
    FUNCTION: "function",
    CLASS: "class",
    VARIABLE: "variable",
    IMPORT: "import",
    EXPORT: "export",
    CONTROL: "control structure",
    TYPE: "type definition",
}


def humanize_name(name: str) -> str:
    """``loginUser`` -> ``login User``, ``is_valid`` -> ``is valid``."""
    result = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    return result.replace("_", " ").replace("-", " ").strip()


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def pluralize(word: str) -> str:
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    if word.endswith("y") and word[-2:-1] not in {"a", "e", "i", "o", "u"}:
        return word[:-1] + "ies"
    return word + "s"


def plural(count: int, word: str) -> str:
    """``plural(1, "loop")`` -> ``1 loop``; ``plural(2, "class")`` -> ``2 classes``."""
    return f"{count} {word if count == 1 else pluralize(word)}"


def kind_label(kind: str) -> str:
    return _KIND_LABELS.get(kind, kind)


__all__ = ["capitalize_first", "humanize_name", "kind_label", "plural", "pluralize"]
