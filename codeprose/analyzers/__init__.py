"""Structural analysis of parsed source files."""

from .classifier import classify, concept_category, table_for
from .concepts import concept_at, extract_concepts, group_concepts
from .structure import build_declaration, extract_structure
from .summary import summarize

__all__ = [
    "build_declaration",
    "classify",
    "concept_at",
    "concept_category",
    "extract_concepts",
    "extract_structure",
    "group_concepts",
    "summarize",
    "table_for",
]
