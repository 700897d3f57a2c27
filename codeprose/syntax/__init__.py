"""Parse-tree boundary: node model, traversal and grammar adapters."""

from .languages import DEFAULT_LANGUAGE, detect_language
from .nodes import SourceTree, SyntaxNode, Visit, walk
from .tree_sitter import TREE_SITTER_AVAILABLE, TreeSitterParser

__all__ = [
    "DEFAULT_LANGUAGE",
    "SourceTree",
    "SyntaxNode",
    "TREE_SITTER_AVAILABLE",
    "TreeSitterParser",
    "Visit",
    "detect_language",
    "walk",
]
