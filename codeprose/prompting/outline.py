"""Flattened, id-indexed outline of a file's declaration hierarchy."""

from __future__ import annotations

from typing import Dict, List

from ..models import FUNCTION, IMPORT, DeclarationNode, FileStructure, Outline, OutlineEntry
from ..analyzers.patterns import truncate

IMPORT_GROUP_NAME_LIMIT = 60
PREVIEW_LINES = 2


def line_number(source: str, offset: int) -> int:
    """1-based line of ``offset`` in ``source``."""
    return source.count("\n", 0, max(0, offset)) + 1


def import_group(structure: FileStructure) -> DeclarationNode:
    """Synthesize one declaration spanning every import of ``structure``."""
    names = ", ".join(node.name for node in structure.imports)
    return DeclarationNode(
        kind=IMPORT,
        name=truncate(names, IMPORT_GROUP_NAME_LIMIT),
        keyword="import",
        start=min(node.start for node in structure.imports),
        end=max(node.end for node in structure.imports),
    )


def build_outline(structure: FileStructure, source: str) -> Outline:
    """Assign pre-order ids and render the indented outline text.

    The import group, when present, always receives id 1.
    """
    lines: List[str] = []
    entries: Dict[int, OutlineEntry] = {}

    def _record(node: DeclarationNode, depth: int) -> OutlineEntry:
        entry = OutlineEntry(
            id=len(entries) + 1,
            node=node,
            source_snippet=source[node.start : node.end],
            depth=depth,
        )
        entries[entry.id] = entry
        return entry

    if structure.imports:
        entry = _record(import_group(structure), 0)
        node = entry.node
        lines.append(f"imports (lines {line_number(source, node.start)}-{line_number(source, node.end)})")
        lines.append(f"  {_preview(entry.source_snippet)}")

    def _visit(node: DeclarationNode, depth: int) -> None:
        entry = _record(node, depth)
        indent = "  " * depth
        lines.append(
            f"{indent}{_label(node)} (lines {line_number(source, node.start)}-{line_number(source, node.end)})"
        )
        lines.append(f"{indent}  {_preview(entry.source_snippet)}")
        for child in node.children:
            _visit(child, depth + 1)

    for declaration in structure.declarations:
        _visit(declaration, 0)

    return Outline(text="\n".join(lines), entries=entries)


def _label(node: DeclarationNode) -> str:
    if node.kind == FUNCTION:
        params = ", ".join(param.name for param in node.params)
        return f"{node.keyword} {node.name}({params})"
    return f"{node.keyword} {node.name}"


def _preview(snippet: str) -> str:
    return "\n".join(snippet.split("\n")[:PREVIEW_LINES])


__all__ = ["build_outline", "import_group", "line_number"]
