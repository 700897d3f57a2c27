"""Deterministic captions for a file and each of its declarations.

Everything here is a pure function of the extracted structure and the
source tree; no service is consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping

from ..logging import get_logger
from ..models import (
    CLASS,
    CONTROL,
    FUNCTION,
    IMPORT,
    TYPE,
    VARIABLE,
    AnnotatedFile,
    AnnotatedNode,
    DeclarationNode,
    FileStructure,
)
from ..syntax.nodes import SourceTree
from .inline import inline_notes
from .naming import capitalize_first, humanize_name, kind_label, plural, pluralize

logger = get_logger("prose")

EMPTY_FILE_SUMMARY = "This file is empty or contains no recognizable constructs."
OUTLINE_KIND_ORDER = (FUNCTION, CLASS, TYPE, VARIABLE, CONTROL)
MAX_LISTED_NAMES = 5
MAX_SUMMARY_NAMES = 4
SUMMARY_NAME_LIMIT = 40
IMPORT_NAME_LIMIT = 60

TEMPLATE_BLOCK_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "if": "Conditionally shows content based on a value.",
        "each": "Repeats content for each item in a list.",
        "await": "Shows different content while waiting for a result, then when it arrives.",
        "key": "Re-creates content whenever a value changes.",
    }
)


@dataclass(frozen=True)
class Explanation:
    summary: str
    detail: str = ""


def annotate(structure: FileStructure, tree: SourceTree) -> AnnotatedFile:
    """Build the file summary, grouped outline and per-declaration captions."""
    nodes: List[AnnotatedNode] = []

    if structure.imports:
        group = _import_group_node(structure)
        names = [node.name for node in structure.imports if len(node.name) < IMPORT_NAME_LIMIT]
        nodes.append(
            AnnotatedNode(
                node=group,
                summary=f"This file imports from {plural(len(structure.imports), 'module')}.",
                detail=f"Modules: {', '.join(names)}" if names else "",
                code=tree.slice(group.start, group.end),
            )
        )

    for declaration in structure.declarations:
        explanation = block_explanation(declaration)
        nodes.append(
            AnnotatedNode(
                node=declaration,
                summary=explanation.summary,
                detail=explanation.detail,
                code=tree.slice(declaration.start, declaration.end),
                inline_notes=inline_notes(declaration, tree),
            )
        )

    logger.debug("Annotated %d nodes", len(nodes))
    return AnnotatedFile(
        file_summary=file_summary(structure),
        outline=grouped_outline(structure),
        nodes=nodes,
    )


def file_summary(structure: FileStructure) -> str:
    parts: List[str] = []
    kind_parts: List[str] = []
    for kind, members in _group_by_kind(structure.declarations).items():
        names = [humanize_name(node.name) for node in members]
        names = [name for name in names if len(name) < SUMMARY_NAME_LIMIT]
        counted = plural(len(members), kind_label(kind))
        if len(names) <= MAX_SUMMARY_NAMES:
            kind_parts.append(f"{counted} ({', '.join(names)})")
        else:
            kind_parts.append(counted)

    if kind_parts:
        parts.append(f"This file defines {' and '.join(kind_parts)}")
    if structure.imports:
        parts.append(f"imports from {plural(len(structure.imports), 'module')}")

    if not parts:
        return EMPTY_FILE_SUMMARY
    return " and ".join(parts) + "."


def grouped_outline(structure: FileStructure) -> List[str]:
    lines: List[str] = []
    if structure.imports:
        lines.append(f"Imports ({len(structure.imports)})")
        lines.extend(f"  {node.name}" for node in structure.imports)

    groups = _group_by_kind(structure.declarations)
    for kind in OUTLINE_KIND_ORDER:
        members = groups.get(kind)
        if not members:
            continue
        lines.append(f"{capitalize_first(pluralize(kind_label(kind)))} ({len(members)})")
        for node in members:
            name = humanize_name(node.name)
            if node.kind == FUNCTION and node.params:
                lines.append(f"  {name}({', '.join(param.name for param in node.params)})")
            else:
                lines.append(f"  {name}")
    return lines


def block_explanation(node: DeclarationNode) -> Explanation:
    """Caption one declaration from its kind, flags and child summary."""
    name = capitalize_first(humanize_name(node.name))
    if node.kind == FUNCTION:
        return _explain_function(node, name)
    if node.kind == CLASS:
        return Explanation(_explain_class(node, name))
    if node.kind == VARIABLE:
        if node.keyword == "component":
            return Explanation(f"Uses the {name} component.")
        noun = {"const": "constant", "let": "variable"}.get(node.keyword, "value")
        exported = " (exported)" if node.is_exported else ""
        return Explanation(f"{name} is a {noun}{exported}.")
    if node.kind == TYPE:
        if node.keyword == "interface":
            return Explanation(f"{name} is an interface.")
        if node.keyword == "enum":
            return Explanation(f"{name} is an enum.")
        return Explanation(f"{name} is a type alias.")
    if node.kind == CONTROL:
        if node.keyword.startswith("{#"):
            block_type = node.keyword[2:].rstrip("}")
            description = TEMPLATE_BLOCK_DESCRIPTIONS.get(block_type, f"A Svelte {block_type} block.")
            return Explanation(f"{name}: {description}")
        return Explanation(f"A control structure ({node.keyword}).")
    return Explanation(f"{name} ({node.kind}).")


def _explain_function(node: DeclarationNode, name: str) -> Explanation:
    summary = f"{name} is {'an async' if node.is_async else 'a'} function"
    if node.params:
        described = ", ".join(f"{p.name} ({p.type})" if p.type else p.name for p in node.params)
        summary += f" that takes {described}"
    if node.return_type:
        summary += f" and returns {node.return_type}"
    summary += "."

    stats = node.child_summary
    parts: List[str] = []
    if stats.called_functions:
        shown = ", ".join(stats.called_functions[:MAX_LISTED_NAMES])
        more = " and more" if len(stats.called_functions) > MAX_LISTED_NAMES else ""
        parts.append(f"calls {shown}{more}")
    if stats.condition_count:
        parts.append(f"checks {plural(stats.condition_count, 'condition')}")
    if stats.loop_count:
        parts.append(f"uses {plural(stats.loop_count, 'loop')}")
    if stats.return_count:
        parts.append(f"returns {plural(stats.return_count, 'value')}")
    detail = f"Inside, it {', '.join(parts)}." if parts else ""
    return Explanation(summary, detail)


def _explain_class(node: DeclarationNode, name: str) -> str:
    noun = node.keyword if node.keyword in {"struct", "trait"} else "class"
    summary = f"{name} is a {noun}"
    methods = [child for child in node.children if child.kind == FUNCTION]
    properties = [child for child in node.children if child.kind == VARIABLE]
    parts: List[str] = []
    if methods:
        names = ", ".join(humanize_name(m.name) for m in methods[:MAX_LISTED_NAMES])
        more = ", ..." if len(methods) > MAX_LISTED_NAMES else ""
        parts.append(f"{plural(len(methods), 'method')} ({names}{more})")
    if properties:
        parts.append(plural(len(properties), "property"))
    if parts:
        summary += f" with {' and '.join(parts)}"
    return summary + "."


def _group_by_kind(nodes: List[DeclarationNode]) -> Dict[str, List[DeclarationNode]]:
    groups: Dict[str, List[DeclarationNode]] = {}
    for node in nodes:
        groups.setdefault(node.kind, []).append(node)
    return groups


def _import_group_node(structure: FileStructure) -> DeclarationNode:
    return DeclarationNode(
        kind=IMPORT,
        name="Imports",
        keyword="import",
        start=structure.imports[0].start,
        end=structure.imports[-1].end,
    )


__all__ = [
    "EMPTY_FILE_SUMMARY",
    "Explanation",
    "TEMPLATE_BLOCK_DESCRIPTIONS",
    "annotate",
    "block_explanation",
    "file_summary",
    "grouped_outline",
]
