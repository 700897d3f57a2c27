"""Builds the declaration hierarchy of a file from its syntax tree."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import List, Optional, Set, Tuple

from ..logging import get_logger
from ..models import (
    CLASS,
    CONTROL,
    EXPORT,
    FUNCTION,
    IMPORT,
    VARIABLE,
    ChildSummary,
    DeclarationNode,
    FileStructure,
    Param,
)
from ..syntax.nodes import SourceTree, SyntaxNode, Visit, walk
from .classifier import (
    BODY_TAGS,
    DECLARATOR_TAGS,
    EXPORT_TOKEN,
    PARAM_LIST_TAGS,
    PARAM_SKIP_TAGS,
    SHARED_NAME_TAGS,
    TYPE_ANNOTATION_TAGS,
    TYPE_IDENTIFIER_TAGS,
    TemplateTable,
    classify,
    is_export_wrapper,
    is_wrapper,
    table_for,
    template_table_for,
)
from .patterns import (
    ASYNC_WINDOW,
    KEYWORD_WINDOW,
    LABEL_WINDOW,
    block_lead_expression,
    first_line_label,
    keyword_from_text,
    starts_async,
    strip_type_prefix,
    truncate,
)
from .summary import summarize

_PARAM_SPLIT = re.compile(r"[,:=]")

logger = get_logger("structure")


def extract_structure(tree: SourceTree, language: Optional[str] = None) -> FileStructure:
    """Return imports, exports and top-level declarations for ``tree``."""
    language = language or tree.language
    structure = FileStructure(language=language)
    template = template_table_for(language)
    if template is not None:
        _extract_template(tree, template, structure)
    else:
        for node in tree.root.children:
            _add_top_level(node, tree, language, structure)
    logger.debug(
        "Extracted %d imports, %d exports, %d declarations (%s)",
        len(structure.imports),
        len(structure.exports),
        len(structure.declarations),
        language,
    )
    return structure


def build_declaration(node: SyntaxNode, tree: SourceTree, language: str) -> Optional[DeclarationNode]:
    """Classify ``node`` and build its declaration, recursing into bodies."""
    if is_wrapper(node.tag, language):
        for inner in node.children:
            declaration = build_declaration(inner, tree, language)
            if declaration is not None:
                return declaration
        return None

    kind = classify(node.tag, language)
    if kind is None:
        return None

    params: Tuple[Param, ...] = ()
    return_type = None
    if kind == FUNCTION:
        params = extract_params(node, tree, language)
        return_type = extract_return_type(node, tree, language)

    children: Tuple[DeclarationNode, ...] = ()
    summary = ChildSummary()
    if kind in (FUNCTION, CLASS):
        body = node.child(*BODY_TAGS)
        summary = summarize(body or node, tree)
        if body is not None:
            built = (build_declaration(child, tree, language) for child in body.children)
            children = tuple(child for child in built if child is not None)

    return DeclarationNode(
        kind=kind,
        name=extract_name(node, tree, language),
        keyword=extract_keyword(node, tree),
        start=node.start,
        end=node.end,
        params=params,
        return_type=return_type,
        is_async=starts_async(tree.text_of(node, ASYNC_WINDOW)),
        is_exported=is_exported(node, language),
        children=children,
        child_summary=summary,
    )


def extract_name(node: SyntaxNode, tree: SourceTree, language: str) -> str:
    """Best-effort declaration name; falls back to the first line of the node."""
    table = table_for(language)
    named = node.child(*table.names) or node.child(*SHARED_NAME_TAGS)
    if named is not None:
        return tree.text_of(named)

    for declarator_tag in DECLARATOR_TAGS:
        declarator = node.child(declarator_tag)
        if declarator is not None:
            inner = declarator.child(*table.names) or declarator.child(*SHARED_NAME_TAGS)
            if inner is not None:
                return tree.text_of(inner)

    if is_export_wrapper(node.tag, language):
        for inner in node.children:
            if classify(inner.tag, language) is not None:
                return extract_name(inner, tree, language)

    type_id = node.child(*TYPE_IDENTIFIER_TAGS)
    if type_id is not None:
        return tree.text_of(type_id)

    return first_line_label(tree.text_of(node, LABEL_WINDOW))


def extract_params(node: SyntaxNode, tree: SourceTree, language: str) -> Tuple[Param, ...]:
    param_list = node.child(*PARAM_LIST_TAGS)
    if param_list is None:
        return ()

    type_tags = TYPE_ANNOTATION_TAGS + table_for(language).type_tags
    params: List[Param] = []
    for child in param_list.children:
        if child.tag in PARAM_SKIP_TAGS:
            continue
        name_node = child.child("identifier")
        if name_node is not None:
            name = tree.text_of(name_node)
        else:
            name = _PARAM_SPLIT.split(tree.text_of(child))[0].strip()
        if not name or name in {"(", ")"}:
            continue
        type_node = child.child(*type_tags)
        param_type = strip_type_prefix(tree.text_of(type_node)) if type_node is not None else None
        params.append(Param(name=name, type=param_type or None))
    return tuple(params)


def extract_return_type(node: SyntaxNode, tree: SourceTree, language: str) -> Optional[str]:
    annotation = node.child(*TYPE_ANNOTATION_TAGS)
    if annotation is None:
        annotation = node.child(*table_for(language).type_tags)
    if annotation is None:
        return None
    return strip_type_prefix(tree.text_of(annotation)) or None


def extract_keyword(node: SyntaxNode, tree: SourceTree) -> str:
    return keyword_from_text(tree.text_of(node, KEYWORD_WINDOW), node.tag)


def is_exported(node: SyntaxNode, language: str) -> bool:
    if node.parent is not None and is_export_wrapper(node.parent.tag, language):
        return True
    previous = node.prev_sibling
    return previous is not None and previous.tag == EXPORT_TOKEN


def _add_top_level(node: SyntaxNode, tree: SourceTree, language: str, structure: FileStructure) -> None:
    if is_export_wrapper(node.tag, language):
        _add_export(node, tree, language, structure)
        return
    declaration = build_declaration(node, tree, language)
    if declaration is not None:
        _route(declaration, structure)


def _add_export(wrapper: SyntaxNode, tree: SourceTree, language: str, structure: FileStructure) -> None:
    unwrapped = False
    for inner in wrapper.children:
        declaration = build_declaration(inner, tree, language)
        if declaration is None:
            continue
        unwrapped = True
        declaration = replace(declaration, is_exported=True)
        if declaration.kind == IMPORT:
            structure.imports.append(declaration)
        else:
            structure.declarations.append(declaration)
        structure.exports.append(replace(declaration, kind=EXPORT))

    if not unwrapped:
        declaration = build_declaration(wrapper, tree, language)
        if declaration is not None:
            structure.exports.append(declaration)


def _route(declaration: DeclarationNode, structure: FileStructure) -> None:
    if declaration.kind == IMPORT:
        structure.imports.append(declaration)
    elif declaration.kind == EXPORT:
        structure.exports.append(declaration)
    else:
        structure.declarations.append(declaration)


def _extract_template(tree: SourceTree, template: TemplateTable, structure: FileStructure) -> None:
    script_language = template.script_language
    script_spans: List[Tuple[int, int]] = []

    def _collect_scripts(node: SyntaxNode) -> Visit:
        if node.tag in template.script_containers:
            script_spans.append((node.start, node.end))
            return Visit.SKIP
        return Visit.CONTINUE

    walk(tree.root, _collect_scripts)
    seen: Set[int] = set()

    def _in_script(node: SyntaxNode) -> bool:
        return any(start <= node.start < end for start, end in script_spans)

    def _visit(node: SyntaxNode) -> Visit:
        if node.start in seen:
            return Visit.SKIP

        if not _in_script(node):
            block_type = template.blocks.get(node.tag)
            if block_type is not None:
                seen.add(node.start)
                structure.declarations.append(_template_block(node, block_type, tree))
                return Visit.SKIP
            if node.tag in template.components:
                component = _component_usage(node, template, tree)
                if component is not None:
                    seen.add(node.start)
                    structure.declarations.append(component)
                    return Visit.SKIP

        if classify(node.tag, script_language) is not None or is_wrapper(node.tag, script_language):
            seen.add(node.start)
            _add_top_level(node, tree, script_language, structure)
            return Visit.SKIP
        return Visit.CONTINUE

    walk(tree.root, _visit)


def _template_block(node: SyntaxNode, block_type: str, tree: SourceTree) -> DeclarationNode:
    title = block_type.capitalize()
    expression = ""
    opening = node.first_child
    if opening is not None:
        expression = block_lead_expression(tree.text_of(opening))
    name = f"{title}: {truncate(expression, 40)}" if expression else title
    return DeclarationNode(
        kind=CONTROL,
        name=name,
        keyword=f"{{#{block_type}}}",
        start=node.start,
        end=node.end,
        is_async=block_type == "await",
    )


def _component_usage(node: SyntaxNode, template: TemplateTable, tree: SourceTree) -> Optional[DeclarationNode]:
    name_node = node.child(*template.component_names)
    if name_node is None:
        return None
    name = tree.text_of(name_node)
    if not name[:1].isupper():
        return None
    return DeclarationNode(
        kind=VARIABLE,
        name=f"<{name}>",
        keyword="component",
        start=name_node.start,
        end=name_node.end,
    )


__all__ = [
    "build_declaration",
    "extract_keyword",
    "extract_name",
    "extract_params",
    "extract_return_type",
    "extract_structure",
    "is_exported",
]
