"""Statement-level micro captions for the immediate body of a declaration."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from ..analyzers.classifier import BODY_TAGS
from ..analyzers.patterns import (
    STATEMENT_WINDOW,
    call_target,
    condition_from_text,
    strip_return,
    truncate,
)
from ..models import DeclarationNode, InlineNote
from ..syntax.nodes import SourceTree, SyntaxNode
from .naming import humanize_name

CAPTION_LIMIT = 50
CONDITION_CHILD_TAGS = ("parenthesized_expression", "condition_clause")
STATEMENT_WRAPPERS = frozenset({"expression_statement"})

_Caption = Callable[[SyntaxNode, SourceTree], Optional[str]]


def _condition(node: SyntaxNode, tree: SourceTree) -> str:
    condition = node.child(*CONDITION_CHILD_TAGS)
    if condition is None and len(node.children) > 2 and node.children[1].tag not in BODY_TAGS:
        # Unparenthesized grammars: `if <condition> <block>`.
        condition = node.children[1]
    if condition is not None:
        text = tree.text_of(condition).strip()
        if text.startswith("(") and text.endswith(")"):
            text = text[1:-1]
        return truncate(text.strip(), CAPTION_LIMIT)
    return condition_from_text(tree.text_of(node))


def _check(node: SyntaxNode, tree: SourceTree) -> str:
    return f"Check whether {_condition(node, tree)}"


def _send_back(node: SyntaxNode, tree: SourceTree) -> str:
    expression = truncate(strip_return(tree.text_of(node)), CAPTION_LIMIT)
    return f"Send back {expression or 'nothing'}"


def _call(node: SyntaxNode, tree: SourceTree) -> Optional[str]:
    target = call_target(tree.text_of(node, STATEMENT_WINDOW))
    return f"Call {humanize_name(target)}" if target else None


def _set_up(node: SyntaxNode, tree: SourceTree) -> str:
    first_line = tree.text_of(node, STATEMENT_WINDOW).split("\n")[0]
    return f"Set up: {truncate(first_line, CAPTION_LIMIT)}"


def _fixed(text: str) -> _Caption:
    return lambda node, tree: text


STATEMENT_CAPTIONS: Mapping[str, _Caption] = MappingProxyType(
    {
        "if_statement": _check,
        "if_expression": _check,
        "return_statement": _send_back,
        "return_expression": _send_back,
        "for_statement": _fixed("Loop through items"),
        "for_in_statement": _fixed("Loop through items"),
        "for_expression": _fixed("Loop through items"),
        "while_statement": _fixed("Repeat while a condition holds"),
        "while_expression": _fixed("Repeat while a condition holds"),
        "call_expression": _call,
        "call": _call,
        "expression_statement": _call,
        "lexical_declaration": _set_up,
        "variable_declaration": _set_up,
        "let_declaration": _set_up,
        "try_statement": _fixed("Try something that might fail"),
        "switch_statement": _fixed("Check multiple possible values"),
        "match_statement": _fixed("Check multiple possible values"),
        "match_expression": _fixed("Check multiple possible values"),
    }
)


def _statement_target(node: SyntaxNode) -> SyntaxNode:
    """Look through an expression statement at the construct it holds."""
    if node.tag in STATEMENT_WRAPPERS and node.children:
        inner = node.children[0]
        if inner.tag in STATEMENT_CAPTIONS and inner.tag not in STATEMENT_WRAPPERS:
            return inner
    return node


def note_for(node: SyntaxNode, tree: SourceTree) -> Optional[InlineNote]:
    target = _statement_target(node)
    caption = STATEMENT_CAPTIONS.get(target.tag)
    if caption is None:
        return None
    text = caption(target, tree)
    if text is None:
        return None
    return InlineNote(start=node.start, end=node.end, text=text)


def inline_notes(declaration: DeclarationNode, tree: SourceTree) -> List[InlineNote]:
    """Caption each immediate statement of the declaration's body."""
    node = tree.node_at_span(declaration.start, declaration.end)
    body = None
    # Wrappers (and a root holding a single declaration) share the span.
    while node is not None:
        body = node.child(*BODY_TAGS)
        if body is not None:
            break
        node = next(
            (c for c in node.children if (c.start, c.end) == (declaration.start, declaration.end)),
            None,
        )
    if body is None:
        return []
    notes = (note_for(child, tree) for child in body.children)
    return [note for note in notes if note is not None]


__all__ = ["STATEMENT_CAPTIONS", "inline_notes", "note_for"]
