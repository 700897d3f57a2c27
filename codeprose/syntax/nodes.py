"""Read-only syntax tree model consumed by the analyzers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence


class Visit(Enum):
    """Traversal control returned by a ``walk`` visitor."""

    CONTINUE = "continue"
    SKIP = "skip"


class SyntaxNode:
    """A grammar-tagged node covering ``[start, end)`` of the source text."""

    __slots__ = ("tag", "start", "end", "children", "parent", "_index")

    def __init__(self, tag: str, start: int, end: int, children: Sequence["SyntaxNode"] = ()) -> None:
        self.tag = tag
        self.start = start
        self.end = end
        self.children: tuple[SyntaxNode, ...] = tuple(children)
        self.parent: Optional[SyntaxNode] = None
        self._index = 0
        for index, child in enumerate(self.children):
            child.parent = self
            child._index = index

    def __repr__(self) -> str:
        return f"SyntaxNode({self.tag!r}, {self.start}, {self.end})"

    @property
    def first_child(self) -> Optional["SyntaxNode"]:
        return self.children[0] if self.children else None

    @property
    def prev_sibling(self) -> Optional["SyntaxNode"]:
        if self.parent is None or self._index == 0:
            return None
        return self.parent.children[self._index - 1]

    @property
    def next_sibling(self) -> Optional["SyntaxNode"]:
        if self.parent is None or self._index + 1 >= len(self.parent.children):
            return None
        return self.parent.children[self._index + 1]

    def child(self, *tags: str) -> Optional["SyntaxNode"]:
        """Return the first direct child matching ``tags``, trying tags in priority order."""
        for tag in tags:
            for child in self.children:
                if child.tag == tag:
                    return child
        return None

    def ancestors(self) -> Iterator["SyntaxNode"]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def resolve(self, pos: int) -> "SyntaxNode":
        """Return the innermost descendant whose span covers ``pos``."""
        node = self
        while True:
            for child in node.children:
                if child.start <= pos < child.end:
                    node = child
                    break
            else:
                return node


@dataclass
class SourceTree:
    """A parsed file: the root node, the full source text and its language id."""

    root: SyntaxNode
    text: str
    language: str

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def text_of(self, node: SyntaxNode, limit: Optional[int] = None) -> str:
        end = node.end if limit is None else min(node.end, node.start + limit)
        return self.text[node.start : end]

    def node_at_span(self, start: int, end: int) -> Optional[SyntaxNode]:
        """Return the outermost node whose span is exactly ``[start, end)``."""
        found: List[SyntaxNode] = []

        def _visit(node: SyntaxNode) -> Visit:
            if node.start == start and node.end == end:
                found.append(node)
                return Visit.SKIP
            if node.end <= start or node.start > start:
                return Visit.SKIP
            return Visit.CONTINUE

        walk(self.root, _visit)
        return found[0] if found else None


def walk(
    root: SyntaxNode,
    visitor: Callable[[SyntaxNode], Optional[Visit]],
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> None:
    """Pre-order traversal; a visitor returning ``Visit.SKIP`` prunes that subtree.

    When ``start``/``end`` are given only nodes overlapping that range are visited.
    """
    stack: List[SyntaxNode] = [root]
    while stack:
        node = stack.pop()
        if start is not None and node.end < start:
            continue
        if end is not None and node.start > end:
            continue
        if visitor(node) is Visit.SKIP:
            continue
        stack.extend(reversed(node.children))


__all__ = ["SourceTree", "SyntaxNode", "Visit", "walk"]
