"""Per-declaration body statistics, bounded by nested function scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..models import ChildSummary
from ..syntax.nodes import SourceTree, SyntaxNode, Visit, walk
from .classifier import CALL_TAGS, CONDITION_TAGS, FUNCTION_TAGS, LOOP_TAGS, RETURN_TAGS
from .patterns import callee_name

_CALLEE_SKIP = frozenset({"new", "await"})


@dataclass
class _Tally:
    calls: int = 0
    conditions: int = 0
    loops: int = 0
    returns: int = 0
    called: List[str] = field(default_factory=list)
    seen: Set[str] = field(default_factory=set)

    def add_callee(self, name: Optional[str]) -> None:
        if name and name not in self.seen:
            self.seen.add(name)
            self.called.append(name)


def summarize(body: SyntaxNode, tree: SourceTree) -> ChildSummary:
    """Count calls, conditions, loops and returns below ``body``.

    The walk never descends into a nested function, so its statements are
    attributed only to that inner declaration.
    """
    tally = _Tally()

    def _visit(node: SyntaxNode) -> Visit:
        if node is body:
            return Visit.CONTINUE
        if node.tag in CALL_TAGS:
            tally.calls += 1
            callee = _callee(node)
            if callee is not None:
                tally.add_callee(callee_name(tree.text_of(callee)))
        if node.tag in CONDITION_TAGS:
            tally.conditions += 1
        if node.tag in LOOP_TAGS:
            tally.loops += 1
        if node.tag in RETURN_TAGS:
            tally.returns += 1
        if node.tag in FUNCTION_TAGS:
            return Visit.SKIP
        return Visit.CONTINUE

    walk(body, _visit)
    return ChildSummary(
        call_count=tally.calls,
        condition_count=tally.conditions,
        loop_count=tally.loops,
        return_count=tally.returns,
        called_functions=tuple(tally.called),
    )


def _callee(call: SyntaxNode) -> Optional[SyntaxNode]:
    for child in call.children:
        if child.tag not in _CALLEE_SKIP:
            return child
    return None


__all__ = ["summarize"]
