"""Coarse concept highlighting over the live syntax tree.

Concept categories cut across declaration kinds: a call is an invocation
whether it sits in a function body or a variable initialiser. Instances are
recorded outermost-first and the walk never descends into a recorded node,
so two instances are always disjoint.
"""

from __future__ import annotations

from collections import OrderedDict
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..logging import get_logger
from ..models import ConceptHover, ConceptInstance
from ..syntax.nodes import SourceTree, SyntaxNode, Visit, walk
from .classifier import (
    ASYNC,
    CONCEPT_CATEGORIES,
    CONTROL_FLOW,
    CONTROL_JUMP,
    DATA_LITERAL,
    DECLARATION,
    IMPORT_EXPORT,
    INVOCATION,
    PARAMETER,
    TEMPLATE_MARKUP,
    concept_category,
)
from .patterns import truncate

logger = get_logger("concepts")

CONCEPT_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        DECLARATION: "Declaration - introduces a new name: a variable, function, class or type.",
        IMPORT_EXPORT: "Import / Export - moves code between files so modules can share it.",
        CONTROL_FLOW: "Control Flow - decides which statements run, and how many times.",
        CONTROL_JUMP: "Control Jump - leaves the current block early: return, break, continue or throw.",
        INVOCATION: "Invocation - runs a function or constructor and uses what it gives back.",
        DATA_LITERAL: "Data Literal - a value written directly in the code, such as a string or number.",
        PARAMETER: "Parameter - the inputs a function declares it will receive.",
        ASYNC: "Async - waits for work that finishes later without blocking everything else.",
        TEMPLATE_MARKUP: "Template Markup - describes the interface that gets rendered on screen.",
    }
)

_LABEL_LIMIT = 80


def extract_concepts(
    tree: SourceTree, start: Optional[int] = None, end: Optional[int] = None
) -> List[ConceptInstance]:
    """Return non-overlapping concept instances, optionally limited to ``[start, end]``."""
    instances: List[ConceptInstance] = []

    def _visit(node: SyntaxNode) -> Visit:
        category = concept_category(node.tag)
        if category is None:
            return Visit.CONTINUE
        instances.append(
            ConceptInstance(
                category=category,
                tag=node.tag,
                start=node.start,
                end=node.end,
                text=tree.text_of(node),
                line=tree.text.count("\n", 0, node.start) + 1,
            )
        )
        return Visit.SKIP

    walk(tree.root, _visit, start, end)
    logger.debug("Found %d concept instances", len(instances))
    return instances


def concept_at(tree: SourceTree, pos: int) -> Optional[ConceptHover]:
    """Resolve the outermost classified ancestor covering ``pos``."""
    innermost = tree.root.resolve(pos)
    match: Optional[Tuple[SyntaxNode, str]] = None
    for node in (innermost, *innermost.ancestors()):
        found = concept_category(node.tag)
        if found is not None:
            match = (node, found)
    if match is None:
        return None
    node, category = match
    return ConceptHover(
        category=category,
        description=CONCEPT_DESCRIPTIONS.get(category, ""),
        start=node.start,
        end=node.end,
    )


def group_concepts(instances: List[ConceptInstance]) -> "OrderedDict[str, List[ConceptInstance]]":
    """Group instances by category in concept table order, omitting empty groups."""
    buckets: Dict[str, List[ConceptInstance]] = {}
    for instance in instances:
        buckets.setdefault(instance.category, []).append(instance)
    grouped: "OrderedDict[str, List[ConceptInstance]]" = OrderedDict()
    for category in CONCEPT_CATEGORIES:
        if category in buckets:
            grouped[category] = buckets[category]
    return grouped


def display_category(category: str) -> str:
    """``control-flow`` -> ``Control Flow``."""
    return " ".join(part.capitalize() for part in category.split("-"))


def short_description(category: str) -> str:
    description = CONCEPT_DESCRIPTIONS.get(category, "")
    _, separator, rest = description.partition(" - ")
    return rest if separator else description


def concept_label(instance: ConceptInstance) -> str:
    first_line = instance.text.split("\n", 1)[0].strip()
    return truncate(first_line, _LABEL_LIMIT)


__all__ = [
    "CONCEPT_DESCRIPTIONS",
    "concept_at",
    "concept_label",
    "display_category",
    "extract_concepts",
    "group_concepts",
    "short_description",
]
