"""Core data models shared across codeprose components."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

FUNCTION = "function"
CLASS = "class"
VARIABLE = "variable"
IMPORT = "import"
EXPORT = "export"
CONTROL = "control"
TYPE = "type"

KINDS: Tuple[str, ...] = (FUNCTION, CLASS, VARIABLE, IMPORT, EXPORT, CONTROL, TYPE)


@dataclass(frozen=True)
class Param:
    """A declared parameter with an optional type annotation."""

    name: str
    type: Optional[str] = None


@dataclass(frozen=True)
class ChildSummary:
    """Statement statistics for one declaration body, nested scopes excluded."""

    call_count: int = 0
    condition_count: int = 0
    loop_count: int = 0
    return_count: int = 0
    called_functions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DeclarationNode:
    """A named construct found in a file, with its nested declarations."""

    kind: str
    name: str
    keyword: str
    start: int
    end: int
    params: Tuple[Param, ...] = ()
    return_type: Optional[str] = None
    is_async: bool = False
    is_exported: bool = False
    children: Tuple["DeclarationNode", ...] = ()
    child_summary: ChildSummary = field(default_factory=ChildSummary)


@dataclass
class FileStructure:
    """Imports, exports and top-level declarations of one file."""

    language: str
    imports: List[DeclarationNode] = field(default_factory=list)
    exports: List[DeclarationNode] = field(default_factory=list)
    declarations: List[DeclarationNode] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.imports or self.exports or self.declarations)


@dataclass(frozen=True)
class OutlineEntry:
    """An outline position: the declaration, its source text and nesting depth."""

    id: int
    node: DeclarationNode
    source_snippet: str
    depth: int


@dataclass
class Outline:
    """Indented outline text plus the id -> entry index built alongside it."""

    text: str
    entries: Dict[int, OutlineEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class ConceptInstance:
    """A highlighted range of the tree tagged with its concept category."""

    category: str
    tag: str
    start: int
    end: int
    text: str
    line: int


@dataclass(frozen=True)
class ConceptHover:
    """Tooltip payload for the concept under a text position."""

    category: str
    description: str
    start: int
    end: int


@dataclass(frozen=True)
class InlineNote:
    """A short caption attached to a statement inside a declaration body."""

    start: int
    end: int
    text: str


@dataclass
class AnnotatedNode:
    """Captions generated for one declaration."""

    node: DeclarationNode
    summary: str
    detail: str
    code: str
    inline_notes: List[InlineNote] = field(default_factory=list)


@dataclass
class AnnotatedFile:
    """File-level summary, grouped outline lines and per-declaration captions."""

    file_summary: str
    outline: List[str] = field(default_factory=list)
    nodes: List[AnnotatedNode] = field(default_factory=list)


@dataclass
class DescribeResult:
    """Outcome of a description request: prose text or an error message."""

    text: Optional[str] = None
    error: Optional[str] = None
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return self.text is not None and self.error is None
