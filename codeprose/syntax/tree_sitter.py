"""Tree-sitter backed parser producing ``SyntaxNode`` trees."""

from __future__ import annotations

from bisect import bisect_left
from typing import Dict, List, Optional, Tuple

from ..logging import get_logger
from .nodes import SourceTree, SyntaxNode

try:  # pragma: no cover - optional dependency
    from tree_sitter import Parser
    from tree_sitter_language_pack import get_parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    Parser = None  # type: ignore[assignment]
    get_parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


_GRAMMARS = {
    "javascript": "javascript",
    "typescript": "typescript",
    "tsx": "tsx",
    "python": "python",
    "rust": "rust",
    "svelte": "svelte",
}

# host language -> (container tags, raw text tag, embedded language)
_INJECTIONS: Dict[str, Tuple[Tuple[str, ...], str, str]] = {
    "svelte": (("script_element",), "raw_text", "typescript"),
}


class _OffsetMap:
    """Translates UTF-8 byte offsets into string indices."""

    def __init__(self, text: str, source_bytes: bytes) -> None:
        self._identity = len(text) == len(source_bytes)
        self._starts: List[int] = []
        if not self._identity:
            position = 0
            for char in text:
                self._starts.append(position)
                position += len(char.encode("utf-8"))
            self._starts.append(position)

    def char(self, byte_offset: int) -> int:
        if self._identity:
            return byte_offset
        return bisect_left(self._starts, byte_offset)


class TreeSitterParser:
    """Parses source text with tree-sitter grammars from the language pack."""

    def __init__(self, enabled: Optional[bool] = None) -> None:
        self._enabled = TREE_SITTER_AVAILABLE if enabled is None else enabled
        self._parsers: Dict[str, Parser] = {}
        self.logger = get_logger("syntax")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def supports(self, language: str) -> bool:
        return self._enabled and language in _GRAMMARS

    def parse(self, text: str, language: str) -> SourceTree:
        """Parse ``text`` and return the converted tree."""
        parser = self._get_parser(language)
        if parser is None:
            raise RuntimeError(f"No tree-sitter grammar available for '{language}'")
        source_bytes = text.encode("utf-8")
        tree = parser.parse(source_bytes)
        offsets = _OffsetMap(text, source_bytes)
        root = self._convert(tree.root_node, source_bytes, offsets, language, 0)
        return SourceTree(root=root, text=text, language=language)

    def _get_parser(self, language: str) -> Optional[Parser]:
        parser = self._parsers.get(language)
        if parser is not None:
            return parser
        grammar = _GRAMMARS.get(language)
        if not self._enabled or grammar is None:
            return None
        # Older pack releases raise LookupError; 1.x raises its own DownloadError.
        try:
            parser = get_parser(grammar)
        except Exception as exc:
            self.logger.warning("Grammar '%s' is not available: %s", grammar, exc)
            return None
        self._parsers[language] = parser
        return parser

    def _convert(self, node, source_bytes: bytes, offsets: _OffsetMap, language: str, base: int) -> SyntaxNode:  # type: ignore[no-untyped-def]
        start = offsets.char(base + node.start_byte)
        end = offsets.char(base + node.end_byte)
        injection = _INJECTIONS.get(language)
        if injection is not None:
            containers, raw_tag, embedded = injection
            parent = node.parent
            if node.type == raw_tag and parent is not None and parent.type in containers:
                grafted = self._parse_embedded(
                    source_bytes[base + node.start_byte : base + node.end_byte],
                    source_bytes,
                    offsets,
                    embedded,
                    base + node.start_byte,
                )
                return SyntaxNode(node.type, start, end, [grafted] if grafted else [])
        children = [
            self._convert(child, source_bytes, offsets, language, base) for child in node.children
        ]
        return SyntaxNode(node.type, start, end, children)

    def _parse_embedded(
        self,
        fragment: bytes,
        source_bytes: bytes,
        offsets: _OffsetMap,
        language: str,
        base: int,
    ) -> Optional[SyntaxNode]:
        parser = self._get_parser(language)
        if parser is None:
            return None
        tree = parser.parse(fragment)
        return self._convert(tree.root_node, source_bytes, offsets, language, base)


__all__ = ["TreeSitterParser", "TREE_SITTER_AVAILABLE"]
