"""The book view of the current file, with stale-response suppression."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .analyzers.structure import extract_structure
from .llm.describer import FileDescriber
from .logging import get_logger
from .models import IMPORT, DeclarationNode, DescribeResult
from .postproc.markup import ProseSegment, parse_prose
from .prompting.outline import build_outline
from .syntax.languages import detect_language
from .syntax.tree_sitter import TreeSitterParser

TRUNCATION_NOTE = "Note: This file was large, so only the first portion was analyzed."


@dataclass
class BookPage:
    """Everything the book view needs to render one file."""

    filename: str
    result: DescribeResult
    outline: str = ""
    symbols: Dict[str, str] = field(default_factory=dict)
    paragraphs: List[List[ProseSegment]] = field(default_factory=list)


def index_symbols(declarations: Sequence[DeclarationNode], source: str) -> Dict[str, str]:
    """Map every non-import declaration name, recursively, to its source snippet."""
    symbols: Dict[str, str] = {}

    def _index(node: DeclarationNode) -> None:
        if node.name and node.kind != IMPORT:
            symbols[node.name] = source[node.start : node.end]
        for child in node.children:
            _index(child)

    for declaration in declarations:
        _index(declaration)
    return symbols


class BookSession:
    """Tracks the one in-flight description for the "current file".

    Every ``update`` takes a new request id; a response that completes after
    a newer request started is dropped and ``update`` returns ``None``.
    """

    def __init__(
        self,
        describer: FileDescriber,
        *,
        parser: TreeSitterParser | None = None,
        project_files: Sequence[str] = (),
    ) -> None:
        self.describer = describer
        self.parser = parser or TreeSitterParser()
        self.project_files: List[str] = list(project_files)
        self.logger = get_logger("session")
        self._request_id = 0

    @property
    def request_id(self) -> int:
        return self._request_id

    def set_project_files(self, files: Sequence[str]) -> None:
        self.project_files = list(files)

    def invalidate(self) -> None:
        """Supersede whatever request is in flight."""
        self._request_id += 1

    async def update(self, filename: str, content: str) -> Optional[BookPage]:
        self._request_id += 1
        request_id = self._request_id

        outline = ""
        symbols: Dict[str, str] = {}
        try:
            tree = self.parser.parse(content, detect_language(filename))
        except RuntimeError as exc:
            self.logger.debug("No structure for %s: %s", filename, exc)
        else:
            structure = extract_structure(tree)
            if not structure.is_empty():
                outline = build_outline(structure, content).text
                symbols = index_symbols(structure.declarations, content)

        loop = asyncio.get_running_loop()
        project_files = list(self.project_files)
        result = await loop.run_in_executor(
            None, self.describer.describe_file, filename, content, project_files, outline
        )

        if request_id != self._request_id:
            self.logger.debug("Dropping stale description for %s", filename)
            return None

        page = BookPage(filename=filename, result=result, outline=outline, symbols=symbols)
        if result.text is not None:
            page.paragraphs = parse_prose(result.text, project_files, symbols)
        return page


__all__ = ["BookPage", "BookSession", "TRUNCATION_NOTE", "index_symbols"]
