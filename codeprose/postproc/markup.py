"""Parses the markup embedded in generated prose into typed segments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Pattern

FILE_REF_PATTERN = re.compile(r"@([\w./\-]+\.\w+)")
ANNOTATION_PATTERN = re.compile(r"\[\[(.*?)\|\|(.*?)\]\]", re.DOTALL)
PARAGRAPH_BREAK = re.compile(r"\n\n+")
MIN_SYMBOL_LENGTH = 3

TEXT = "text"
ANNOTATION = "annotation"
FILE_REF = "file_ref"
SYMBOL = "symbol"


@dataclass(frozen=True)
class ProseSegment:
    """One run of a paragraph; ``code`` holds the snippet for annotations and symbols."""

    kind: str
    text: str
    code: Optional[str] = None
    path: Optional[str] = None


class ProseParser:
    """Splits prose into paragraphs of annotation, file reference and symbol segments."""

    def __init__(self, project_files: Iterable[str], symbols: Mapping[str, str] | None = None) -> None:
        self.project_files = set(project_files)
        self.symbols = dict(symbols or {})
        self._symbol_pattern = self._build_symbol_pattern(self.symbols)

    def parse(self, text: str) -> List[List[ProseSegment]]:
        paragraphs: List[List[ProseSegment]] = []
        for paragraph in PARAGRAPH_BREAK.split(text):
            paragraph = paragraph.strip()
            if paragraph:
                paragraphs.append(self._parse_annotations(paragraph))
        return paragraphs

    def _parse_annotations(self, text: str) -> List[ProseSegment]:
        segments: List[ProseSegment] = []
        last = 0
        for match in ANNOTATION_PATTERN.finditer(text):
            if match.start() > last:
                segments.extend(self._parse_file_refs(text[last : match.start()]))
            phrase, code = match.group(1), match.group(2)
            if code.strip():
                segments.append(ProseSegment(kind=ANNOTATION, text=phrase, code=code))
            else:
                segments.append(ProseSegment(kind=TEXT, text=phrase))
            last = match.end()
        if last < len(text):
            segments.extend(self._parse_file_refs(text[last:]))
        return segments

    def _parse_file_refs(self, text: str) -> List[ProseSegment]:
        segments: List[ProseSegment] = []
        last = 0
        for match in FILE_REF_PATTERN.finditer(text):
            if match.start() > last:
                segments.extend(self._parse_symbols(text[last : match.start()]))
            path = match.group(1)
            if path in self.project_files:
                segments.append(ProseSegment(kind=FILE_REF, text=match.group(0), path=path))
            else:
                segments.append(ProseSegment(kind=TEXT, text=match.group(0)))
            last = match.end()
        if last < len(text):
            segments.extend(self._parse_symbols(text[last:]))
        return segments

    def _parse_symbols(self, text: str) -> List[ProseSegment]:
        if self._symbol_pattern is None:
            return [ProseSegment(kind=TEXT, text=text)]
        segments: List[ProseSegment] = []
        last = 0
        for match in self._symbol_pattern.finditer(text):
            if match.start() > last:
                segments.append(ProseSegment(kind=TEXT, text=text[last : match.start()]))
            name = match.group(1)
            segments.append(ProseSegment(kind=SYMBOL, text=name, code=self.symbols[name]))
            last = match.end()
        if last < len(text):
            segments.append(ProseSegment(kind=TEXT, text=text[last:]))
        return segments

    @staticmethod
    def _build_symbol_pattern(symbols: Mapping[str, str]) -> Optional[Pattern[str]]:
        names = sorted(
            (name for name in symbols if len(name) >= MIN_SYMBOL_LENGTH),
            key=len,
            reverse=True,
        )
        if not names:
            return None
        return re.compile(r"\b(" + "|".join(re.escape(name) for name in names) + r")\b")


def parse_prose(
    text: str, project_files: Iterable[str], symbols: Mapping[str, str] | None = None
) -> List[List[ProseSegment]]:
    return ProseParser(project_files, symbols).parse(text)


__all__ = [
    "ANNOTATION",
    "ANNOTATION_PATTERN",
    "FILE_REF",
    "FILE_REF_PATTERN",
    "ProseParser",
    "ProseSegment",
    "SYMBOL",
    "TEXT",
    "parse_prose",
]
