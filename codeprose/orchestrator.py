"""Coordinates parsing, structural analysis, captions and descriptions for files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .analyzers.concepts import extract_concepts
from .analyzers.structure import extract_structure
from .config import CodeProseConfig, ConfigError, load_config
from .llm.describer import FileDescriber
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import AnnotatedFile, ConceptInstance, DescribeResult, FileStructure, Outline
from .prompting.builder import PromptBuilder
from .prompting.outline import build_outline
from .prose.captions import annotate
from .repo_scanner import ProjectScanner
from .stores.prose_cache import ProseCache
from .syntax.languages import detect_language
from .syntax.nodes import SourceTree
from .syntax.tree_sitter import TreeSitterParser


@dataclass
class AnalyzedFile:
    """A parsed file together with its extracted structure."""

    path: Path
    tree: SourceTree
    structure: FileStructure


class Orchestrator:
    """Runs the per-file pipelines exposed by the CLI and the service."""

    def __init__(
        self,
        parser: TreeSitterParser | None = None,
        scanner: ProjectScanner | None = None,
        describer: FileDescriber | None = None,
        llm_runner: LLMRunner | None = None,
    ) -> None:
        self.parser = parser or TreeSitterParser()
        self.scanner = scanner or ProjectScanner()
        self.logger = get_logger("orchestrator")
        self._describer = describer
        self._llm_runner = llm_runner

    def parse(self, filename: str, content: str, language: Optional[str] = None) -> SourceTree:
        language = language or detect_language(filename)
        return self.parser.parse(content, language)

    def analyze(self, path: str | Path, *, language: Optional[str] = None) -> AnalyzedFile:
        file_path = self._resolve_file(path)
        content = file_path.read_text(encoding="utf-8")
        tree = self.parse(file_path.name, content, language)
        structure = extract_structure(tree)
        self.logger.debug("Analyzed %s as %s", file_path, tree.language)
        return AnalyzedFile(path=file_path, tree=tree, structure=structure)

    def outline(self, path: str | Path) -> Outline:
        analyzed = self.analyze(path)
        return build_outline(analyzed.structure, analyzed.tree.text)

    def annotate(self, path: str | Path) -> AnnotatedFile:
        analyzed = self.analyze(path)
        return annotate(analyzed.structure, analyzed.tree)

    def concepts(
        self, path: str | Path, *, start: Optional[int] = None, end: Optional[int] = None
    ) -> List[ConceptInstance]:
        analyzed = self.analyze(path)
        return extract_concepts(analyzed.tree, start, end)

    def describe(self, path: str | Path, *, project_root: str | Path | None = None) -> DescribeResult:
        """Describe one file, using its outline as context when it parses."""
        file_path = self._resolve_file(path)
        root = Path(project_root).expanduser().resolve() if project_root else file_path.parent
        content = file_path.read_text(encoding="utf-8")
        project_files = self.scanner.list_files(root)
        outline = ""
        try:
            tree = self.parse(file_path.name, content)
        except RuntimeError as exc:
            self.logger.warning("Describing %s without an outline: %s", file_path.name, exc)
        else:
            structure = extract_structure(tree)
            if not structure.is_empty():
                outline = build_outline(structure, content).text

        filename = self._relative_name(file_path, root)
        describer = self._resolve_describer(root)
        result = describer.describe_file(filename, content, project_files, outline)
        describer.cache.persist()
        return result

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _resolve_file(path: str | Path) -> Path:
        file_path = Path(path).expanduser().resolve()
        if not file_path.is_file():
            raise FileNotFoundError(f"Source file not found: {file_path}")
        return file_path

    @staticmethod
    def _relative_name(file_path: Path, root: Path) -> str:
        try:
            return file_path.relative_to(root).as_posix()
        except ValueError:
            return file_path.name

    def _load_config(self, root: Path) -> CodeProseConfig:
        try:
            return load_config(root)
        except ConfigError as exc:
            self.logger.warning("Ignoring invalid configuration: %s", exc)
            return CodeProseConfig(root=root)

    def _resolve_describer(self, root: Path) -> FileDescriber:
        if self._describer is not None:
            return self._describer
        config = self._load_config(root)
        prose = config.prose
        self._describer = FileDescriber(
            self._llm_runner or self._build_runner(config),
            cache=ProseCache(prose.cache_path, max_entries=prose.cache_max_entries),
            prompt_builder=PromptBuilder(prose.templates_dir),
            max_content_chars=prose.max_content_chars,
        )
        return self._describer

    @staticmethod
    def _build_runner(config: CodeProseConfig) -> LLMRunner:
        llm = config.llm
        if llm is None:
            return LLMRunner()
        kwargs: dict[str, object] = {}
        if llm.base_url:
            kwargs["base_url"] = llm.base_url
        if llm.api_key:
            kwargs["api_key"] = llm.api_key
        if llm.temperature is not None:
            kwargs["temperature"] = llm.temperature
        if llm.max_tokens is not None:
            kwargs["max_tokens"] = llm.max_tokens
        if llm.request_timeout is not None:
            kwargs["request_timeout"] = llm.request_timeout
        return LLMRunner(llm.model, **kwargs)  # type: ignore[arg-type]


__all__ = ["AnalyzedFile", "Orchestrator"]
