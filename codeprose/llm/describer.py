"""Cached, size-limited file descriptions from the chat completions service."""

from __future__ import annotations

from typing import Optional, Sequence

from ..logging import get_logger
from ..models import DescribeResult
from ..prompting.builder import PromptBuilder
from ..prompting.constants import MAX_CONTENT_CHARS
from ..stores.prose_cache import ProseCache, cache_key
from .runner import LLMRunner


class FileDescriber:
    """Turns a file into book-style prose, never raising on service failures.

    The cache is keyed on the full content, so editing text past the
    truncation limit still produces a fresh request.
    """

    def __init__(
        self,
        runner: LLMRunner,
        *,
        cache: Optional[ProseCache] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        max_content_chars: int = MAX_CONTENT_CHARS,
    ) -> None:
        self.runner = runner
        self.cache = cache if cache is not None else ProseCache()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.max_content_chars = max_content_chars
        self.logger = get_logger("llm.describer")

    def describe_file(
        self,
        filename: str,
        content: str,
        project_files: Sequence[str],
        outline: str = "",
    ) -> DescribeResult:
        key = cache_key(filename, content)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Cache hit for %s", filename)
            return DescribeResult(text=cached)

        truncated = len(content) > self.max_content_chars
        if truncated:
            self.logger.debug(
                "Truncating %s from %d to %d characters", filename, len(content), self.max_content_chars
            )
            content = content[: self.max_content_chars]

        request = self.prompt_builder.build(filename, content, project_files, outline)
        try:
            text = self.runner.run(request.user, system=request.system)
        except RuntimeError as exc:
            self.logger.warning("Description failed for %s: %s", filename, exc)
            return DescribeResult(error=str(exc), truncated=truncated)

        if not text:
            return DescribeResult(error="Unexpected API response format", truncated=truncated)
        self.cache.store(key, text)
        return DescribeResult(text=text, truncated=truncated)


__all__ = ["FileDescriber"]
