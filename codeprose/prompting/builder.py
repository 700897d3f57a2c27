"""Builds the chat prompt sent to the description service."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader

from .constants import ANNOTATIONS_PER_PARAGRAPH, SYSTEM_TEMPLATE, USER_TEMPLATE


@dataclass(frozen=True)
class PromptMessage:
    """Represents a single chat message for LLM prompting."""

    role: str
    content: str


@dataclass
class PromptRequest:
    """A rendered system/user prompt pair for one file."""

    filename: str
    messages: List[PromptMessage]
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def system(self) -> str:
        return next((m.content for m in self.messages if m.role == "system"), "")

    @property
    def user(self) -> str:
        return next((m.content for m in self.messages if m.role == "user"), "")


class PromptBuilder:
    """Renders the book-section prompt from Jinja2 templates."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = self._create_env(self.templates_dir)

    def build(
        self,
        filename: str,
        content: str,
        project_files: Sequence[str],
        outline: str = "",
    ) -> PromptRequest:
        system = self._env.get_template(SYSTEM_TEMPLATE).render(
            project_files=list(project_files),
            annotations_per_paragraph=ANNOTATIONS_PER_PARAGRAPH,
        )
        user = self._env.get_template(USER_TEMPLATE).render(
            filename=filename,
            content=content,
            outline=outline,
        )
        return PromptRequest(
            filename=filename,
            messages=[
                PromptMessage(role="system", content=system.strip()),
                PromptMessage(role="user", content=user.strip()),
            ],
            metadata={"project_files": len(project_files), "has_outline": bool(outline)},
        )

    @staticmethod
    def _create_env(templates_dir: Path) -> Environment:
        directories = [str(templates_dir)]
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


__all__ = ["PromptBuilder", "PromptMessage", "PromptRequest"]
