"""Outline construction and prompt rendering."""

from .builder import PromptBuilder, PromptMessage, PromptRequest
from .outline import build_outline, import_group, line_number

__all__ = [
    "PromptBuilder",
    "PromptMessage",
    "PromptRequest",
    "build_outline",
    "import_group",
    "line_number",
]
