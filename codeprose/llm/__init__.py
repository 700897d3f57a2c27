"""Description service adapters."""

from .describer import FileDescriber
from .runner import LLMRequest, LLMRunner

__all__ = ["FileDescriber", "LLMRequest", "LLMRunner"]
