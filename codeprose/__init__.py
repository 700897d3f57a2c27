"""codeprose: explains source files as outlines, captions and prose."""

from .analyzers.structure import extract_structure
from .prompting.outline import build_outline
from .prose.captions import annotate

__version__ = "0.1.0"

__all__ = ["__version__", "annotate", "build_outline", "extract_structure"]
