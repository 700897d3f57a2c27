"""Structure-only prose: captions, inline notes and naming helpers."""

from .captions import annotate, block_explanation, file_summary, grouped_outline
from .inline import inline_notes
from .naming import humanize_name, plural

__all__ = [
    "annotate",
    "block_explanation",
    "file_summary",
    "grouped_outline",
    "humanize_name",
    "inline_notes",
    "plural",
]
