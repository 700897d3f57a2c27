"""Post-processing of generated prose."""

from .markup import ProseParser, ProseSegment, parse_prose

__all__ = ["ProseParser", "ProseSegment", "parse_prose"]
