"""Markdown parsing with frontmatter, tag and link extraction."""

from .links import (
    compute_backlinks,
    extract_embed_links,
    extract_external_links,
    extract_internal_links,
)
from .markdown import ParseError, count_words, extract_tags, parse_note, serialize_note

__all__ = [
    "parse_note",
    "serialize_note",
    "ParseError",
    "count_words",
    "extract_tags",
    "extract_internal_links",
    "extract_embed_links",
    "extract_external_links",
    "compute_backlinks",
]
