"""Markdown parsing with YAML frontmatter support."""

import re
from datetime import datetime
from pathlib import PurePosixPath
from typing import Any

import frontmatter

from ..config import NOTE_SUFFIX
from ..models import Note
from .links import extract_embed_links, extract_external_links, extract_internal_links

# Inline #tag or #nested/tag, not preceded by a word character (skips URL fragments)
TAG_PATTERN = re.compile(r"(?<!\S)#([A-Za-z0-9_\-/]+)")

HEADING_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)

FENCED_CODE_PATTERN = re.compile(r"```.*?```", re.DOTALL)
INLINE_CODE_PATTERN = re.compile(r"`[^`\n]+`")


class ParseError(Exception):
    """Raised when a note cannot be parsed."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


def _strip_code(content: str) -> str:
    return INLINE_CODE_PATTERN.sub("", FENCED_CODE_PATTERN.sub("", content))


def extract_tags(content: str, metadata: dict[str, Any] | None = None) -> list[str]:
    """Collect tags from frontmatter and inline #tags.

    Frontmatter tags come first; duplicates are dropped, first occurrence wins.
    Purely numeric inline tags (#1, #2024) are treated as plain text.
    """
    tags: list[str] = []
    seen: set[str] = set()

    def add(tag: str) -> None:
        tag = tag.strip().lstrip("#")
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)

    raw = (metadata or {}).get("tags")
    if isinstance(raw, str):
        for tag in raw.replace(",", " ").split():
            add(tag)
    elif isinstance(raw, list):
        for tag in raw:
            if tag is not None:
                add(str(tag))
    elif raw is not None:
        add(str(raw))

    for match in TAG_PATTERN.finditer(_strip_code(content)):
        tag = match.group(1).rstrip("/")
        if not tag.isdigit():
            add(tag)

    return tags


def _title_for(path: str, metadata: dict[str, Any], content: str) -> str:
    title = metadata.get("title")
    if title:
        return str(title).strip()

    heading = HEADING_PATTERN.search(content)
    if heading:
        return heading.group(1).strip()

    name = PurePosixPath(path).name
    if name.endswith(NOTE_SUFFIX):
        name = name[: -len(NOTE_SUFFIX)]
    return name or "Untitled"


def parse_note(
    path: str,
    raw: str,
    modified: datetime | None = None,
    created: datetime | None = None,
) -> Note:
    """Parse raw markdown into a Note.

    Title comes from frontmatter, then the first H1, then the file name.
    Backlinks are left empty; the note store fills them in once every note
    in the collection is known.

    Args:
        path: Vault-relative path of the note (with .md).
        raw: Full file text, including any frontmatter block.
        modified: Optional modification time.
        created: Optional creation time.

    Raises:
        ParseError: If the frontmatter block is not valid YAML.
    """
    try:
        post = frontmatter.loads(raw)
    except Exception as e:
        raise ParseError(path, f"Failed to parse frontmatter: {e}") from e

    metadata = dict(post.metadata) if isinstance(post.metadata, dict) else {}
    content = post.content

    links = [
        *extract_internal_links(content, path),
        *extract_embed_links(content, path),
        *extract_external_links(content, path),
    ]

    return Note(
        path=path,
        title=_title_for(path, metadata, content),
        content=content,
        frontmatter=metadata or None,
        tags=extract_tags(content, metadata),
        links=links,
        created=created,
        modified=modified,
    )


def serialize_note(content: str, metadata: dict[str, Any] | None = None) -> str:
    """Render a note body with an optional frontmatter block."""
    if not metadata:
        return content
    return frontmatter.dumps(frontmatter.Post(content, **metadata))


def count_words(content: str) -> int:
    """Count prose words, ignoring code and markdown syntax."""
    cleaned = _strip_code(content)
    cleaned = re.sub(r"\[\[([^\]]+)\]\]", r"\1", cleaned)
    cleaned = re.sub(r"[#*_~`]", "", cleaned)
    return len(cleaned.split())
