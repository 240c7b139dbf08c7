"""Link extraction and backlink inversion."""

import re
from collections.abc import Iterable

from ..models import Note, NoteLink
from ..resolver import resolve_link_target
from ..snapshot import NoteSnapshot

# [[target]] and [[target|alias]], but not the embed form ![[target]]
INTERNAL_LINK_PATTERN = re.compile(r"(?<!!)\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")

# ![[target]] and ![[target|alias]]
EMBED_LINK_PATTERN = re.compile(r"!\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")

# [text](https://...)
EXTERNAL_LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]*)\]\((https?://[^)\s]+)\)")


def extract_internal_links(content: str, source: str) -> list[NoteLink]:
    """Extract [[wikilinks]] in document order, duplicates included."""
    links: list[NoteLink] = []
    for match in INTERNAL_LINK_PATTERN.finditer(content):
        target = match.group(1).strip()
        if not target:
            continue
        text = (match.group(2) or "").strip() or target
        links.append(NoteLink(source=source, target=target, kind="internal", text=text))
    return links


def extract_embed_links(content: str, source: str) -> list[NoteLink]:
    links: list[NoteLink] = []
    for match in EMBED_LINK_PATTERN.finditer(content):
        target = match.group(1).strip()
        if target:
            links.append(NoteLink(source=source, target=target, kind="embed"))
    return links


def extract_external_links(content: str, source: str) -> list[NoteLink]:
    return [
        NoteLink(source=source, target=match.group(2), kind="external", text=match.group(1) or None)
        for match in EXTERNAL_LINK_PATTERN.finditer(content)
    ]


def compute_backlinks(notes: Iterable[Note]) -> dict[str, list[NoteLink]]:
    """Build a backlink index for a collection of notes.

    Every link is resolved with the same best-effort rules the graph uses
    (path, bare name, title), so backlinks agree with graph edges. Links
    that resolve to no note are dropped.

    Args:
        notes: Every note in the collection.

    Returns:
        Dict mapping every note path to the link records that point at it,
        in note order.
    """
    snapshot = NoteSnapshot(notes)
    backlinks: dict[str, list[NoteLink]] = {path: [] for path in snapshot.paths()}

    for note in snapshot:
        for link in note.links:
            target = resolve_link_target(link.target, snapshot)
            if target in backlinks:
                backlinks[target].append(link)

    return backlinks
