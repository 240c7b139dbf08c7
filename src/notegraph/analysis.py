"""Aggregate structural statistics over a snapshot and its graph."""

from __future__ import annotations

from .config import DEFAULT_DEAD_END_LIMIT, TOP_CONNECTED_LIMIT
from .models import ConnectionCount, DeadEnd, GraphAnalysis, KnowledgeGraph, VaultStats
from .parser import count_words
from .snapshot import NoteSnapshot


def connection_count(snapshot: NoteSnapshot, path: str) -> int:
    """Outgoing plus incoming link occurrences; parallel links count separately."""
    note = snapshot.get(path)
    if note is None:
        return 0
    return len(note.links) + len(note.backlinks)


def analyze_graph(snapshot: NoteSnapshot, graph: KnowledgeGraph) -> GraphAnalysis:
    """Summarize connectivity.

    Args:
        snapshot: Notes the graph was built from.
        graph: Output of build_graph() for the same snapshot.

    Returns:
        GraphAnalysis with the most connected notes (ties keep snapshot
        order) and every note that has no links in either direction.
    """
    counts = [
        ConnectionCount(id=note.path, connections=connection_count(snapshot, note.path))
        for note in snapshot
    ]
    orphans = [count.id for count in counts if count.connections == 0]

    # sorted() is stable, so equal counts keep snapshot order
    top = sorted(counts, key=lambda count: count.connections, reverse=True)

    return GraphAnalysis(
        total_notes=sum(1 for node in graph.nodes if node.kind == "note"),
        total_edges=len(graph.edges),
        top_connected=top[:TOP_CONNECTED_LIMIT],
        orphans=orphans,
    )


def find_dead_ends(snapshot: NoteSnapshot, limit: int = DEFAULT_DEAD_END_LIMIT) -> list[DeadEnd]:
    """Find notes with incoming links but no outgoing links.

    Returns:
        DeadEnd records sorted by incoming links descending.
    """
    results = [
        DeadEnd(id=note.path, title=note.title, incoming=len(note.backlinks))
        for note in snapshot
        if note.backlinks and not note.links
    ]
    results.sort(key=lambda dead_end: dead_end.incoming, reverse=True)
    return results[: max(limit, 0)]


def compute_vault_stats(snapshot: NoteSnapshot) -> VaultStats:
    tags: dict[str, int] = {}
    total_words = 0
    total_links = 0
    last_modified = None

    for note in snapshot:
        total_words += count_words(note.content)
        total_links += len(note.links)
        for tag in note.tags:
            tags[tag] = tags.get(tag, 0) + 1
        if note.modified and (last_modified is None or note.modified > last_modified):
            last_modified = note.modified

    return VaultStats(
        note_count=len(snapshot),
        total_words=total_words,
        total_links=total_links,
        tags=tags,
        last_modified=last_modified,
    )
