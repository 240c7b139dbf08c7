"""Knowledge graph engine: the public query surface over a note snapshot.

The engine's only state is the snapshot installed by update_notes(). Every
query is a pure, synchronous computation over that snapshot; graphs, path
results and scores are rebuilt per call and never cached.

Queries about unknown notes return empty results. Querying before any
snapshot was installed raises SnapshotNotLoadedError.

The engine does no locking. A multi-threaded host can share one engine
because update_notes() publishes a fully built snapshot with a single
reference assignment; readers see either the old or the new snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .analysis import analyze_graph, compute_vault_stats, find_dead_ends
from .config import DEFAULT_DEAD_END_LIMIT, DEFAULT_RELATED_DEPTH, DEFAULT_SUGGESTION_LIMIT
from .errors import SnapshotNotLoadedError
from .graph_builder import build_graph
from .models import DeadEnd, GraphAnalysis, KnowledgeGraph, LinkSuggestion, Note, TagCount, VaultStats
from .resolver import resolve_link_target
from .snapshot import NoteSnapshot
from .suggestions import suggest_links
from .traversal import find_shortest_path, related_note_ids

log = logging.getLogger(__name__)


class KnowledgeGraphEngine:
    def __init__(self, notes: Iterable[Note] | None = None) -> None:
        self._snapshot: NoteSnapshot | None = None
        if notes is not None:
            self.update_notes(notes)

    def update_notes(self, notes: Iterable[Note]) -> None:
        """Replace the working snapshot."""
        snapshot = NoteSnapshot(notes)
        self._snapshot = snapshot
        log.debug("Installed snapshot with %d notes", len(snapshot))

    @property
    def snapshot(self) -> NoteSnapshot:
        if self._snapshot is None:
            raise SnapshotNotLoadedError()
        return self._snapshot

    def resolve(self, target: str) -> str:
        """Resolve a path, bare name or title to a note path (best effort)."""
        return resolve_link_target(target, self.snapshot)

    def build_graph(self) -> KnowledgeGraph:
        return build_graph(self.snapshot)

    def related_notes(self, note_id: str, max_depth: int = DEFAULT_RELATED_DEPTH) -> list[Note]:
        """Notes within max_depth link hops of note_id, in snapshot order."""
        snapshot = self.snapshot
        related = related_note_ids(snapshot, note_id, max_depth)
        return [note for note in snapshot if note.path in related]

    def find_path(self, from_id: str, to_id: str) -> list[str] | None:
        return find_shortest_path(self.snapshot, from_id, to_id)

    def analyze(self) -> GraphAnalysis:
        snapshot = self.snapshot
        return analyze_graph(snapshot, build_graph(snapshot))

    def suggest_links(self, note_id: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[LinkSuggestion]:
        return suggest_links(self.snapshot, note_id, limit)

    def notes_by_tag(self, tag: str) -> list[Note]:
        return [note for note in self.snapshot if tag in note.tags]

    def notes_by_folder(self, folder: str) -> list[Note]:
        """Notes directly in folder or in any of its subfolders."""
        prefix = f"{folder}/"
        return [
            note for note in self.snapshot if note.path.startswith(prefix) or note.folder == folder
        ]

    def all_tags(self) -> list[TagCount]:
        """Every tag with its note count, most used first."""
        counts: dict[str, int] = {}
        for note in self.snapshot:
            for tag in note.tags:
                counts[tag] = counts.get(tag, 0) + 1
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [TagCount(tag=tag, count=count) for tag, count in ranked]

    def dead_ends(self, limit: int = DEFAULT_DEAD_END_LIMIT) -> list[DeadEnd]:
        return find_dead_ends(self.snapshot, limit)

    def stats(self) -> VaultStats:
        return compute_vault_stats(self.snapshot)
