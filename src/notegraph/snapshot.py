"""Immutable note snapshot shared by every graph query."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .models import Note

log = logging.getLogger(__name__)


class NoteSnapshot:
    """Insertion-ordered, read-only view of a note collection keyed by path.

    A snapshot is built in full and never mutated afterwards; replacing the
    notes means building a new snapshot.
    """

    __slots__ = ("_notes",)

    def __init__(self, notes: Iterable[Note] = ()) -> None:
        indexed: dict[str, Note] = {}
        for note in notes:
            if note.path in indexed:
                log.warning("Duplicate note path %s in snapshot; keeping the later note", note.path)
            indexed[note.path] = note
        self._notes = indexed

    def get(self, path: str) -> Note | None:
        return self._notes.get(path)

    def paths(self) -> list[str]:
        return list(self._notes)

    def __contains__(self, path: object) -> bool:
        return path in self._notes

    def __iter__(self) -> Iterator[Note]:
        return iter(self._notes.values())

    def __len__(self) -> int:
        return len(self._notes)

    def __repr__(self) -> str:
        return f"NoteSnapshot({len(self._notes)} notes)"
