"""Note-to-note traversal: bounded related-note discovery and shortest paths.

Both walks follow links between notes directly and ignore tag and folder
nodes. Link targets are resolved on the fly against the snapshot.
"""

from __future__ import annotations

from collections import deque

from .resolver import resolve_link_target
from .snapshot import NoteSnapshot


def _outgoing(path: str, snapshot: NoteSnapshot) -> list[str]:
    note = snapshot.get(path)
    if note is None:
        return []
    return [resolve_link_target(link.target, snapshot) for link in note.links]


def related_note_ids(snapshot: NoteSnapshot, start: str, max_depth: int) -> set[str]:
    """Collect notes within max_depth hops of start, in either link direction.

    Outgoing links and backlinks are both followed. The start note itself is
    never part of the result, and an unknown start yields an empty set.

    The frontier is FIFO, so every note is first reached at its minimum hop
    count and the result for depth d is a subset of the result for d + 1.
    """
    if start not in snapshot or max_depth <= 0:
        return set()

    related: set[str] = set()
    visited: set[str] = {start}
    frontier: deque[tuple[str, int]] = deque([(start, 0)])

    while frontier:
        path, depth = frontier.popleft()
        if depth >= max_depth:
            continue

        note = snapshot.get(path)
        if note is None:
            continue

        neighbors = _outgoing(path, snapshot)
        neighbors.extend(backlink.source for backlink in note.backlinks)

        for neighbor in neighbors:
            if neighbor in visited or neighbor not in snapshot:
                continue
            visited.add(neighbor)
            related.add(neighbor)
            frontier.append((neighbor, depth + 1))

    return related


def find_shortest_path(snapshot: NoteSnapshot, source: str, target: str) -> list[str] | None:
    """Shortest route from source to target following outgoing links only.

    Returns [source] when both ends are the same note, or None when target
    cannot be reached.
    """
    if source == target:
        return [source]

    queue: deque[tuple[str, list[str]]] = deque([(source, [source])])
    visited: set[str] = set()

    while queue:
        path, route = queue.popleft()

        if path == target:
            return route

        # Duplicates may be queued; only the first dequeue expands
        if path in visited:
            continue
        visited.add(path)

        for neighbor in _outgoing(path, snapshot):
            if neighbor not in visited:
                queue.append((neighbor, [*route, neighbor]))

    return None
