"""Best-effort resolution of raw link targets to note paths.

Supports path-style [[folder/note]] links, bare [[note]] links that omit the
folder, and [[Title]] links.
"""

from __future__ import annotations

from .config import NOTE_SUFFIX
from .snapshot import NoteSnapshot


def ensure_note_suffix(target: str) -> str:
    if target.endswith(NOTE_SUFFIX):
        return target
    return f"{target}{NOTE_SUFFIX}"


def resolve_link_target(target: str, snapshot: NoteSnapshot) -> str:
    """Resolve a link target to a note path.

    Attempts resolution in order:
    1. Exact path match (after appending .md if missing)
    2. First note, in snapshot order, whose title equals the raw target or
       whose path ends with "/<target>.md"

    Unresolvable targets come back normalized but unchanged, so callers must
    tolerate ids that match no note.

    Args:
        target: The raw link target from [[target]].
        snapshot: Notes to resolve against.

    Returns:
        A note path, or the normalized target if nothing matched.
    """
    normalized = ensure_note_suffix(target)

    if normalized in snapshot:
        return normalized

    suffix = f"/{normalized}"
    for note in snapshot:
        if note.title == target or note.path.endswith(suffix):
            return note.path

    return normalized
