"""Heuristic link suggestions from shared tags, title words and folders."""

from __future__ import annotations

from .config import (
    DEFAULT_SUGGESTION_LIMIT,
    MIN_TITLE_WORD_LENGTH,
    SAME_FOLDER_WEIGHT,
    SHARED_TAG_WEIGHT,
    SHARED_TITLE_WORD_WEIGHT,
)
from .models import LinkSuggestion
from .snapshot import NoteSnapshot


def title_words(title: str) -> list[str]:
    return title.lower().split()


def suggest_links(
    snapshot: NoteSnapshot,
    path: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[LinkSuggestion]:
    """Rank other notes as link candidates for the note at path.

    Scoring, summed per candidate:
    - SHARED_TAG_WEIGHT per tag of the source note the candidate also has
    - SHARED_TITLE_WORD_WEIGHT per word in the candidate's title that is
      longer than MIN_TITLE_WORD_LENGTH and also appears in the source title
      (repeats in the candidate title count again)
    - SAME_FOLDER_WEIGHT when both notes live in the same folder

    Args:
        snapshot: Notes to score.
        path: Source note path. Unknown paths yield no suggestions.
        limit: Maximum suggestions to return.

    Returns:
        Candidates with a positive score, highest first. Equal scores keep
        the order in which candidates were first scored: the tag pass, then
        the title pass, then the folder pass, each in snapshot order.
    """
    note = snapshot.get(path)
    if note is None:
        return []

    candidates = [other for other in snapshot if other.path != path]
    # Insertion order records the pass that first scored each candidate
    scores: dict[str, int] = {}

    def add(candidate: str, points: int) -> None:
        scores[candidate] = scores.get(candidate, 0) + points

    source_tags = set(note.tags)
    for other in candidates:
        shared = len(source_tags & set(other.tags))
        if shared:
            add(other.path, SHARED_TAG_WEIGHT * shared)

    source_words = set(title_words(note.title))
    for other in candidates:
        common = sum(
            1
            for word in title_words(other.title)
            if len(word) > MIN_TITLE_WORD_LENGTH and word in source_words
        )
        if common:
            add(other.path, SHARED_TITLE_WORD_WEIGHT * common)

    folder = note.folder
    for other in candidates:
        if other.folder == folder:
            add(other.path, SAME_FOLDER_WEIGHT)

    ranked = sorted(
        ((candidate, score) for candidate, score in scores.items() if score > 0),
        key=lambda item: item[1],
        reverse=True,
    )[: max(limit, 0)]
    return [LinkSuggestion(id=candidate, score=score) for candidate, score in ranked]
