"""Core business logic for notegraph.

This module contains the logic shared by the CLI and the MCP server.

Design principles:
- All functions are async for consistency with the server tools
- Each call loads a fresh snapshot from the configured vault
"""

import logging

from .config import (
    DEFAULT_DEAD_END_LIMIT,
    DEFAULT_RELATED_DEPTH,
    DEFAULT_SUGGESTION_LIMIT,
    load_vault_config,
)
from .engine import KnowledgeGraphEngine
from .models import DeadEnd, GraphAnalysis, KnowledgeGraph, LinkSuggestion, Note, TagCount, VaultStats
from .store import LocalNoteStore

log = logging.getLogger(__name__)


def get_store() -> LocalNoteStore:
    config = load_vault_config()
    return LocalNoteStore(config.vault_root, exclude=config.exclude)


def load_engine() -> KnowledgeGraphEngine:
    """Build an engine over the current contents of the configured vault."""
    return KnowledgeGraphEngine(get_store().get_all_notes())


def _lookup(engine: KnowledgeGraphEngine, path: str) -> str:
    """Accept exact paths, paths without .md, bare names and titles."""
    if path in engine.snapshot:
        return path
    resolved = engine.resolve(path)
    if resolved != path:
        log.debug("Resolved %r to %s", path, resolved)
    return resolved


def note_summary(note: Note) -> dict:
    return {"path": note.path, "title": note.title, "tags": list(note.tags)}


async def graph() -> KnowledgeGraph:
    """Build the full knowledge graph for the vault."""
    return load_engine().build_graph()


async def related(path: str, depth: int = DEFAULT_RELATED_DEPTH) -> list[dict]:
    """Notes within depth link hops of path, sorted by path."""
    engine = load_engine()
    notes = engine.related_notes(_lookup(engine, path), max_depth=depth)
    return [note_summary(note) for note in sorted(notes, key=lambda note: note.path)]


async def find_path(source: str, target: str) -> list[str] | None:
    engine = load_engine()
    return engine.find_path(_lookup(engine, source), _lookup(engine, target))


async def analyze() -> GraphAnalysis:
    return load_engine().analyze()


async def suggest_links(path: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[LinkSuggestion]:
    """Rank unlinked notes worth linking from path."""
    engine = load_engine()
    return engine.suggest_links(_lookup(engine, path), limit=limit)


async def tags() -> list[TagCount]:
    return load_engine().all_tags()


async def notes_by_tag(tag: str) -> list[dict]:
    return [note_summary(note) for note in load_engine().notes_by_tag(tag.lstrip("#"))]


async def notes_by_folder(folder: str) -> list[dict]:
    return [note_summary(note) for note in load_engine().notes_by_folder(folder.strip("/"))]


async def dead_ends(limit: int = DEFAULT_DEAD_END_LIMIT) -> list[DeadEnd]:
    return load_engine().dead_ends(limit)


async def stats() -> VaultStats:
    return load_engine().stats()
