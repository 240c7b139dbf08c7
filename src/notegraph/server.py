"""FastMCP server for notegraph.

This module provides MCP protocol wrappers around the core business logic.
All actual logic lives in core.py - this file just handles MCP serialization.
"""

from fastmcp import FastMCP

from . import core
from .config import DEFAULT_RELATED_DEPTH, DEFAULT_SUGGESTION_LIMIT
from .models import GraphAnalysis, KnowledgeGraph, LinkSuggestion, TagCount


mcp = FastMCP(
    name="notegraph",
    instructions=(
        "Knowledge graph over a vault of linked markdown notes. "
        "Use related_notes/find_path to navigate, analyze_graph for orphans and hubs, "
        "suggest_links to find notes worth linking."
    ),
)


@mcp.tool(
    name="build_graph",
    description="Build the full graph of notes, tags and folders with typed edges.",
)
async def build_graph_tool() -> KnowledgeGraph:
    return await core.graph()


@mcp.tool(
    name="related_notes",
    description="Find notes within max_depth link hops of a note, following links in both directions.",
)
async def related_notes_tool(path: str, max_depth: int = DEFAULT_RELATED_DEPTH) -> list[dict]:
    return await core.related(path, depth=max_depth)


@mcp.tool(
    name="find_path",
    description="Find the shortest chain of outgoing links between two notes. Returns null if none.",
)
async def find_path_tool(source: str, target: str) -> list[str] | None:
    return await core.find_path(source, target)


@mcp.tool(
    name="analyze_graph",
    description="Report note and edge totals, the most connected notes and orphan notes.",
)
async def analyze_graph_tool() -> GraphAnalysis:
    return await core.analyze()


@mcp.tool(
    name="suggest_links",
    description="Suggest notes to link from a note, scored by shared tags, title words and folder.",
)
async def suggest_links_tool(
    path: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[LinkSuggestion]:
    return await core.suggest_links(path, limit=limit)


@mcp.tool(
    name="list_tags",
    description="List all tags with usage counts.",
)
async def list_tags_tool() -> list[TagCount]:
    return await core.tags()


@mcp.tool(
    name="notes_by_tag",
    description="List notes carrying a tag.",
)
async def notes_by_tag_tool(tag: str) -> list[dict]:
    return await core.notes_by_tag(tag)


@mcp.tool(
    name="notes_by_folder",
    description="List notes in a folder, including subfolders.",
)
async def notes_by_folder_tool(folder: str) -> list[dict]:
    return await core.notes_by_folder(folder)


def main():
    """Run the MCP server."""
    import logging
    from ._logging import configure_logging

    configure_logging()
    log = logging.getLogger(__name__)
    log.info("Starting notegraph MCP server")

    mcp.run()


if __name__ == "__main__":
    main()
