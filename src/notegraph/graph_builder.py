"""Typed knowledge graph built from a note snapshot."""

from __future__ import annotations

import logging

from .config import FOLDER_NODE_PREFIX, ROOT_FOLDER, TAG_NODE_PREFIX
from .models import GraphEdge, GraphNode, KnowledgeGraph, NoteNodeMetadata
from .resolver import resolve_link_target
from .snapshot import NoteSnapshot

log = logging.getLogger(__name__)


def tag_node_id(tag: str) -> str:
    return f"{TAG_NODE_PREFIX}{tag}"


def folder_node_id(folder: str) -> str:
    return f"{FOLDER_NODE_PREFIX}{folder}"


def build_graph(snapshot: NoteSnapshot) -> KnowledgeGraph:
    """Build a graph of notes, tags and folders.

    Emits one node per note, tag and non-root folder, plus edges for every
    link occurrence (parallel links are kept), tag membership and folder
    membership. Output order follows the snapshot, then links, tags and
    folder for each note, so identical snapshots give identical graphs.

    Every link kind goes through the resolver, external URLs included.
    Link targets that resolve to no note still get an edge; see
    KnowledgeGraph.dangling_edges().
    """
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    seen_tags: set[str] = set()
    seen_folders: set[str] = set()

    for note in snapshot:
        nodes.append(
            GraphNode(
                id=note.path,
                label=note.title,
                kind="note",
                metadata=NoteNodeMetadata(
                    tags=list(note.tags),
                    content_size=len(note.content),
                    outgoing_link_count=len(note.links),
                ),
            )
        )

        for link in note.links:
            target = resolve_link_target(link.target, snapshot)
            edges.append(GraphEdge(source=note.path, target=target, kind=link.kind))

        for tag in note.tags:
            node_id = tag_node_id(tag)
            if tag not in seen_tags:
                seen_tags.add(tag)
                nodes.append(GraphNode(id=node_id, label=tag, kind="tag"))
            edges.append(GraphEdge(source=note.path, target=node_id, kind="tagged-with"))

        folder = note.folder
        if folder and folder != ROOT_FOLDER:
            node_id = folder_node_id(folder)
            if folder not in seen_folders:
                seen_folders.add(folder)
                nodes.append(GraphNode(id=node_id, label=folder, kind="folder"))
            edges.append(GraphEdge(source=note.path, target=node_id, kind="in-folder"))

    log.debug(
        "Built graph: %d nodes (%d tags, %d folders), %d edges",
        len(nodes),
        len(seen_tags),
        len(seen_folders),
        len(edges),
    )
    return KnowledgeGraph(nodes=nodes, edges=edges)
