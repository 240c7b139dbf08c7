"""Pydantic models for notes and the derived knowledge graph."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from .config import ROOT_FOLDER

LinkKind = Literal["internal", "embed", "external"]
EdgeKind = Literal["internal", "embed", "external", "tagged-with", "in-folder"]
NodeKind = Literal["note", "tag", "folder"]


def folder_of(path: str) -> str:
    """Return the folder component of a note path ("." at the vault root)."""
    folder, sep, _ = path.rpartition("/")
    return folder if sep else ROOT_FOLDER


class NoteLink(BaseModel):
    """A link as written in a note; target is raw and unresolved."""

    source: str
    target: str
    kind: LinkKind = "internal"
    text: str | None = None  # Alias text for [[target|text]]


class Note(BaseModel):
    """A parsed note as supplied by the note store."""

    path: str  # Unique, vault-relative, includes the .md suffix
    title: str
    content: str = ""
    frontmatter: dict[str, Any] | None = None
    tags: list[str] = Field(default_factory=list)
    links: list[NoteLink] = Field(default_factory=list)
    backlinks: list[NoteLink] = Field(default_factory=list)  # Filled in by the store
    created: datetime | None = None
    modified: datetime | None = None

    @field_validator("tags", "links", "backlinks", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def folder(self) -> str:
        return folder_of(self.path)


class NoteNodeMetadata(BaseModel):
    """Metadata carried by note nodes. Tag and folder nodes have none."""

    tags: list[str] = Field(default_factory=list)
    content_size: int = 0  # Characters of body text
    outgoing_link_count: int = 0


class GraphNode(BaseModel):
    """A node in the knowledge graph.

    Ids are the note path for notes, "tag:<name>" for tags and
    "folder:<path>" for folders.
    """

    id: str
    label: str
    kind: NodeKind
    metadata: NoteNodeMetadata | None = None


class GraphEdge(BaseModel):
    """A directed edge. Tag and folder edges always start at the note."""

    source: str
    target: str
    kind: EdgeKind
    weight: int = 1


class KnowledgeGraph(BaseModel):
    """Typed graph derived from one note snapshot."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def dangling_edges(self) -> list[GraphEdge]:
        """Edges whose target has no node (links to notes that don't exist yet)."""
        known = self.node_ids()
        return [edge for edge in self.edges if edge.target not in known]


class ConnectionCount(BaseModel):
    id: str
    connections: int


class GraphAnalysis(BaseModel):
    """Aggregate structural statistics.

    total_notes counts note nodes only while total_edges counts every edge,
    tag and folder edges included.
    """

    total_notes: int
    total_edges: int
    top_connected: list[ConnectionCount] = Field(default_factory=list)
    orphans: list[str] = Field(default_factory=list)


class DeadEnd(BaseModel):
    """A note that is linked to but links nowhere."""

    id: str
    title: str
    incoming: int


class LinkSuggestion(BaseModel):
    id: str
    score: int


class TagCount(BaseModel):
    tag: str
    count: int


class VaultStats(BaseModel):
    """Summary counts for a snapshot."""

    note_count: int
    total_words: int
    total_links: int
    tags: dict[str, int] = Field(default_factory=dict)
    last_modified: datetime | None = None
