"""notegraph: knowledge graph engine for linked markdown notes."""

__version__ = "0.1.0"
