"""Tests for the async core functions shared by the CLI and server."""

from pathlib import Path

import pytest

from notegraph import core
from notegraph.config import ConfigurationError


class TestGraphQueries:
    @pytest.mark.asyncio
    async def test_graph(self, tmp_vault_with_notes: Path) -> None:
        graph = await core.graph()

        kinds = [node.kind for node in graph.nodes]
        assert kinds.count("note") == 4
        assert kinds.count("tag") == 3
        assert kinds.count("folder") == 2
        assert len(graph.edges) == 10
        assert graph.dangling_edges() == []

    @pytest.mark.asyncio
    async def test_related(self, tmp_vault_with_notes: Path) -> None:
        results = await core.related("index.md", depth=1)

        assert [r["path"] for r in results] == ["projects/alpha.md", "projects/beta.md"]
        assert results[0] == {
            "path": "projects/alpha.md",
            "title": "Project Alpha",
            "tags": ["project", "python"],
        }

    @pytest.mark.asyncio
    async def test_related_accepts_titles(self, tmp_vault_with_notes: Path) -> None:
        results = await core.related("Project Alpha", depth=1)
        assert [r["path"] for r in results] == ["index.md", "projects/beta.md"]

    @pytest.mark.asyncio
    async def test_related_isolated_note(self, tmp_vault_with_notes: Path) -> None:
        assert await core.related("journal/today.md") == []

    @pytest.mark.asyncio
    async def test_related_unknown_note(self, tmp_vault_with_notes: Path) -> None:
        assert await core.related("missing.md") == []

    @pytest.mark.asyncio
    async def test_find_path(self, tmp_vault_with_notes: Path) -> None:
        assert await core.find_path("index.md", "beta") == ["index.md", "projects/beta.md"]
        assert await core.find_path("projects/beta.md", "index.md") is None

    @pytest.mark.asyncio
    async def test_analyze(self, tmp_vault_with_notes: Path) -> None:
        result = await core.analyze()

        assert result.total_notes == 4
        assert result.total_edges == 10
        assert result.orphans == ["journal/today.md"]
        assert [c.id for c in result.top_connected] == [
            "index.md",
            "projects/alpha.md",
            "projects/beta.md",
            "journal/today.md",
        ]

    @pytest.mark.asyncio
    async def test_suggest_links(self, tmp_vault_with_notes: Path) -> None:
        suggestions = await core.suggest_links("projects/alpha.md")

        # shared tag + shared title word + same folder
        assert [(s.id, s.score) for s in suggestions] == [("projects/beta.md", 18)]

    @pytest.mark.asyncio
    async def test_dead_ends(self, tmp_vault_with_notes: Path) -> None:
        results = await core.dead_ends()
        assert [(d.id, d.incoming) for d in results] == [("projects/beta.md", 2)]


class TestBrowsing:
    @pytest.mark.asyncio
    async def test_tags(self, tmp_vault_with_notes: Path) -> None:
        assert [(t.tag, t.count) for t in await core.tags()] == [
            ("project", 2),
            ("daily", 1),
            ("python", 1),
        ]

    @pytest.mark.asyncio
    async def test_notes_by_tag_strips_hash(self, tmp_vault_with_notes: Path) -> None:
        results = await core.notes_by_tag("#project")
        assert [r["path"] for r in results] == ["projects/alpha.md", "projects/beta.md"]

    @pytest.mark.asyncio
    async def test_notes_by_folder_strips_slashes(self, tmp_vault_with_notes: Path) -> None:
        results = await core.notes_by_folder("projects/")
        assert [r["path"] for r in results] == ["projects/alpha.md", "projects/beta.md"]

    @pytest.mark.asyncio
    async def test_stats(self, tmp_vault_with_notes: Path) -> None:
        result = await core.stats()

        assert result.note_count == 4
        assert result.total_links == 3
        assert result.tags == {"daily": 1, "project": 2, "python": 1}
        assert result.last_modified is not None


@pytest.mark.asyncio
async def test_missing_vault_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTEGRAPH_VAULT_ROOT", str(tmp_path / "missing"))
    with pytest.raises(ConfigurationError):
        await core.analyze()
