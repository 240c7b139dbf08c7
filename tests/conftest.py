"""Shared test fixtures for the notegraph test suite.

Design:
- make_note / linked_notes: build in-memory notes for engine tests
- tmp_vault: isolated vault directory wired up through NOTEGRAPH_VAULT_ROOT
- cli_invoke: CliRunner bound to the temp vault
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from notegraph.cli import cli
from notegraph.models import Note, NoteLink
from notegraph.parser import compute_backlinks


# ─────────────────────────────────────────────────────────────────────────────
# Helper Functions (for test code, not fixtures)
# ─────────────────────────────────────────────────────────────────────────────


def make_note(
    path: str,
    links: list[str] | None = None,
    tags: list[str] | None = None,
    title: str | None = None,
    content: str = "",
    kind: str = "internal",
) -> Note:
    """Build a note whose outgoing links point at the given raw targets.

    Usage in tests:
        from conftest import make_note
        note = make_note("a.md", links=["b"], tags=["t1"])
    """
    title = title or path.rsplit("/", 1)[-1].removesuffix(".md")
    return Note(
        path=path,
        title=title,
        content=content,
        tags=tags or [],
        links=[NoteLink(source=path, target=target, kind=kind) for target in links or []],
    )


def linked_notes(*notes: Note) -> list[Note]:
    """Attach backlinks the way the note store does."""
    backlinks = compute_backlinks(notes)
    return [note.model_copy(update={"backlinks": backlinks[note.path]}) for note in notes]


def write_note(vault: Path, path: str, body: str, title: str | None = None, tags: list[str] | None = None) -> Path:
    """Write a markdown note with optional frontmatter into a vault."""
    note_path = vault / path
    note_path.parent.mkdir(parents=True, exist_ok=True)

    header = ""
    if title is not None or tags:
        lines = ["---"]
        if title is not None:
            lines.append(f"title: {title}")
        if tags:
            lines.append(f"tags: [{', '.join(tags)}]")
        lines.append("---")
        header = "\n".join(lines) + "\n\n"

    note_path.write_text(header + body, encoding="utf-8")
    return note_path


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def chain_notes() -> list[Note]:
    """A -> B -> C with D isolated."""
    return linked_notes(
        make_note("A.md", links=["B"]),
        make_note("B.md", links=["C"]),
        make_note("C.md"),
        make_note("D.md"),
    )


@pytest.fixture
def tmp_vault(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated vault and point NOTEGRAPH_VAULT_ROOT at it."""
    vault = tmp_path / "vault"
    vault.mkdir()
    monkeypatch.setenv("NOTEGRAPH_VAULT_ROOT", str(vault))
    return vault


@pytest.fixture
def tmp_vault_with_notes(tmp_vault: Path) -> Path:
    """Vault with a small linked structure.

    Creates:
    - index.md            -> projects/alpha, projects/beta
    - projects/alpha.md   -> projects/beta  (tags: project, python)
    - projects/beta.md    (tags: project)
    - journal/today.md    (isolated, tag: daily)
    """
    write_note(tmp_vault, "index.md", "# Index\n\nSee [[projects/alpha]] and [[beta]].")
    write_note(
        tmp_vault,
        "projects/alpha.md",
        "Depends on [[Project Beta]].",
        title="Project Alpha",
        tags=["project", "python"],
    )
    write_note(tmp_vault, "projects/beta.md", "Standalone.", title="Project Beta", tags=["project"])
    write_note(tmp_vault, "journal/today.md", "Nothing linked. #daily", title="Today")
    return tmp_vault


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def cli_invoke(runner: CliRunner, tmp_vault: Path):
    """Helper for invoking the CLI against the temp vault.

    Usage:
        def test_tags(cli_invoke):
            result = cli_invoke(["tags", "--json"])
            assert result.exit_code == 0
    """

    def _invoke(args: list[str]):
        return runner.invoke(cli, args, env={"NOTEGRAPH_VAULT_ROOT": str(tmp_vault)})

    return _invoke
