"""CLI tests.

- Bulk parametrized tests for --help and --json output
- Text output checks against a small fixture vault
- Error reporting (plain and --json-errors)
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from notegraph import __version__ as NOTEGRAPH_VERSION
from notegraph.cli import cli

COMMANDS = [
    "graph",
    "related",
    "path",
    "analyze",
    "suggest",
    "dead-ends",
    "tags",
    "by-tag",
    "by-folder",
    "stats",
]

# Commands that support --json output, with the arguments they need
JSON_COMMANDS = [
    ["graph"],
    ["related", "index.md"],
    ["path", "index.md", "projects/beta.md"],
    ["analyze"],
    ["suggest", "projects/alpha.md"],
    ["dead-ends"],
    ["tags"],
    ["by-tag", "project"],
    ["by-folder", "projects"],
    ["stats"],
]


@pytest.mark.parametrize("cmd", COMMANDS)
def test_command_help(runner: CliRunner, cmd: str) -> None:
    result = runner.invoke(cli, [cmd, "--help"])
    assert result.exit_code == 0, f"{cmd} --help failed: {result.output}"
    assert "Usage:" in result.output


def test_main_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Commands:" in result.output
    for cmd in COMMANDS:
        assert cmd in result.output, f"Missing command: {cmd}"


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert NOTEGRAPH_VERSION in result.output


@pytest.mark.parametrize("args", JSON_COMMANDS, ids=lambda args: args[0])
def test_json_output_is_valid(tmp_vault_with_notes: Path, cli_invoke, args: list[str]) -> None:
    result = cli_invoke([*args, "--json"])

    assert result.exit_code == 0, result.output
    json.loads(result.output)


class TestTextOutput:
    def test_analyze(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["analyze"])

        assert result.exit_code == 0, result.output
        assert "Notes: 4" in result.output
        assert "Edges: 10" in result.output
        assert "Most connected:" in result.output
        assert "Orphans (1):" in result.output
        assert "journal/today.md" in result.output

    def test_graph(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["graph"])

        assert result.exit_code == 0, result.output
        assert "Nodes: 9" in result.output
        assert "Edges: 10" in result.output
        assert "dangling" not in result.output

    def test_related(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["related", "index.md", "--depth", "1"])

        assert result.exit_code == 0, result.output
        assert "projects/alpha.md" in result.output
        assert "projects/beta.md" in result.output
        assert "journal/today.md" not in result.output

    def test_related_none(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["related", "journal/today.md"])
        assert "No related notes found." in result.output

    def test_related_depth_is_bounded(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["related", "index.md", "--depth", "11"])
        assert result.exit_code == 2

    def test_path(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["path", "index.md", "Project Beta"])

        assert result.exit_code == 0, result.output
        assert "index.md -> projects/beta.md" in result.output
        assert "(1 hops)" in result.output

    def test_path_unreachable(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["path", "projects/beta.md", "index.md", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "source": "projects/beta.md",
            "target": "index.md",
            "path": None,
        }

    def test_suggest(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["suggest", "projects/alpha.md", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"id": "projects/beta.md", "score": 18}]

    def test_suggest_none(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["suggest", "index.md"])
        assert "No suggestions." in result.output

    def test_tags(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["tags", "--json"])
        assert json.loads(result.output)[0] == {"tag": "project", "count": 2}

    def test_tags_empty(self, tmp_vault: Path, cli_invoke) -> None:
        result = cli_invoke(["tags"])
        assert "No tags found." in result.output

    def test_by_tag(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["by-tag", "daily"])

        assert result.exit_code == 0, result.output
        assert "journal/today.md" in result.output

    def test_by_folder_empty(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["by-folder", "archive"])
        assert "No notes in 'archive'." in result.output

    def test_dead_ends(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["dead-ends"])

        assert result.exit_code == 0, result.output
        assert "projects/beta.md" in result.output

    def test_stats(self, tmp_vault_with_notes: Path, cli_invoke) -> None:
        result = cli_invoke(["stats"])

        assert result.exit_code == 0, result.output
        assert "Notes:         4" in result.output
        assert "Links:         3" in result.output


class TestErrors:
    def test_missing_vault(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["analyze"], env={"NOTEGRAPH_VAULT_ROOT": str(tmp_path / "missing")})

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Traceback" not in result.output

    def test_missing_vault_json_errors(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            ["analyze", "--json-errors"],
            env={"NOTEGRAPH_VAULT_ROOT": str(tmp_path / "missing")},
        )

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["code"] == "CONFIGURATION_ERROR"

    def test_typo_suggests_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["analyse"])

        assert result.exit_code == 2
        assert "Did you mean 'analyze'?" in result.output

    def test_usage_error_as_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--json-errors", "analyse"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["code"] == "USAGE_ERROR"
        assert "analyze" in data["error"]["message"]
