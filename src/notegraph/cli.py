#!/usr/bin/env python3
"""
ng: CLI for notegraph

Usage:
    ng analyze                     # Orphans and most connected notes
    ng related path/to/note.md     # Notes within N link hops
    ng path a.md c.md              # Shortest outgoing-link route
    ng suggest path/to/note.md     # Unlinked notes worth linking
    ng tags                        # Tag usage counts
"""

from __future__ import annotations

import asyncio
import difflib
import json
import sys
from collections.abc import Sequence
from typing import Any, NoReturn

import click
from click.exceptions import ClickException, UsageError

from . import __version__ as NOTEGRAPH_VERSION
from .config import (
    DEFAULT_DEAD_END_LIMIT,
    DEFAULT_RELATED_DEPTH,
    DEFAULT_SUGGESTION_LIMIT,
    MAX_RELATED_DEPTH,
    ConfigurationError,
)
from .errors import ErrorCode, NotegraphError, format_error_json


def run_async(coro):
    """Run async function synchronously."""
    return asyncio.run(coro)


# ─────────────────────────────────────────────────────────────────────────────
# Output Formatting
# ─────────────────────────────────────────────────────────────────────────────


def format_table(rows: list[dict], columns: list[str], max_widths: dict | None = None) -> str:
    """Format rows as a simple table."""
    if not rows:
        return ""

    max_widths = max_widths or {}
    widths = {col: len(col) for col in columns}

    def cell(row: dict, col: str) -> str:
        val = str(row.get(col, ""))
        limit = max_widths.get(col, 50)
        if len(val) > limit:
            val = val[: limit - 3] + "..."
        return val

    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(cell(row, col)))

    header = "  ".join(col.upper().ljust(widths[col]) for col in columns)
    separator = "  ".join("-" * widths[col] for col in columns)

    lines = [header, separator]
    for row in rows:
        lines.append("  ".join(cell(row, col).ljust(widths[col]) for col in columns))

    return "\n".join(lines)


def output(data, as_json: bool = False):
    """Output data as JSON or formatted text."""
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(data)


def _handle_error(ctx: click.Context, error: Exception) -> NoReturn:
    """Report an error as text or JSON (--json-errors) and exit 1."""
    json_errors = ctx.obj.get("json_errors", False) if ctx.obj else False

    if isinstance(error, NotegraphError):
        message = error.message
        payload = error.to_json()
    elif isinstance(error, ConfigurationError):
        message = str(error)
        payload = format_error_json(ErrorCode.CONFIGURATION_ERROR, message)
    else:
        message = str(error)
        payload = format_error_json(ErrorCode.INTERNAL_ERROR, message)

    click.echo(payload if json_errors else f"Error: {message}", err=True)
    sys.exit(1)


def _run(ctx: click.Context, coro):
    try:
        return run_async(coro)
    except (NotegraphError, ConfigurationError, OSError) as e:
        _handle_error(ctx, e)


# ─────────────────────────────────────────────────────────────────────────────
# JSON Error Handling
# ─────────────────────────────────────────────────────────────────────────────


class JsonErrorGroup(click.Group):
    """Click group that formats usage errors as JSON when --json-errors is set.

    Also suggests the closest command name for typos.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except UsageError as e:
            cmd_name = args[0] if args else ""
            if cmd_name and "No such command" in str(e):
                matches = difflib.get_close_matches(
                    cmd_name, self.list_commands(ctx), n=1, cutoff=0.6
                )
                if matches:
                    raise UsageError(f"No such command '{cmd_name}'. Did you mean '{matches[0]}'?")
            raise

    def main(
        self,
        args: Sequence[str] | None = None,
        prog_name: str | None = None,
        complete_var: str | None = None,
        standalone_mode: bool = True,
        **extra: Any,
    ) -> Any:
        argv = list(args) if args is not None else list(sys.argv[1:])

        if "--json-errors" not in argv:
            return super().main(argv, prog_name, complete_var, standalone_mode, **extra)

        # Accept --json-errors anywhere by moving it in front of the subcommand
        argv = ["--json-errors", *[a for a in argv if a != "--json-errors"]]

        try:
            return super().main(argv, prog_name, complete_var, standalone_mode=False, **extra)
        except ClickException as e:
            click.echo(format_error_json("USAGE_ERROR", e.format_message()), err=True)
            raise SystemExit(1)


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group(cls=JsonErrorGroup)
@click.version_option(version=NOTEGRAPH_VERSION, prog_name="ng")
@click.option(
    "--json-errors",
    "json_errors",
    is_flag=True,
    help="Output errors as JSON (for programmatic use)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="NOTEGRAPH_QUIET",
    help="Suppress warnings, show only errors and essential output",
)
@click.pass_context
def cli(ctx: click.Context, json_errors: bool, quiet: bool):
    """ng: knowledge graph queries over a vault of markdown notes.

    The vault comes from NOTEGRAPH_VAULT_ROOT or a .notegraph.yaml file
    with a vault_path entry.

    \b
    Structure:
      ng analyze                     # Totals, hubs and orphans
      ng dead-ends                   # Linked-to notes that link nowhere
      ng graph --json                # Full node/edge graph

    \b
    Navigation:
      ng related note.md --depth=2   # Notes within 2 hops (either direction)
      ng path a.md c.md              # Shortest route via outgoing links
      ng suggest note.md             # Candidates to link from note.md

    \b
    Browsing:
      ng tags | ng by-tag TAG | ng by-folder FOLDER | ng stats
    """
    from ._logging import configure_logging, set_quiet_mode

    configure_logging()

    ctx.ensure_object(dict)
    ctx.obj["json_errors"] = json_errors
    ctx.obj["quiet"] = quiet

    if quiet:
        set_quiet_mode(True)


# ─────────────────────────────────────────────────────────────────────────────
# Graph Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def graph(ctx: click.Context, as_json: bool):
    """Build the note/tag/folder graph."""
    from . import core

    result = _run(ctx, core.graph())

    if as_json:
        output(result.model_dump(), as_json=True)
        return

    kinds: dict[str, int] = {}
    for node in result.nodes:
        kinds[node.kind] = kinds.get(node.kind, 0) + 1

    click.echo(f"Nodes: {len(result.nodes)}")
    for kind in ("note", "tag", "folder"):
        click.echo(f"  {kind + 's':<8} {kinds.get(kind, 0)}")
    click.echo(f"Edges: {len(result.edges)}")
    dangling = result.dangling_edges()
    if dangling:
        click.echo(f"  dangling {len(dangling)}")


@cli.command()
@click.argument("path")
@click.option(
    "--depth",
    type=click.IntRange(min=0, max=MAX_RELATED_DEPTH),
    default=DEFAULT_RELATED_DEPTH,
    show_default=True,
    help="Link hops to traverse",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def related(ctx: click.Context, path: str, depth: int, as_json: bool):
    """Show notes linked to or from PATH within --depth hops."""
    from . import core

    results = _run(ctx, core.related(path, depth=depth))

    if as_json:
        output(results, as_json=True)
        return

    if not results:
        click.echo("No related notes found.")
        return

    rows = [{"path": r["path"], "title": r["title"], "tags": ", ".join(r["tags"])} for r in results]
    click.echo(format_table(rows, ["path", "title", "tags"], {"path": 50, "title": 40}))


@cli.command("path")
@click.argument("source")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def path_cmd(ctx: click.Context, source: str, target: str, as_json: bool):
    """Find the shortest outgoing-link route from SOURCE to TARGET."""
    from . import core

    route = _run(ctx, core.find_path(source, target))

    if as_json:
        output({"source": source, "target": target, "path": route}, as_json=True)
        return

    if route is None:
        click.echo(f"No path from {source} to {target}.")
        return

    click.echo(" -> ".join(route))
    click.echo(f"({len(route) - 1} hops)")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def analyze(ctx: click.Context, as_json: bool):
    """Report note/edge totals, most connected notes and orphans."""
    from . import core

    result = _run(ctx, core.analyze())

    if as_json:
        output(result.model_dump(), as_json=True)
        return

    click.echo(f"Notes: {result.total_notes}")
    click.echo(f"Edges: {result.total_edges}")

    if result.top_connected:
        click.echo()
        click.echo("Most connected:")
        rows = [{"path": c.id, "connections": c.connections} for c in result.top_connected]
        click.echo(format_table(rows, ["path", "connections"], {"path": 60}))

    click.echo()
    if result.orphans:
        click.echo(f"Orphans ({len(result.orphans)}):")
        for orphan in result.orphans:
            click.echo(f"  {orphan}")
    else:
        click.echo("No orphans.")


@cli.command()
@click.argument("path")
@click.option(
    "--limit",
    "-n",
    default=DEFAULT_SUGGESTION_LIMIT,
    type=click.IntRange(min=1),
    show_default=True,
    help="Max suggestions",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def suggest(ctx: click.Context, path: str, limit: int, as_json: bool):
    """Suggest notes to link from PATH (shared tags, title words, folder)."""
    from . import core

    suggestions = _run(ctx, core.suggest_links(path, limit=limit))

    if as_json:
        output([s.model_dump() for s in suggestions], as_json=True)
        return

    if not suggestions:
        click.echo("No suggestions.")
        return

    rows = [{"path": s.id, "score": s.score} for s in suggestions]
    click.echo(format_table(rows, ["path", "score"], {"path": 60}))


@cli.command("dead-ends")
@click.option(
    "--limit",
    "-n",
    default=DEFAULT_DEAD_END_LIMIT,
    type=click.IntRange(min=1),
    show_default=True,
    help="Max results",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def dead_ends(ctx: click.Context, limit: int, as_json: bool):
    """List notes that are linked to but link nowhere."""
    from . import core

    results = _run(ctx, core.dead_ends(limit=limit))

    if as_json:
        output([r.model_dump() for r in results], as_json=True)
        return

    if not results:
        click.echo("No dead ends.")
        return

    rows = [{"path": r.id, "title": r.title, "incoming": r.incoming} for r in results]
    click.echo(format_table(rows, ["path", "title", "incoming"], {"path": 50, "title": 40}))


# ─────────────────────────────────────────────────────────────────────────────
# Browsing Commands
# ─────────────────────────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tags(ctx: click.Context, as_json: bool):
    """List all tags with usage counts."""
    from . import core

    results = _run(ctx, core.tags())

    if as_json:
        output([r.model_dump() for r in results], as_json=True)
        return

    if not results:
        click.echo("No tags found.")
        return

    click.echo(format_table([r.model_dump() for r in results], ["tag", "count"]))


def _echo_notes(notes: list[dict], as_json: bool, empty_message: str) -> None:
    if as_json:
        output(notes, as_json=True)
        return

    if not notes:
        click.echo(empty_message)
        return

    rows = [{"path": n["path"], "title": n["title"]} for n in notes]
    click.echo(format_table(rows, ["path", "title"], {"path": 60, "title": 40}))


@cli.command("by-tag")
@click.argument("tag")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def by_tag(ctx: click.Context, tag: str, as_json: bool):
    """List notes carrying TAG."""
    from . import core

    _echo_notes(_run(ctx, core.notes_by_tag(tag)), as_json, f"No notes tagged '{tag}'.")


@cli.command("by-folder")
@click.argument("folder")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def by_folder(ctx: click.Context, folder: str, as_json: bool):
    """List notes in FOLDER, including subfolders."""
    from . import core

    _echo_notes(_run(ctx, core.notes_by_folder(folder)), as_json, f"No notes in '{folder}'.")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx: click.Context, as_json: bool):
    """Show note, word, link and tag counts."""
    from . import core

    result = _run(ctx, core.stats())

    if as_json:
        output(result.model_dump(), as_json=True)
        return

    click.echo(f"Notes:         {result.note_count}")
    click.echo(f"Words:         {result.total_words}")
    click.echo(f"Links:         {result.total_links}")
    click.echo(f"Tags:          {len(result.tags)}")
    if result.last_modified:
        click.echo(f"Last modified: {result.last_modified.isoformat()}")


if __name__ == "__main__":
    cli()
