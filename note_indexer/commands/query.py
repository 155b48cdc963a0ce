"""Search the note index with an AQL query."""

from __future__ import annotations

import datetime
import json

import click
from rich.markup import escape
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from note_indexer.cli import Context, pass_context
from note_indexer.index.models import Note
from note_indexer.index.session import get_index_session
from note_indexer.search.query import execute_search
from note_indexer.utils.output import console, error, info
from note_indexer.utils.search_ops import prepare_query

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 0
EXIT_INDEX_ERROR = 2
EXIT_NO_INDEX = 3


def _format_date(timestamp: int | None) -> str | None:
    """Format seconds since the epoch as a calendar date."""
    if timestamp is None:
        return None
    return datetime.datetime.fromtimestamp(timestamp, tz=datetime.UTC).date().isoformat()


def _note_to_hit(note: Note) -> dict:
    return {
        "id": note.id,
        "type": "full_text",
        "title": note.title,
        "date": _format_date(note.date),
    }


@click.command("query")
@click.argument("query", nargs=-1, required=True)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "ids"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(min=1),
    default=None,
    help="Limit number of results (default: search.limit from config)",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    output_format: str,
    limit: int | None,
) -> None:
    """Search notes with an AQL query.

    QUERY is an AQL query string. Multiple arguments are joined with spaces.

    \b
    Syntax examples:
      note-indexer query roadmap
      note-indexer query '"release plan"'
      note-indexer query "tags:work,urgent -status:done"
      note-indexer query "title:standup OR title:retro"
      note-indexer query "(type:note OR type:meeting) date:>=2025-01-01"

    \b
    Output formats:
      --format table   Rich table (default)
      --format json    {"query": ..., "results": [...]}
      --format ids     One note id per line (for piping)
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_INDEX_ERROR)

    query_string = " ".join(query)
    _, compiled = prepare_query(query_string, config.schema())

    db_path = config.database
    if not db_path.exists():
        error(
            f"Index database not found: {db_path}",
            hint="Use --database or set paths.database in the config file",
        )
        raise SystemExit(EXIT_NO_INDEX)

    effective_limit = limit if limit is not None else config.result_limit

    try:
        with get_index_session(db_path) as session:
            notes = execute_search(session, compiled, effective_limit)

            if output_format == "json":
                _print_json(query_string, notes)
            elif not notes:
                info(f"No results for: {query_string}")
                raise SystemExit(EXIT_NO_RESULTS)
            elif output_format == "ids":
                _print_ids(notes)
            else:
                _print_table(query_string, notes)

    except SQLAlchemyError as e:
        error(f"Index error: {e}")
        raise SystemExit(EXIT_INDEX_ERROR)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(query_string: str, notes: list[Note]) -> None:
    """Print results as a Rich table."""
    info(f"Query: {query_string} ({len(notes)} results)")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date", style="note.date", no_wrap=True)
    table.add_column("Title", style="note.title")
    table.add_column("Tags")
    table.add_column("ID", style="note.id", no_wrap=True)

    for note in notes:
        table.add_row(
            _format_date(note.date) or "",
            escape(note.title or ""),
            escape(note.tags or ""),
            escape(note.id),
        )

    console.print(table)


def _print_ids(notes: list[Note]) -> None:
    """Print one note id per line."""
    for note in notes:
        click.echo(note.id)


def _print_json(query_string: str, notes: list[Note]) -> None:
    """Print the query and its hits as a JSON object."""
    payload = {
        "query": query_string,
        "results": [_note_to_hit(note) for note in notes],
    }
    click.echo(json.dumps(payload, indent=2))
