"""Show how an AQL query is parsed and compiled."""

from __future__ import annotations

import click
from rich.markup import escape

from note_indexer.cli import Context, pass_context
from note_indexer.search import backend_query as bq
from note_indexer.search.ast_nodes import to_aql
from note_indexer.utils.output import console
from note_indexer.utils.search_ops import prepare_query


@click.command("explain")
@click.argument("query", nargs=-1, required=True)
@pass_context
def cli(ctx: Context, query: tuple[str, ...]) -> None:
    """Print the parsed expression and the compiled index query.

    The index itself is not opened, so this also works before any notes
    have been indexed.

    \b
    Example:
      note-indexer explain "tags:work,urgent -date:<2024-01-01"
    """
    expr, compiled = prepare_query(" ".join(query), ctx.schema())

    console.print(f"[info]Expression:[/info] [query]{escape(to_aql(expr))}[/query]", highlight=False)
    console.print(
        f"[info]Index query:[/info] [query]{escape(bq.to_string(compiled))}[/query]",
        highlight=False,
    )
