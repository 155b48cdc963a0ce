"""Query helpers shared by the search commands.

Turns query text into a compiled backend query, reporting syntax and
schema errors on the console the same way for every command.
"""

from __future__ import annotations

from rich.markup import escape

from note_indexer.exceptions import QuerySyntaxError, SchemaError, UnknownFieldError
from note_indexer.search import backend_query as bq
from note_indexer.search.ast_nodes import Expr
from note_indexer.search.compiler import compile_query
from note_indexer.search.parser import parse_query
from note_indexer.search.schema import Schema
from note_indexer.utils.output import error, error_console

EXIT_QUERY_ERROR = 1


def error_marker(query_string: str, offset: int) -> str:
    """Point at the byte ``offset`` of ``query_string`` with a caret line."""
    column = len(query_string.encode("utf-8")[:offset].decode("utf-8", errors="ignore"))
    return f"{query_string}\n{' ' * column}^"


def prepare_query(query_string: str, schema: Schema) -> tuple[Expr, bq.BackendQuery]:
    """Parse and compile a query, exiting with a readable error on failure.

    Returns:
        Tuple of (parsed expression, compiled backend query).

    Raises:
        SystemExit: With EXIT_QUERY_ERROR if the query is invalid.
    """
    try:
        expr = parse_query(query_string)
    except QuerySyntaxError as e:
        error(f"Invalid query: {e.message}")
        for line in error_marker(query_string, e.offset).splitlines():
            error_console.print(f"  {escape(line)}", highlight=False)
        raise SystemExit(EXIT_QUERY_ERROR)

    try:
        compiled = compile_query(expr, schema)
    except UnknownFieldError as e:
        error(f"Invalid query: {e}", hint=f"Known fields: {', '.join(schema.field_names)}")
        raise SystemExit(EXIT_QUERY_ERROR)
    except SchemaError as e:
        error(f"Invalid query: {e}")
        raise SystemExit(EXIT_QUERY_ERROR)

    return expr, compiled
