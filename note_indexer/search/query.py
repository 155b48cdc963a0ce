"""Convert backend queries to SQL and execute them against the note index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import and_, func, not_, or_, true

from note_indexer.exceptions import UnknownFieldError
from note_indexer.index.models import Note
from note_indexer.search import backend_query as bq
from note_indexer.search.compiler import compile_query
from note_indexer.search.parser import parse_query
from note_indexer.search.schema import Schema, note_schema

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

log = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def _get_column(field: str):
    """Get the notes table column for a field name."""
    col = Note.__table__.c.get(field)
    if col is None:
        # Schema and table disagree
        raise UnknownFieldError(field)
    return col


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _build_term_clause(query: bq.Term):
    """Case-insensitive containment; a missing value counts as empty text.

    Phrases are matched as one contiguous string, which is what a LIKE
    pattern does for bare words as well.
    """
    col = _get_column(query.field)
    pattern = f"%{_escape_like(query.value)}%"
    return func.coalesce(col, "").ilike(pattern, escape=_LIKE_ESCAPE)


def _build_range_clause(query: bq.RangeBound):
    """Build the comparisons for a range; rows without a value never match."""
    col = _get_column(query.field)
    conditions = [col.is_not(None)]
    if query.lower is not None:
        value = query.lower.value
        conditions.append(col >= value if query.lower.inclusive else col > value)
    if query.upper is not None:
        value = query.upper.value
        conditions.append(col <= value if query.upper.inclusive else col < value)
    return and_(*conditions)


def build_clause(query: bq.BackendQuery):
    """Lower a backend query into a SQLAlchemy clause over the notes table.

    Raises:
        UnknownFieldError: If a query field has no column in the notes table.
    """
    if isinstance(query, bq.Term):
        return _build_term_clause(query)
    if isinstance(query, bq.RangeBound):
        return _build_range_clause(query)
    if isinstance(query, bq.And):
        return and_(*(build_clause(c) for c in query.clauses))
    if isinstance(query, bq.Or):
        return or_(*(build_clause(c) for c in query.clauses))
    if isinstance(query, bq.Not):
        return not_(build_clause(query.operand))
    if isinstance(query, bq.MatchAll):
        return true()
    raise TypeError(f"Unsupported backend query: {query!r}")


def execute_search(
    session: Session, query: bq.BackendQuery, limit: int | None = None
) -> list[Note]:
    """Execute a compiled query against the note index.

    Args:
        session: SQLAlchemy session connected to the index database.
        query: Compiled backend query.
        limit: Maximum number of notes to return (None = all).

    Returns:
        Matching notes, newest first; notes without a date come last.
    """
    stmt = (
        session.query(Note)
        .filter(build_clause(query))
        .order_by(Note.date.is_(None), Note.date.desc(), Note.id)
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(stmt.all())


def search_notes(
    session: Session,
    query_string: str,
    schema: Schema | None = None,
    limit: int | None = None,
) -> list[Note]:
    """Parse, compile and execute an AQL query.

    Raises:
        QuerySyntaxError: If the query cannot be parsed.
        SchemaError: If the query does not fit the schema.
    """
    if schema is None:
        schema = note_schema()

    expr = parse_query(query_string)
    query = compile_query(expr, schema)
    notes = execute_search(session, query, limit)
    log.info("Query %r matched %d notes", query_string, len(notes))
    return notes
