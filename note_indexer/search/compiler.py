"""Compile an AQL expression tree into a backend query."""

from __future__ import annotations

import datetime
import logging
import re

from note_indexer.exceptions import InvalidRangeValueError, UnknownFieldError
from note_indexer.search import backend_query as bq
from note_indexer.search.ast_nodes import And, Expr, Or, Range, RangeOp, Term
from note_indexer.search.schema import FieldHandle, Schema

log = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

_EPOCH_ORDINAL = datetime.date(1970, 1, 1).toordinal()

_DATE_RE = re.compile(r"(\d{1,4})-(\d{1,2})-(\d{1,2})")


def date_to_timestamp(value: str) -> int:
    """Convert a ``YYYY-MM-DD`` calendar date to seconds since the epoch.

    Uses a proleptic Gregorian day count, so ``1970-01-01`` is 0 and the
    result grows strictly with the date (leap days included).

    Raises:
        ValueError: If ``value`` is not a valid calendar date.
    """
    match = _DATE_RE.fullmatch(value)
    if match is None:
        raise ValueError("expected a date like YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    date = datetime.date(year, month, day)
    return (date.toordinal() - _EPOCH_ORDINAL) * SECONDS_PER_DAY


def _resolve(schema: Schema, name: str) -> FieldHandle:
    handle = schema.resolve(name)
    if handle is None:
        raise UnknownFieldError(name)
    return handle


def _compile_term(term: Term, schema: Schema) -> bq.BackendQuery:
    if term.field is None:
        fields = schema.default_fields
    else:
        fields = (_resolve(schema, term.field),)

    matches = tuple(bq.Term(f.name, term.value, term.phrase) for f in fields)
    query: bq.BackendQuery = matches[0] if len(matches) == 1 else bq.Or(matches)

    # -foo excludes notes with foo in any default field
    if term.negated:
        return bq.exclude(query)
    return query


def _compile_range(node: Range, schema: Schema) -> bq.BackendQuery:
    handle = _resolve(schema, node.field)
    try:
        value = date_to_timestamp(node.value)
    except ValueError as e:
        raise InvalidRangeValueError(node.field, node.value, str(e)) from e

    if node.op is RangeOp.LT:
        query = bq.RangeBound(handle.name, None, bq.Bound(value, inclusive=False))
    elif node.op is RangeOp.LTE:
        query = bq.RangeBound(handle.name, None, bq.Bound(value, inclusive=True))
    elif node.op is RangeOp.GT:
        query = bq.RangeBound(handle.name, bq.Bound(value, inclusive=False), None)
    else:
        query = bq.RangeBound(handle.name, bq.Bound(value, inclusive=True), None)

    if node.negated:
        return bq.exclude(query)
    return query


def _compile(expr: Expr, schema: Schema) -> bq.BackendQuery:
    if isinstance(expr, Term):
        return _compile_term(expr, schema)
    if isinstance(expr, Range):
        return _compile_range(expr, schema)
    if isinstance(expr, And):
        return bq.And((_compile(expr.left, schema), _compile(expr.right, schema)))
    if isinstance(expr, Or):
        return bq.Or((_compile(expr.left, schema), _compile(expr.right, schema)))
    raise TypeError(f"Unsupported expression node: {expr!r}")


def compile_query(expr: Expr, schema: Schema) -> bq.BackendQuery:
    """Translate a parsed query into a backend query.

    Args:
        expr: Root of the parsed query.
        schema: Fields the query may reference.

    Returns:
        The compiled, immutable backend query.

    Raises:
        UnknownFieldError: If the query references a field missing from
            the schema.
        InvalidRangeValueError: If a range value is not a valid date.
    """
    query = _compile(expr, schema)
    log.debug("Compiled query: %s", bq.to_string(query))
    return query
