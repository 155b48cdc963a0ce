"""Engine-agnostic index queries produced by the compiler.

The variants form a closed set; adapters lower them to a concrete search
library (see ``note_indexer.search.query`` for the SQLAlchemy one).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bound:
    """One end of a range; ``None`` in its place means unbounded."""

    value: int
    inclusive: bool


@dataclass(frozen=True)
class Term:
    """Match ``value`` in a single field."""

    field: str
    value: str
    phrase: bool = False


@dataclass(frozen=True)
class RangeBound:
    """Numeric range on a single field."""

    field: str
    lower: Bound | None = None
    upper: Bound | None = None


@dataclass(frozen=True)
class And:
    """Every clause must match."""

    clauses: tuple[BackendQuery, ...]


@dataclass(frozen=True)
class Or:
    """At least one clause should match."""

    clauses: tuple[BackendQuery, ...]


@dataclass(frozen=True)
class Not:
    """The operand must not match."""

    operand: BackendQuery


@dataclass(frozen=True)
class MatchAll:
    """Matches every document."""


BackendQuery = Term | RangeBound | And | Or | Not | MatchAll


def exclude(query: BackendQuery) -> And:
    """Everything except what ``query`` matches."""
    return And((MatchAll(), Not(query)))


def _format_bound(bound: Bound | None) -> str:
    if bound is None:
        return "*"
    return str(bound.value)


def _must(clause: BackendQuery) -> str:
    # A negated clause inside a conjunction reads as "-x", not "+-x".
    if isinstance(clause, Not):
        return to_string(clause)
    return f"+{to_string(clause)}"


def to_string(query: BackendQuery) -> str:
    """Render a query in Lucene-like notation for logs and ``explain``."""
    if isinstance(query, Term):
        value = f'"{query.value}"' if query.phrase else query.value
        return f"{query.field}:{value}"
    if isinstance(query, RangeBound):
        opening = "{" if query.lower is not None and not query.lower.inclusive else "["
        closing = "}" if query.upper is not None and not query.upper.inclusive else "]"
        return (
            f"{query.field}:{opening}{_format_bound(query.lower)}"
            f" TO {_format_bound(query.upper)}{closing}"
        )
    if isinstance(query, And):
        return "(" + " ".join(_must(c) for c in query.clauses) + ")"
    if isinstance(query, Or):
        return "(" + " ".join(to_string(c) for c in query.clauses) + ")"
    if isinstance(query, Not):
        return f"-{to_string(query.operand)}"
    if isinstance(query, MatchAll):
        return "*:*"
    raise TypeError(f"Unsupported backend query: {query!r}")
