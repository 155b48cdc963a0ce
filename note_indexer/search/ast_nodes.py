"""AST data classes for parsed AQL queries."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class RangeOp(enum.Enum):
    """Comparison operator of a range leaf."""

    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="


@dataclass(frozen=True)
class Term:
    """A bare-word, quoted phrase or ``field:value`` match.

    ``field`` is None for terms without a field prefix; those search the
    schema's default fields.
    """

    field: str | None
    value: str
    phrase: bool = False
    negated: bool = False


@dataclass(frozen=True)
class Range:
    """A comparison like ``date:>=2024-01-01``.

    The value is kept as the literal text; the compiler converts it.
    """

    field: str
    op: RangeOp
    value: str
    negated: bool = False


@dataclass(frozen=True)
class And:
    """Both sides must match."""

    left: Expr
    right: Expr


@dataclass(frozen=True)
class Or:
    """Either side may match."""

    left: Expr
    right: Expr


Expr = Term | Range | And | Or


def to_aql(expr: Expr) -> str:
    """Render an expression as canonical AQL text.

    Compound nodes are always parenthesized and joined with an explicit
    ``AND``/``OR`` so the grouping of the tree is visible.
    """
    if isinstance(expr, Term):
        value = f'"{expr.value}"' if expr.phrase else expr.value
        text = f"{expr.field}:{value}" if expr.field is not None else value
        return f"-{text}" if expr.negated else text
    if isinstance(expr, Range):
        text = f"{expr.field}:{expr.op.value}{expr.value}"
        return f"-{text}" if expr.negated else text
    if isinstance(expr, And):
        return f"({to_aql(expr.left)} AND {to_aql(expr.right)})"
    if isinstance(expr, Or):
        return f"({to_aql(expr.left)} OR {to_aql(expr.right)})"
    raise TypeError(f"Unsupported expression node: {expr!r}")
