"""Parse AQL query text into an AST."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from functools import reduce
from importlib import resources
from typing import Any

from lark import (
    Lark,
    Token,
    Transformer,
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)

from note_indexer.exceptions import QuerySyntaxError
from note_indexer.search.ast_nodes import And, Expr, Or, Range, RangeOp, Term

log = logging.getLogger(__name__)

_RANGE_OPS: dict[str, RangeOp] = {op.value: op for op in RangeOp}

# Splitters for the terminals matched by the grammar. The lexer has already
# validated the shape, so these only pick the pieces apart.
_RANGE_RE = re.compile(r"(?P<field>[A-Za-z0-9]+):(?P<op>[<>]=?)(?P<value>.+)", re.DOTALL)
_VALUE_ITEM_RE = re.compile(r'"(?P<phrase>[^"]*)"|(?P<word>[^,]+)')

# Used to explain why text at the error position could not be lexed.
_FIELD_PREFIX_RE = re.compile(r"(?P<prefix>[A-Za-z0-9]+:)(?P<op>[<>]=?)?")

# Tokens that must be followed by a term
_TERM_EXPECTED_AFTER = frozenset({"_OR", "_AND", "NEGATE", "LPAR"})


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("note_indexer.search").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(_GRAMMAR_TEXT, parser="lalr")


def _negate(expr: Expr) -> Expr:
    """Set the negation flag on every leaf of a (possibly desugared) term."""
    if isinstance(expr, And):
        return And(_negate(expr.left), _negate(expr.right))
    if isinstance(expr, (Term, Range)):
        return replace(expr, negated=True)
    raise TypeError(f"Cannot negate {expr!r}")


class _AqlTransformer(Transformer):
    """Transform the Lark parse tree into AST data classes."""

    def start(self, items: list[Any]) -> Expr:
        return items[0]

    def or_expr(self, items: list[Any]) -> Expr:
        return reduce(Or, items)

    def and_expr(self, items: list[Any]) -> Expr:
        return reduce(And, items)

    def not_expr(self, items: list[Any]) -> Expr:
        # items is [leaf] or [NEGATE, leaf]
        leaf = items[-1]
        if len(items) > 1:
            return _negate(leaf)
        return leaf

    def group(self, items: list[Any]) -> Expr:
        return items[0]

    def range_term(self, items: list[Any]) -> Range:
        match = _RANGE_RE.fullmatch(str(items[0]))
        assert match is not None
        return Range(
            field=match["field"],
            op=_RANGE_OPS[match["op"]],
            value=match["value"],
        )

    def fielded_term(self, items: list[Any]) -> Expr:
        field_name, _, raw_values = str(items[0]).partition(":")
        terms = []
        for match in _VALUE_ITEM_RE.finditer(raw_values):
            phrase = match["phrase"] is not None
            value = match["phrase"] if phrase else match["word"]
            terms.append(Term(field=field_name, value=value, phrase=phrase))
        # tags:work,urgent means both tags, folded left
        return reduce(And, terms)

    def phrase_term(self, items: list[Any]) -> Term:
        return Term(field=None, value=str(items[0])[1:-1], phrase=True)

    def word_term(self, items: list[Any]) -> Term:
        return Term(field=None, value=str(items[0]))


_transformer = _AqlTransformer()


def _describe_unexpected_text(rest: str) -> str:
    """Explain why no term could be read from ``rest``."""
    match = _FIELD_PREFIX_RE.match(rest)
    if match is not None:
        if match["op"]:
            return f"range operator '{match['op']}' must be followed by a value"
        rest = rest[match.end() :]
        if not rest.startswith('"'):
            return f"expected a value after '{match['prefix']}'"
    if rest.startswith('"'):
        return "unterminated quoted phrase"
    return f"unexpected character {rest[0]!r}"


def _describe_unexpected_token(token: Token, expected: set[str], previous: Token | None) -> str:
    if token.type == "$END":
        if "RPAR" in expected:
            return "missing closing ')'"
        return "unexpected end of query, expected a term"
    if token.type == "LPAR":
        return "a group cannot be negated, negate the terms inside it"
    if token.type == "RPAR":
        if previous is not None and previous.type in _TERM_EXPECTED_AFTER:
            return "expected a term before ')'"
        return "unbalanced ')'"
    return f"unexpected {token.value!r}, expected a term"


def _syntax_error(query_string: str, exc: UnexpectedInput) -> QuerySyntaxError:
    """Translate a Lark error into a QuerySyntaxError with a byte offset."""
    pos = len(query_string)
    if isinstance(exc, UnexpectedCharacters):
        pos = exc.pos_in_stream
        message = _describe_unexpected_text(query_string[pos:])
    elif isinstance(exc, UnexpectedToken):
        if exc.token.type != "$END" and exc.token.start_pos is not None:
            pos = exc.token.start_pos
        previous = exc.token_history[-1] if exc.token_history else None
        message = _describe_unexpected_token(exc.token, set(exc.expected), previous)
    elif isinstance(exc, UnexpectedEOF):
        message = "unexpected end of query, expected a term"
    else:
        message = str(exc)

    offset = len(query_string[:pos].encode("utf-8"))
    return QuerySyntaxError(query_string, offset, message)


def parse_query(query_string: str) -> Expr:
    """Parse an AQL query string into an expression tree.

    Args:
        query_string: The query to parse. The whole string must form a
            single query; trailing text is an error.

    Returns:
        The root Expr of the query.

    Raises:
        QuerySyntaxError: If the query cannot be parsed.
    """
    try:
        tree = _parser.parse(query_string)
    except UnexpectedInput as e:
        raise _syntax_error(query_string, e) from e

    expr = _transformer.transform(tree)
    log.debug("Parsed query %r as %r", query_string, expr)
    return expr
