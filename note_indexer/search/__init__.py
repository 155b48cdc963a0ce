"""AQL query parsing, compilation and execution."""

from note_indexer.search.ast_nodes import And, Expr, Or, Range, RangeOp, Term, to_aql
from note_indexer.search.compiler import compile_query, date_to_timestamp
from note_indexer.search.parser import parse_query
from note_indexer.search.query import build_clause, execute_search, search_notes
from note_indexer.search.schema import FieldHandle, Schema, note_schema

__all__ = [
    "And",
    "Expr",
    "FieldHandle",
    "Or",
    "Range",
    "RangeOp",
    "Schema",
    "Term",
    "build_clause",
    "compile_query",
    "date_to_timestamp",
    "execute_search",
    "note_schema",
    "parse_query",
    "search_notes",
    "to_aql",
]
