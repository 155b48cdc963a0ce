"""SQLite note index queried by compiled AQL."""

from note_indexer.index.models import IndexBase, Note
from note_indexer.index.session import get_index_engine, get_index_session

__all__ = [
    "IndexBase",
    "Note",
    "get_index_engine",
    "get_index_session",
]
