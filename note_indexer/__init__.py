"""note-indexer: search a personal note corpus with AQL queries."""

__version__ = "0.4.0"
