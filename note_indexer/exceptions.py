"""Exception hierarchy for note-indexer."""

from pathlib import Path


class NoteIndexerError(Exception):
    """Base exception for all note-indexer errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all note-indexer errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(NoteIndexerError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Query Errors
class QueryError(NoteIndexerError):
    """A query could not be turned into an index query."""

    pass


class QuerySyntaxError(QueryError):
    """Query text does not follow the AQL grammar.

    ``offset`` is the byte offset into the UTF-8 encoded query where
    parsing failed.
    """

    def __init__(self, query: str, offset: int, message: str) -> None:
        self.query = query
        self.offset = offset
        self.message = message
        super().__init__(f"Invalid query at offset {offset}: {message}")


class SchemaError(QueryError):
    """Query does not fit the index schema."""

    pass


class UnknownFieldError(SchemaError):
    """Query references a field the schema does not declare."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown field: {name}")


class InvalidRangeValueError(SchemaError):
    """Range value cannot be converted for comparison."""

    def __init__(self, field: str, value: str, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {field}: '{value}' ({reason})")
