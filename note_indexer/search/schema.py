"""Index schema: the fields a query may reference."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from note_indexer.exceptions import UnknownFieldError


@dataclass(frozen=True)
class FieldHandle:
    """A resolved schema field."""

    name: str


# Fields of an indexed note. ``date`` holds seconds since the epoch.
NOTE_FIELDS: tuple[FieldHandle, ...] = (
    FieldHandle("id"),
    FieldHandle("type"),
    FieldHandle("category"),
    FieldHandle("title"),
    FieldHandle("tags"),
    FieldHandle("status"),
    FieldHandle("body"),
    FieldHandle("file_name"),
    FieldHandle("date"),
)

DEFAULT_FIELDS: tuple[str, ...] = ("title", "body")


class Schema:
    """Named fields plus the ordered default field set.

    Args:
        fields: Every field queries may reference.
        default_fields: Names of the fields searched by terms without a
            field prefix, in order.

    Raises:
        UnknownFieldError: If a default field is not among ``fields``.
        ValueError: If ``default_fields`` is empty.
    """

    def __init__(self, fields: Iterable[FieldHandle], default_fields: Sequence[str]) -> None:
        self._fields: dict[str, FieldHandle] = {f.name: f for f in fields}
        if not default_fields:
            raise ValueError("A schema needs at least one default field")
        defaults: list[FieldHandle] = []
        for name in default_fields:
            handle = self._fields.get(name)
            if handle is None:
                raise UnknownFieldError(name)
            defaults.append(handle)
        self._default_fields = tuple(defaults)

    def resolve(self, name: str) -> FieldHandle | None:
        """Look up a field by name; None if the schema has no such field."""
        return self._fields.get(name)

    @property
    def default_fields(self) -> tuple[FieldHandle, ...]:
        return self._default_fields

    @property
    def field_names(self) -> list[str]:
        return list(self._fields)

    def __repr__(self) -> str:
        defaults = ",".join(f.name for f in self._default_fields)
        return f"<Schema(fields={len(self._fields)}, default='{defaults}')>"


def note_schema(default_fields: Sequence[str] = DEFAULT_FIELDS) -> Schema:
    """Build the schema of the note index."""
    return Schema(NOTE_FIELDS, default_fields)
