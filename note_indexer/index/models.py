"""SQLAlchemy ORM models for the note index."""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class IndexBase(DeclarativeBase):
    """Base class for index ORM models."""

    pass


class Note(IndexBase):
    """A searchable note.

    Column names match the field names of the note schema so compiled
    queries can address them directly.
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(512), primary_key=True)
    type: Mapped[str | None] = mapped_column(String(64))
    category: Mapped[str | None] = mapped_column(String(128))
    title: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str | None] = mapped_column(String(64))
    body: Mapped[str | None] = mapped_column(Text)
    file_name: Mapped[str | None] = mapped_column(Text)
    # Seconds since the epoch
    date: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (
        Index("ix_notes_date", "date"),
        Index("ix_notes_type", "type"),
    )

    def __repr__(self) -> str:
        return f"<Note(id='{self.id[:30]}', title='{self.title}')>"
