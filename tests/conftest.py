"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from note_indexer.index.models import IndexBase, Note
from note_indexer.index.session import get_index_session
from note_indexer.search.compiler import date_to_timestamp

if TYPE_CHECKING:
    from collections.abc import Generator


def _sample_notes() -> list[Note]:
    """Four notes covering dated, undated and tag-less rows."""
    return [
        Note(
            id="notes/standup.md",
            type="meeting",
            category="work",
            title="Daily standup",
            tags="work,meeting",
            status="done",
            body="Discussed the release plan",
            file_name="standup.md",
            date=date_to_timestamp("2025-01-10"),
        ),
        Note(
            id="notes/roadmap.md",
            type="note",
            category="work",
            title="Product roadmap",
            tags="work,urgent",
            status="open",
            body="Release plan for Q3",
            file_name="roadmap.md",
            date=date_to_timestamp("2024-06-01"),
        ),
        Note(
            id="notes/journal.md",
            type="journal",
            category="personal",
            title="Journal",
            tags="personal",
            status=None,
            body="Went hiking",
            file_name="journal.md",
            date=date_to_timestamp("2023-12-31"),
        ),
        Note(
            id="notes/undated.md",
            type="note",
            category=None,
            title="Loose thoughts",
            tags=None,
            status=None,
            body="100% sure about the_plan",
            file_name="undated.md",
            date=None,
        ),
    ]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def notes_session() -> Generator[Session, None, None]:
    """In-memory index session holding the sample notes."""
    engine = create_engine("sqlite:///:memory:")
    IndexBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    session.add_all(_sample_notes())
    session.commit()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def index_db(temp_dir: Path) -> Path:
    """Index database file holding the sample notes."""
    db_path = temp_dir / "notes.db"
    with get_index_session(db_path) as session:
        session.add_all(_sample_notes())
    return db_path


@pytest.fixture
def sample_config(temp_dir: Path, index_db: Path) -> Path:
    """Create a sample config file pointing at the sample index."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[paths]
database = "{index_db}"

[search]
default_fields = ["title", "body"]
limit = 10

[display]
colored_output = false
""")
    return config_path
