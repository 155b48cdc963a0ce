"""Index database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from note_indexer.index.models import IndexBase

log = logging.getLogger(__name__)


def get_index_engine(db_path: Path) -> Engine:
    """Create SQLAlchemy engine for the index database.

    Args:
        db_path: Path to the SQLite index database.

    Returns:
        SQLAlchemy engine for the index database.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )
    return engine


@contextmanager
def get_index_session(db_path: Path) -> Generator[Session, None, None]:
    """Create a session for the index database.

    Auto-creates tables on first use. The session is committed when the
    block exits normally and rolled back on error.

    Args:
        db_path: Path to the SQLite index database.

    Yields:
        SQLAlchemy Session for the index database.
    """
    engine = get_index_engine(db_path)

    # Create missing tables
    IndexBase.metadata.create_all(engine)

    # Enable WAL mode for better concurrent access
    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    log.debug("Opened index database %s", db_path)
    session_factory = sessionmaker(bind=engine)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
