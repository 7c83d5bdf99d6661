"""Local metrics cache database.

The cache is one SQLite file named by `Settings.db_path`. Repository calls
run in asyncio worker threads, so the engine shares a single connection
across threads.
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vitalscope.core.config import get_settings
from vitalscope.db.schema import Base


def create_cache_engine(db_path: Path) -> Engine:
    """Create an engine for a cache file, creating its directory."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def init_db(engine: Engine) -> None:
    """Create the cache tables if they do not exist."""
    Base.metadata.create_all(engine)


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    """Session factory for the configured cache file, with its schema created."""
    engine = create_cache_engine(get_settings().db_path)
    init_db(engine)
    return sessionmaker(bind=engine)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Open a session that commits on success and rolls back on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
