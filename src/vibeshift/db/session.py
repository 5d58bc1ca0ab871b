"""Database session configuration for the identity store."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from vibeshift.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import vibeshift.models  # noqa: E402,F401


def engine_options(database_url: str) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments suited to the URL's backend."""
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.sql_debug}
    if make_url(database_url).get_backend_name() == "sqlite":
        # Requests run on FastAPI's worker threads; writers wait on the file lock.
        options["connect_args"] = {"check_same_thread": False, "timeout": 30}
    return options


engine = create_engine(
    settings.sqlalchemy_database_url,
    **engine_options(settings.sqlalchemy_database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request.

    Closing the session rolls back anything left uncommitted, so a request
    abandoned before commit never leaves a partial row behind.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
