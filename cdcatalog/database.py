"""SQLAlchemy engine, declarative base and per-request sessions."""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from cdcatalog.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base of the catalog tables."""


# Created on startup, shared by every request
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ANN401
    # Without this SQLite ignores ON DELETE CASCADE on track.cd_id
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine tuned for the given backend."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_size=10, max_overflow=20, pool_pre_ping=True)

    engine = create_engine(database_url, connect_args={"check_same_thread": False})
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def initialize_database(settings: Settings) -> sessionmaker[Session]:
    """Create the engine and session factory unless that already happened."""
    global _engine, _session_factory  # noqa: PLW0603

    if _session_factory is None:
        _engine = build_engine(settings.DATABASE_URL)
        _session_factory = sessionmaker(bind=_engine, autoflush=False)
    return _session_factory


def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    return initialize_database(settings)


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """One session per request, closed when the response is sent."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
