"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from notification_service.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def build_engine(database_url: str, *, timeout: float) -> Engine:
    """Create an engine whose connections give up after ``timeout`` seconds."""

    if database_url.startswith("sqlite"):
        # Fan-out writes share the engine from several worker threads.
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": timeout},
            pool_pre_ping=True,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(database_url, pool_pre_ping=True, pool_timeout=timeout)


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


settings = get_settings()
engine = build_engine(settings.database_url, timeout=settings.store_timeout_seconds)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def configure_engine(database_url: str, *, timeout: float | None = None) -> Engine:
    """Point the module level engine and session factory at ``database_url``."""

    global engine

    previous = engine
    engine = build_engine(
        database_url,
        timeout=timeout if timeout is not None else get_settings().store_timeout_seconds,
    )
    SessionLocal.configure(bind=engine)
    previous.dispose()
    logger.info("Database engine configured for %s", engine.url.render_as_string())
    return engine


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from notification_service.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Return the factory used to open one session per concurrent unit of work."""

    return SessionLocal
