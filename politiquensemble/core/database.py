"""
Database Connection and Session Management.

Sets up the SQLAlchemy engine, the session factory and the declarative base
shared by every model.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

Base = declarative_base()


def create_db_engine(url: str) -> Engine:
    """
    Build an engine for the given URL.

    In-memory SQLite (used by the test-suite) needs a single shared
    connection, otherwise every pooled connection sees an empty database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency generator for database sessions.

    Yields:
        Session: a SQLAlchemy session closed at the end of the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Create missing tables.

    Production deployments run the migration CLI instead; this keeps fresh
    development databases usable.
    """
    from .. import models  # noqa: F401  registers every table on Base.metadata

    Base.metadata.create_all(bind=engine)
