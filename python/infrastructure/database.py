"""
SQLAlchemy engine, session factory and declarative base.

Usage:
    from infrastructure.database import get_db
    @router.get("")
    def handler(db: Session = Depends(get_db)): ...
"""

from datetime import datetime, timezone
from typing import Generator

from sqlalchemy import Column, DateTime, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings
from core.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Create engine for the configured URL.

    In-memory SQLite needs a single shared connection so every session
    (and every worker thread used by FastAPI) sees the same tables.
    """
    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = create_db_engine(settings.database_url, echo=settings.database_echo)


@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enforce foreign keys on SQLite connections."""
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


class TimestampMixin:
    """Mixin to add timestamp columns to models."""
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables if they don't exist."""
    # Register table classes on Base.metadata
    import models.tables  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized ({engine.dialect.name})")


def drop_db() -> None:
    """Drop all tables (used by tests)."""
    import models.tables  # noqa: F401

    Base.metadata.drop_all(bind=engine)
