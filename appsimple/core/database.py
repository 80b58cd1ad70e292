"""Database engine and session management (SQLite or PostgreSQL)."""

from collections.abc import Generator
from functools import lru_cache
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from appsimple.core.config import get_settings


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Build an engine for the given URL, with the SQLite specifics FastAPI needs."""
    kwargs: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool; one connection may cross threads.
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


@lru_cache
def get_engine() -> Engine:
    """Return the process-wide engine built from settings."""
    settings = get_settings()
    return create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Return the process-wide session factory bound to get_engine()."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
