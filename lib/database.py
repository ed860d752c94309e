# =============================================================================
# lib/database.py - SQLAlchemy Engine and Session Management
# =============================================================================
# This module owns the single database engine for the process and provides:
# - Base: declarative base for ORM models
# - SessionLocal: session factory used per request
# - authenticate(): cheap round trip proving the database is reachable
# - sync_schema(): create any missing tables
# - connect_db(): async startup hook combining both
#
# Usage:
#   from lib.database import SessionLocal, Base
#   with SessionLocal() as session:
#       ...
# =============================================================================

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# In-memory SQLite URLs; each connection would otherwise get its own database
_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}

# Strong references to background tasks so they are not garbage collected
_background_tasks: set[asyncio.Task] = set()


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite needs cross-thread access because FastAPI may touch a session
    from the threadpool, and in-memory databases must share one connection.
    """
    kwargs: dict = {"echo": echo}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


def authenticate(bind: Engine | None = None) -> None:
    """
    Open a connection and run a trivial query.

    Raises whatever the driver raises when the database is unreachable.
    """
    bind = bind or engine
    with bind.connect() as connection:
        connection.execute(text("SELECT 1"))


def sync_schema(bind: Engine | None = None) -> None:
    """Create missing tables. Existing tables are left untouched."""
    # Models must be registered on Base.metadata before create_all
    import core.models.product  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema synchronized")


def _log_sync_result(task: asyncio.Task) -> None:
    """Done-callback for the schema sync task."""
    _background_tasks.discard(task)

    if task.cancelled():
        logger.warning("Schema sync was cancelled")
        return

    exc = task.exception()
    if exc is not None:
        logger.error(f"Schema sync failed: {exc}")


async def connect_db(bind: Engine | None = None) -> asyncio.Task | None:
    """
    Verify the database connection and start the schema sync.

    A failed connection is logged and swallowed: the API keeps serving and
    requests fail later at the persistence layer. On success the schema sync
    runs in the background and is not awaited; the task is returned so
    callers that care (tests) can wait for it.

    Returns:
        The schema sync task, or None if the connection failed
    """
    bind = bind or engine

    try:
        await asyncio.to_thread(authenticate, bind)
    except Exception as e:
        logger.error(f"Error connecting to the database: {e}")
        return None

    logger.debug("Database connection established")

    task = asyncio.create_task(asyncio.to_thread(sync_schema, bind))
    _background_tasks.add(task)
    task.add_done_callback(_log_sync_result)
    return task
