# =============================================================================
# lib/ - Shared Infrastructure
# =============================================================================
# This package contains infrastructure shared by the app and core layers:
# - database.py: SQLAlchemy engine, session factory and startup connection
# =============================================================================

from .database import (
    Base,
    SessionLocal,
    authenticate,
    connect_db,
    engine,
    sync_schema,
)

__all__ = [
    "Base",
    "SessionLocal",
    "authenticate",
    "connect_db",
    "engine",
    "sync_schema",
]
