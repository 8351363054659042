"""SQLAlchemy adapter package for gcgsync."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, not_grouped_entry_table, roster_entry_table
from .repositories import SqlAlchemyNotGroupedRepository, SqlAlchemyRosterRepository
from .store import SqlAlchemyPersistedStateStore
from .unit_of_work import (
    SqlAlchemyTrackingUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyNotGroupedRepository",
    "SqlAlchemyPersistedStateStore",
    "SqlAlchemyRosterRepository",
    "SqlAlchemyTrackingUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "not_grouped_entry_table",
    "roster_entry_table",
    "shutdown",
    "startup",
]
