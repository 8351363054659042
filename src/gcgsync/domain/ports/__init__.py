"""Domain port definitions for adapters."""

from __future__ import annotations

from .exports import MemberExport, RosterExportProvider, TagExport, TagExportProvider
from .loading import LoadResult, Loaded, SourceErrorKind, SourceFailure, unwrap
from .persistence import (
    NotGroupedRepository,
    PersistedStateStore,
    Repository,
    RosterRepository,
)
from .unit_of_work import TrackingRepositories, TrackingUnitOfWork

__all__ = [
    "LoadResult",
    "Loaded",
    "MemberExport",
    "NotGroupedRepository",
    "PersistedStateStore",
    "Repository",
    "RosterExportProvider",
    "RosterRepository",
    "SourceErrorKind",
    "SourceFailure",
    "TagExport",
    "TagExportProvider",
    "TrackingRepositories",
    "TrackingUnitOfWork",
    "unwrap",
]
