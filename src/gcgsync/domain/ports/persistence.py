"""Ports for the persisted tracking roster."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gcgsync.domain.model import NotGroupedEntry, RosterEntry


@runtime_checkable
class Repository[TRecord](Protocol):
    """Minimal repository contract for a table of roster records."""

    def add(self, record: TRecord) -> None: ...

    def list_all(self) -> list[TRecord]: ...

    def clear(self) -> int: ...


@runtime_checkable
class RosterRepository(Repository["RosterEntry"], Protocol):
    """Repository contract for tracking roster rows."""


@runtime_checkable
class NotGroupedRepository(Repository["NotGroupedEntry"], Protocol):
    """Repository contract for the not-grouped list."""


@runtime_checkable
class PersistedStateStore(Protocol):
    """Read side of whatever holds the tracking roster (workbook, database)."""

    def load_roster(self) -> tuple[RosterEntry, ...]: ...

    def load_not_grouped(self) -> tuple[NotGroupedEntry, ...]: ...
