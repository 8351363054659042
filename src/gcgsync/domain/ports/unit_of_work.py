"""Unit-of-work boundary around the persisted tracking roster."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from gcgsync.domain.ports.persistence import NotGroupedRepository, RosterRepository


@dataclass(slots=True)
class TrackingRepositories:
    roster: RosterRepository
    not_grouped: NotGroupedRepository


@runtime_checkable
class TrackingUnitOfWork(Protocol):
    """One transaction over the roster and not-grouped repositories."""

    @property
    def repositories(self) -> TrackingRepositories: ...

    def __enter__(self) -> TrackingUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
