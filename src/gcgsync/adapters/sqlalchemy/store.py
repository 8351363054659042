"""Persisted-state store over the SQLAlchemy unit of work."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gcgsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyTrackingUnitOfWork

if TYPE_CHECKING:
    from gcgsync.domain.model import NotGroupedEntry, PersistedSnapshot, RosterEntry
    from gcgsync.domain.ports.unit_of_work import TrackingUnitOfWork

type TrackingUnitOfWorkFactory = Callable[[], TrackingUnitOfWork]

log = getLogger(__name__)


@dataclass(slots=True)
class SqlAlchemyPersistedStateStore:
    unit_of_work_factory: TrackingUnitOfWorkFactory = SqlAlchemyTrackingUnitOfWork

    def load_roster(self) -> tuple[RosterEntry, ...]:
        with self.unit_of_work_factory() as uow:
            return tuple(uow.repositories.roster.list_all())

    def load_not_grouped(self) -> tuple[NotGroupedEntry, ...]:
        with self.unit_of_work_factory() as uow:
            return tuple(uow.repositories.not_grouped.list_all())

    def replace_all(self, snapshot: PersistedSnapshot) -> tuple[int, int]:
        """Replace stored state with ``snapshot`` in one transaction.

        Returns the number of roster and not-grouped rows written. Repeated
        not-grouped person ids keep their first row.
        """

        seen: set[str] = set()
        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            removed = repositories.roster.clear() + repositories.not_grouped.clear()
            for entry in snapshot.roster:
                repositories.roster.add(entry)
            for entry in snapshot.not_grouped:
                if entry.person_id in seen:
                    log.warning("Skipping repeated not-grouped row for %s", entry.person_id)
                    continue
                seen.add(entry.person_id)
                repositories.not_grouped.add(entry)
            uow.commit()

        log.info(
            "Replaced %d stored rows with %d roster and %d not-grouped rows",
            removed,
            len(snapshot.roster),
            len(seen),
        )
        return len(snapshot.roster), len(seen)
