"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from gcgsync.adapters.sqlalchemy.mappings import (
    not_grouped_entry_from_row,
    not_grouped_entry_table,
    not_grouped_values,
    roster_entry_from_row,
    roster_entry_table,
    roster_values,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from gcgsync.domain.model import NotGroupedEntry, RosterEntry


class SqlAlchemyRosterRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, record: RosterEntry) -> None:
        self.session.execute(insert(roster_entry_table).values(**roster_values(record)))

    def list_all(self) -> list[RosterEntry]:
        stmt = select(roster_entry_table).order_by(roster_entry_table.c.id)
        return [roster_entry_from_row(row) for row in self.session.execute(stmt).mappings()]

    def clear(self) -> int:
        result = self.session.execute(delete(roster_entry_table))
        return result.rowcount


class SqlAlchemyNotGroupedRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, record: NotGroupedEntry) -> None:
        self.session.execute(insert(not_grouped_entry_table).values(**not_grouped_values(record)))

    def list_all(self) -> list[NotGroupedEntry]:
        stmt = select(not_grouped_entry_table).order_by(not_grouped_entry_table.c.id)
        return [
            not_grouped_entry_from_row(row) for row in self.session.execute(stmt).mappings()
        ]

    def clear(self) -> int:
        result = self.session.execute(delete(not_grouped_entry_table))
        return result.rowcount
