"""SQLAlchemy Core tables holding an imported copy of the tracking roster.

Domain records are frozen dataclasses, so the tables are not mapped imperatively;
repositories translate rows to records explicitly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import Column, Enum, Index, Integer, MetaData, String, Table

from gcgsync.domain.model import FamilyRole, NotGroupedEntry, RosterEntry

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine, RowMapping

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Core tables -----------------------------------------------------------------

roster_entry_table = Table(
    "roster_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("person_id", String, nullable=True),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("group_label", String, nullable=False, default=""),
    Column("note", String, nullable=False, default=""),
    # row in the tracking sheet this entry was imported from
    Column("sheet_row", Integer, nullable=True),
    Index("ix_roster_entry_person_id", "person_id"),
)

not_grouped_entry_table = Table(
    "not_grouped_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("person_id", String, nullable=False, unique=True),
    Column("display_name", String, nullable=False, default=""),
    Column("family_id", String, nullable=True),
    Column("family_role", Enum(FamilyRole, native_enum=False), nullable=True),
    Column("sheet_row", Integer, nullable=True),
)


def _sheet_row(row_ref: object | None) -> int | None:
    return row_ref if isinstance(row_ref, int) else None


def roster_values(entry: RosterEntry) -> dict[str, Any]:
    return {
        "person_id": entry.person_id,
        "first_name": entry.first_name,
        "last_name": entry.last_name,
        "group_label": entry.group_label_raw,
        "note": entry.note,
        "sheet_row": _sheet_row(entry.row_ref),
    }


def roster_entry_from_row(row: RowMapping) -> RosterEntry:
    return RosterEntry(
        person_id=row["person_id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        group_label_raw=row["group_label"],
        note=row["note"],
        row_ref=row["sheet_row"] if row["sheet_row"] is not None else row["id"],
    )


def not_grouped_values(entry: NotGroupedEntry) -> dict[str, Any]:
    return {
        "person_id": entry.person_id,
        "display_name": entry.display_name,
        "family_id": entry.family_id,
        "family_role": entry.family_role,
        "sheet_row": _sheet_row(entry.row_ref),
    }


def not_grouped_entry_from_row(row: RowMapping) -> NotGroupedEntry:
    return NotGroupedEntry(
        person_id=row["person_id"],
        display_name=row["display_name"],
        family_id=row["family_id"],
        family_role=row["family_role"],
        row_ref=row["sheet_row"] if row["sheet_row"] is not None else row["id"],
    )


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the roster metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
