"""Pydantic models describing rows of the exported and tracking workbooks."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def _blank_to_none(value: object) -> object:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class WorkbookRowModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    _normalize_cells = field_validator("*", mode="before")(_blank_to_none)


class DirectoryRow(WorkbookRowModel):
    person_id: str
    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    family_id: str | None = None
    family_role: str | None = None


class TagRow(WorkbookRowModel):
    person_id: str
    first_name: str | None = None
    last_name: str | None = None


class RosterRow(WorkbookRowModel):
    person_id: str | None = None
    first_name: str
    last_name: str
    group: str | None = None
    note: str | None = None


class NotGroupedRow(WorkbookRowModel):
    person_id: str
    name: str | None = None
    family_id: str | None = None
    family_role: str | None = None
