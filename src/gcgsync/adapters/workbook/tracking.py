"""Tracking workbook store: the roster sheet and the not-grouped sheet."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from gcgsync.config.tracking import TrackingSheetConfig
from gcgsync.domain.errors import MissingSourceError
from gcgsync.domain.model import FamilyRole, NotGroupedEntry, RosterEntry

from .schema import NotGroupedRow, RosterRow
from .sheets import (
    WORKBOOK_READ_ERRORS,
    find_header_row,
    is_blank_row,
    locate_columns,
    open_workbook,
    row_values,
)

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

type SheetRows = list[tuple[object, ...]]


@dataclass(slots=True)
class WorkbookPersistedStateStore:
    """Reads roster state from a tracking workbook.

    ``row_ref`` on every record is the 1-based sheet row, so changes can be written
    back to the same row.
    """

    path: Path
    config: TrackingSheetConfig = field(default_factory=TrackingSheetConfig)

    def _sheet_rows(self, sheet_name: str) -> SheetRows | None:
        try:
            with open_workbook(self.path) as workbook:
                if sheet_name not in workbook.sheetnames:
                    log.warning("%s has no sheet %r", self.path.name, sheet_name)
                    return None
                sheet = workbook[sheet_name]
                return list(sheet.iter_rows(min_row=1, values_only=True))
        except WORKBOOK_READ_ERRORS as exc:
            raise MissingSourceError(self.path.name, detail=str(exc)) from exc

    def load_roster(self) -> tuple[RosterEntry, ...]:
        rows = self._sheet_rows(self.config.roster_sheet)
        if rows is None:
            return ()
        depth = self.config.header_search_rows
        header_index = find_header_row(rows[:depth])
        if header_index is None:
            log.warning(
                "No header row with first and last name columns in the first %d rows of %r",
                depth,
                self.config.roster_sheet,
            )
            return ()

        located, missing = locate_columns(rows[header_index], asdict(self.config.roster_columns))
        if missing:
            log.debug("Roster sheet has no columns %s", ", ".join(missing))

        entries: list[RosterEntry] = []
        for offset, row in enumerate(rows[header_index + 1 :], start=header_index + 2):
            if is_blank_row(row):
                continue
            try:
                parsed = RosterRow.model_validate(row_values(row, located))
            except ValidationError:
                log.debug("Roster row %d has no first or last name; skipped", offset)
                continue
            entries.append(
                RosterEntry(
                    person_id=parsed.person_id,
                    first_name=parsed.first_name,
                    last_name=parsed.last_name,
                    group_label_raw=parsed.group or "",
                    note=parsed.note or "",
                    row_ref=offset,
                )
            )
        log.info("Read %d roster rows from %s", len(entries), self.path.name)
        return tuple(entries)

    def load_not_grouped(self) -> tuple[NotGroupedEntry, ...]:
        rows = self._sheet_rows(self.config.not_grouped_sheet)
        if rows is None:
            return ()
        columns = self.config.not_grouped_columns
        depth = self.config.header_search_rows
        header_index = find_header_row(rows[:depth], markers=(columns.person_id.casefold(),))
        if header_index is None:
            log.warning(
                "No %r header in the first %d rows of %r",
                columns.person_id,
                depth,
                self.config.not_grouped_sheet,
            )
            return ()

        located, _missing = locate_columns(rows[header_index], asdict(columns))
        entries: list[NotGroupedEntry] = []
        for offset, row in enumerate(rows[header_index + 1 :], start=header_index + 2):
            if is_blank_row(row):
                continue
            try:
                parsed = NotGroupedRow.model_validate(row_values(row, located))
            except ValidationError:
                continue
            entries.append(
                NotGroupedEntry(
                    person_id=parsed.person_id,
                    display_name=parsed.name or "",
                    family_id=parsed.family_id,
                    family_role=FamilyRole.from_label(parsed.family_role),
                    row_ref=offset,
                )
            )
        log.info("Read %d not-grouped rows from %s", len(entries), self.path.name)
        return tuple(entries)
