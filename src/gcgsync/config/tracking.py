"""Layout of the tracking workbook (roster and not-grouped sheets)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RosterColumns:
    person_id: str = "Person ID"
    first_name: str = "First"
    last_name: str = "Last"
    group: str = "Group"
    note: str = "Action Steps"


@dataclass(frozen=True, slots=True)
class NotGroupedColumns:
    person_id: str = "Person ID"
    name: str = "Name"
    family_id: str = "Family ID"
    family_role: str = "Family Role"


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingSheetConfig:
    roster_sheet: str = "GCG Members"
    not_grouped_sheet: str = "Not in GCG"
    roster_columns: RosterColumns = field(default_factory=RosterColumns)
    not_grouped_columns: NotGroupedColumns = field(default_factory=NotGroupedColumns)
    # the header row sits somewhere in the first few rows, under a title block
    header_search_rows: int = 5


def get_tracking_sheet_config() -> TrackingSheetConfig:
    return TrackingSheetConfig(
        roster_sheet=os.getenv("GCGSYNC_ROSTER_SHEET") or "GCG Members",
        not_grouped_sheet=os.getenv("GCGSYNC_NOT_GROUPED_SHEET") or "Not in GCG",
    )
