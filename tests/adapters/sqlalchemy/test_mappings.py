from __future__ import annotations

from gcgsync.adapters.sqlalchemy.mappings import (
    not_grouped_values,
    roster_entry_table,
    roster_values,
)
from gcgsync.domain.model import FamilyRole
from tests.helpers.roster import make_not_grouped_entry, make_roster_entry


def test_roster_values_keep_only_integer_sheet_rows() -> None:
    assert roster_values(make_roster_entry("1", row_ref=7))["sheet_row"] == 7
    assert roster_values(make_roster_entry("1", row_ref="A7"))["sheet_row"] is None


def test_roster_values_store_raw_group_label() -> None:
    values = roster_values(make_roster_entry(None, " Gene Cone & Scott Stringer "))

    assert values["group_label"] == " Gene Cone & Scott Stringer "
    assert values["person_id"] is None


def test_not_grouped_values() -> None:
    entry = make_not_grouped_entry("10", family_role=FamilyRole.SPOUSE)

    assert not_grouped_values(entry)["family_role"] is FamilyRole.SPOUSE


def test_person_id_is_indexed() -> None:
    assert any(
        index.name == "ix_roster_entry_person_id" for index in roster_entry_table.indexes
    )
