from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from gcgsync.adapters.workbook import WorkbookMemberDirectory, read_member_directory
from gcgsync.domain.model import FamilyRole, MembershipStatus
from gcgsync.domain.ports import Loaded, SourceErrorKind, SourceFailure
from tests.helpers.workbooks import DIRECTORY_HEADER, write_workbook

if TYPE_CHECKING:
    from pathlib import Path

    from gcgsync.config.exports import ExportConfig


def test_reads_members_from_first_sheet(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "people-active.xlsx",
        {
            "Export": [
                DIRECTORY_HEADER,
                (101, "Amy", "Ng", None, 7, "Head of Household"),
                ("102", " Zoe ", "Ng", "Z", "7", "child"),
                (None, "No", "Id", None, None, None),
                (None, None, None, None, None, None),
            ],
            "Other": [("ignored",)],
        },
    )

    result = read_member_directory(path)

    assert isinstance(result, Loaded)
    export = result.value
    assert [member.person_id for member in export.members] == ["101", "102"]
    amy, zoe = export.members
    assert amy.family_id == "7"
    assert amy.family_role is FamilyRole.HEAD_OF_HOUSEHOLD
    assert zoe.first_name == "Zoe"
    assert zoe.nickname == "Z"
    assert zoe.family_role is FamilyRole.CHILD
    assert export.skipped_rows == 1
    assert export.source == "people-active.xlsx"


def test_status_is_applied(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "inactive.xlsx", {"Export": [DIRECTORY_HEADER, ("1", "A", "B")]}
    )

    result = read_member_directory(path, status=MembershipStatus.INACTIVE)

    assert isinstance(result, Loaded)
    assert result.value.members[0].status is MembershipStatus.INACTIVE


def test_unknown_role_becomes_unassigned(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = write_workbook(
        tmp_path / "active.xlsx",
        {"Export": [DIRECTORY_HEADER, ("1", "A", "B", None, "F", "Grandparent")]},
    )

    with caplog.at_level(logging.WARNING):
        result = read_member_directory(path)

    assert isinstance(result, Loaded)
    assert result.value.members[0].family_role is FamilyRole.UNASSIGNED
    assert "Grandparent" in caplog.text


def test_optional_columns_may_be_absent(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "active.xlsx",
        {"Export": [("Breeze ID", "First Name", "Last Name"), ("1", "A", "B")]},
    )

    result = read_member_directory(path)

    assert isinstance(result, Loaded)
    member = result.value.members[0]
    assert member.family_id is None
    assert member.family_role is None


def test_missing_identifier_column_is_reported(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "active.xlsx", {"Export": [("First Name", "Last Name"), ("A", "B")]}
    )

    result = read_member_directory(path)

    assert isinstance(result, SourceFailure)
    assert result.kind is SourceErrorKind.MISSING_COLUMN
    assert result.column == "Breeze ID"


def test_unreadable_file_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_text("not a workbook")

    result = read_member_directory(path)

    assert isinstance(result, SourceFailure)
    assert result.kind is SourceErrorKind.UNREADABLE


def test_provider_locates_export_by_status(
    export_dir: Path, export_config: ExportConfig
) -> None:
    write_workbook(
        export_dir / "immanuelky-people-inactive.xlsx",
        {"Export": [DIRECTORY_HEADER, ("9", "Ed", "Old")]},
    )

    inactive = WorkbookMemberDirectory(export_config, MembershipStatus.INACTIVE).load()
    active = WorkbookMemberDirectory(export_config).load()

    assert isinstance(inactive, Loaded)
    assert inactive.value.members[0].person_id == "9"
    assert isinstance(active, SourceFailure)
    assert active.kind is SourceErrorKind.MISSING_SOURCE
