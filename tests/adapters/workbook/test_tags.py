from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gcgsync.adapters.workbook import (
    WorkbookTagExport,
    extract_leaders,
    is_group_tab,
    read_tag_export,
)
from gcgsync.domain.ports import Loaded, SourceErrorKind, SourceFailure
from tests.helpers.workbooks import TAG_HEADER, write_workbook

if TYPE_CHECKING:
    from pathlib import Path

    from gcgsync.config.exports import ExportConfig


@pytest.mark.parametrize(
    "name",
    [
        "Gcg Aaron White",
        "Gcg Gene Cone  Scott Stringer",
        "Gcg Mary Jo Lee",
    ],
)
def test_group_tabs(name: str) -> None:
    assert is_group_tab(name)


@pytest.mark.parametrize(
    "name",
    [
        "Eldership Roll",
        "GCG Aaron White",
        "Gcg Leaders",
        "Gcg Leader Training",
        "Gcg Survey 2024",
        "Gcg Aaron",
        "Gcg aaron white",
        "Gcg Aaron W",
        "Gcg Ann Lee  Bo Kim  Cy Ray",
        "Gcg Knott Family",
    ],
)
def test_non_group_tabs(name: str) -> None:
    assert not is_group_tab(name)


def test_extract_leaders() -> None:
    assert extract_leaders("Gcg Gene Cone  Scott Stringer") == ("Gene Cone", "Scott Stringer")
    assert extract_leaders("Gcg Aaron White") == ("Aaron White", None)


def test_reads_assignments_and_rolls(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "tags.xlsx",
        {
            "Gcg Gene Cone  Scott Stringer": [
                TAG_HEADER,
                (100, "Ann", "Lee"),
                ("101", None, None),
                (None, "No", "Id"),
            ],
            "Gcg Aaron White": [TAG_HEADER, ("200", "Bo", "Kim")],
            "Eldership Roll": [TAG_HEADER, ("300", "Cy", "Ray")],
            "Gcg Leaders": [TAG_HEADER, ("400", "Di", "Ray")],
            "Notes": [("just", "text")],
        },
    )

    result = read_tag_export(path)

    assert isinstance(result, Loaded)
    export = result.value
    assert set(export.assignments) == {"100", "101", "200"}
    ann = export.assignments["100"]
    assert ann.group_key == "Gene Cone"
    assert ann.group_display_name == "Gene Cone & Scott Stringer"
    assert ann.first_name == "Ann"
    assert ann.source_tab == "Gcg Gene Cone  Scott Stringer"
    assert export.assignments["200"].group_display_name == "Aaron White"
    assert export.rolls == {
        "Eldership Roll": frozenset({"300"}),
        "Gcg Leaders": frozenset({"400"}),
    }


def test_first_group_wins_for_duplicate_tags(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "tags.xlsx",
        {
            "Gcg Gene Cone": [TAG_HEADER, ("1", "Ann", "Lee")],
            "Gcg Aaron White": [TAG_HEADER, ("1", "Ann", "Lee")],
        },
    )

    result = read_tag_export(path)

    assert isinstance(result, Loaded)
    assert result.value.assignments["1"].group_key == "Gene Cone"
    assert result.value.duplicate_assignments == ("1",)


def test_empty_group_tab_has_no_members(tmp_path: Path) -> None:
    path = write_workbook(tmp_path / "tags.xlsx", {"Gcg Gene Cone": []})

    result = read_tag_export(path)

    assert isinstance(result, Loaded)
    assert result.value.assignments == {}


def test_group_tab_without_person_id_column_fails(tmp_path: Path) -> None:
    path = write_workbook(
        tmp_path / "tags.xlsx", {"Gcg Gene Cone": [("First Name", "Last Name"), ("Ann", "Lee")]}
    )

    result = read_tag_export(path)

    assert isinstance(result, SourceFailure)
    assert result.kind is SourceErrorKind.MISSING_COLUMN
    assert result.column == "Person ID"
    assert "Gcg Gene Cone" in result.source


def test_provider_uses_policy_delimiter(export_dir: Path, export_config: ExportConfig) -> None:
    write_workbook(
        export_dir / "immanuelky-tags.xlsx",
        {"Gcg Gene Cone  Scott Stringer": [TAG_HEADER, ("1", "Ann", "Lee")]},
    )

    result = WorkbookTagExport(export_config, delimiter="+").load()

    assert isinstance(result, Loaded)
    assert result.value.assignments["1"].group_display_name == "Gene Cone + Scott Stringer"
