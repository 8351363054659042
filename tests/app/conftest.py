from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.helpers.workbooks import (
    DIRECTORY_HEADER,
    NOT_GROUPED_HEADER,
    ROSTER_HEADER,
    TAG_HEADER,
    write_workbook,
)

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def exports(export_dir: Path) -> Path:
    """Active directory and tag exports for a small congregation."""

    write_workbook(
        export_dir / "immanuelky-people-active.xlsx",
        {
            "Export": [
                DIRECTORY_HEADER,
                ("1", "Ann", "Lee", None, "7", "Head of Household"),
                ("2", "Bo", "Kim", None, "8", "Head of Household"),
                ("3", "Cy", "Ray", None, "9", "Head of Household"),
                ("4", "Di", "Lee", None, "7", "Spouse"),
            ]
        },
    )
    write_workbook(
        export_dir / "immanuelky-tags.xlsx",
        {
            "Gcg Gene Cone": [TAG_HEADER, ("1", "Ann", "Lee"), ("3", "Cy", "Ray")],
            "Eldership Roll": [TAG_HEADER, ("2", "Bo", "Kim")],
        },
    )
    return export_dir


@pytest.fixture
def tracking_sheet(tmp_path: Path) -> Path:
    return write_workbook(
        tmp_path / "tracking.xlsx",
        {
            "GCG Members": [
                ROSTER_HEADER,
                ("1", "Ann", "Lee", "Aaron White", None, None),
                ("99", "Gone", "Away", "Gene Cone", None, None),
            ],
            "Not in GCG": [NOT_GROUPED_HEADER],
        },
    )
