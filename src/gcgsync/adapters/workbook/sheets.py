"""Shared helpers for reading header-based worksheets with openpyxl."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence
    from pathlib import Path

    from openpyxl.workbook.workbook import Workbook

# what openpyxl raises for a missing, locked or non-xlsx file
WORKBOOK_READ_ERRORS: tuple[type[Exception], ...] = (InvalidFileException, BadZipFile, OSError)


@contextmanager
def open_workbook(path: Path) -> Iterator[Workbook]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        yield workbook
    finally:
        workbook.close()


def cell_text(value: object) -> str:
    """Cell value as stripped text; whole floats lose their ``.0`` (ids typed as numbers)."""

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def find_column(header: Sequence[object], name: str) -> int | None:
    """Index of ``name`` in ``header``: exact case-insensitive match first, then substring."""

    wanted = name.strip().casefold()
    labels = [cell_text(cell).casefold() for cell in header]
    for index, label in enumerate(labels):
        if label == wanted:
            return index
    for index, label in enumerate(labels):
        if label and wanted in label:
            return index
    return None


def locate_columns(
    header: Sequence[object], wanted: Mapping[str, str]
) -> tuple[dict[str, int], list[str]]:
    """Map field names to column indexes; the second item lists header names not found."""

    found: dict[str, int] = {}
    missing: list[str] = []
    for field_name, column in wanted.items():
        index = find_column(header, column)
        if index is None:
            missing.append(column)
        else:
            found[field_name] = index
    return found, missing


def find_header_row(
    rows: Sequence[Sequence[object]],
    *,
    markers: Sequence[str] = ("first", "last"),
) -> int | None:
    """Index of the first row having, for each marker, a cell that contains it."""

    for index, row in enumerate(rows):
        labels = [cell_text(cell).casefold() for cell in row]
        if all(any(marker in label for label in labels) for marker in markers):
            return index
    return None


def row_values(row: Sequence[object], columns: Mapping[str, int]) -> dict[str, object]:
    return {
        field_name: row[index] if index < len(row) else None
        for field_name, index in columns.items()
    }


def is_blank_row(row: Sequence[object]) -> bool:
    return all(not cell_text(cell) for cell in row)
