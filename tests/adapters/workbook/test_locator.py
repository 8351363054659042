from __future__ import annotations

import os
from typing import TYPE_CHECKING

from gcgsync.adapters.workbook import find_latest_export
from gcgsync.domain.ports import Loaded, SourceErrorKind, SourceFailure

if TYPE_CHECKING:
    from pathlib import Path


def _touch(directory: Path, name: str, mtime: float) -> Path:
    path = directory / name
    path.write_bytes(b"")
    os.utime(path, (mtime, mtime))
    return path


def test_newest_matching_file_wins(export_dir: Path) -> None:
    _touch(export_dir, "immanuelky-people-active-2024-01.xlsx", 1_000)
    newest = _touch(export_dir, "immanuelky-people-active-2024-02.xlsx", 2_000)
    _touch(export_dir, "immanuelky-people-inactive-2024-03.xlsx", 3_000)
    _touch(export_dir, "immanuelky-people-active-2024-03.csv", 4_000)

    result = find_latest_export(export_dir, "people-active")

    assert result == Loaded(newest)


def test_pattern_is_case_insensitive_and_lock_files_are_ignored(export_dir: Path) -> None:
    export = _touch(export_dir, "ImmanuelKY-Tags.XLSX", 1_000)
    _touch(export_dir, "~$ImmanuelKY-Tags.xlsx", 2_000)

    assert find_latest_export(export_dir, "tags") == Loaded(export)


def test_excluded_names(export_dir: Path) -> None:
    _touch(export_dir, "people-active-backup.xlsx", 2_000)
    export = _touch(export_dir, "people-active.xlsx", 1_000)

    assert find_latest_export(export_dir, "people-active", exclude=("backup",)) == Loaded(export)


def test_missing_export_is_a_failure_value(export_dir: Path) -> None:
    result = find_latest_export(export_dir, "tags")

    assert isinstance(result, SourceFailure)
    assert result.kind is SourceErrorKind.MISSING_SOURCE
    assert result.source == "tags"


def test_missing_directory_is_a_failure_value(tmp_path: Path) -> None:
    result = find_latest_export(tmp_path / "absent", "tags")

    assert isinstance(result, SourceFailure)
    assert result.kind is SourceErrorKind.MISSING_SOURCE
