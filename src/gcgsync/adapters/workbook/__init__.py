"""openpyxl adapters for the directory export, the tag export and the tracking workbook."""

from __future__ import annotations

from .directory import WorkbookMemberDirectory, read_member_directory
from .locator import find_latest_export
from .tags import WorkbookTagExport, extract_leaders, is_group_tab, read_tag_export
from .tracking import WorkbookPersistedStateStore

__all__ = [
    "WorkbookMemberDirectory",
    "WorkbookPersistedStateStore",
    "WorkbookTagExport",
    "extract_leaders",
    "find_latest_export",
    "is_group_tab",
    "read_member_directory",
    "read_tag_export",
]
