"""Locations and layouts of the member directory and tag exports."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .env import require_env_var

EXPORT_DIR_ENV: Final[str] = "GCGSYNC_EXPORT_DIR"

DEFAULT_GROUP_TAB_PREFIX: Final[str] = "Gcg "
DEFAULT_ADMIN_TAB_TOKENS: Final[tuple[str, ...]] = (
    "survey",
    "leaders",
    "leadership",
    "training",
    "coordinator",
    "admin",
    "all leaders",
    "leader training",
    "development",
    "wives",
    "active",
    "not",
    "resources",
    "materials",
    "planning",
)


@dataclass(frozen=True, slots=True)
class DirectoryColumns:
    person_id: str = "Breeze ID"
    first_name: str = "First Name"
    last_name: str = "Last Name"
    nickname: str = "Nickname"
    family_id: str = "Family ID"
    family_role: str = "Family Role"


@dataclass(frozen=True, slots=True)
class TagColumns:
    person_id: str = "Person ID"
    first_name: str = "First Name"
    last_name: str = "Last Name"


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportConfig:
    """Where the exports live and how their sheets are laid out.

    File patterns are matched as lowercase substrings of the file name; the newest
    matching file wins.
    """

    export_dir: Path
    active_pattern: str = "people-active"
    inactive_pattern: str = "people-inactive"
    tags_pattern: str = "tags"
    extensions: tuple[str, ...] = (".xlsx",)
    group_tab_prefix: str = DEFAULT_GROUP_TAB_PREFIX
    admin_tab_tokens: tuple[str, ...] = DEFAULT_ADMIN_TAB_TOKENS
    directory_columns: DirectoryColumns = field(default_factory=DirectoryColumns)
    tag_columns: TagColumns = field(default_factory=TagColumns)


def get_export_config(*, export_dir: str | os.PathLike[str] | None = None) -> ExportConfig:
    raw = os.fspath(export_dir) if export_dir is not None else require_env_var(EXPORT_DIR_ENV)
    return ExportConfig(export_dir=Path(raw).expanduser())
