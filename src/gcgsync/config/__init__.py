"""Application configuration helpers."""

from __future__ import annotations

from .database import TrackingDatabaseConfig, get_tracking_database_config
from .env import env_list, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .exports import (
    DEFAULT_ADMIN_TAB_TOKENS,
    DEFAULT_GROUP_TAB_PREFIX,
    DirectoryColumns,
    ExportConfig,
    TagColumns,
    get_export_config,
)
from .logging import configure_logging, level_for_verbosity
from .reconciliation import get_reconciliation_policy
from .tracking import (
    NotGroupedColumns,
    RosterColumns,
    TrackingSheetConfig,
    get_tracking_sheet_config,
)

__all__ = [
    "DEFAULT_ADMIN_TAB_TOKENS",
    "DEFAULT_GROUP_TAB_PREFIX",
    "ConfigurationError",
    "DirectoryColumns",
    "ExportConfig",
    "MissingConfigurationError",
    "NotGroupedColumns",
    "RosterColumns",
    "TagColumns",
    "TrackingDatabaseConfig",
    "TrackingSheetConfig",
    "configure_logging",
    "env_list",
    "get_export_config",
    "get_reconciliation_policy",
    "get_tracking_database_config",
    "get_tracking_sheet_config",
    "level_for_verbosity",
    "require_env_var",
    "require_env_vars",
]
