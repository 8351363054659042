"""Location of the database holding the imported tracking roster."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

DATABASE_URI_ENV: Final[str] = "GCGSYNC_DATABASE_URI"
DATA_DIR_ENV: Final[str] = "GCGSYNC_DATA_DIR"
DEFAULT_DATABASE_FILENAME: Final[str] = "tracking.db"


def _default_data_dir() -> Path:
    return Path.home() / ".gcgsync"


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingDatabaseConfig:
    """Where ``import-sheet`` stores the tracking roster and ``preview`` reads it back.

    An explicit ``uri`` wins. Otherwise the roster lives in a sqlite file named
    ``filename`` inside ``data_dir``.
    """

    data_dir: Path = field(default_factory=_default_data_dir)
    filename: str = DEFAULT_DATABASE_FILENAME
    uri: str | None = None

    @property
    def database_path(self) -> Path | None:
        if self.uri is not None:
            return None
        return self.data_dir.expanduser() / self.filename

    def engine_uri(self) -> str:
        """The SQLAlchemy URI, creating the data directory for a sqlite file."""

        if self.uri is not None:
            return self.uri
        directory = self.data_dir.expanduser()
        directory.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{(directory / self.filename).resolve()}"

    def describe(self) -> str:
        path = self.database_path
        return str(path) if path is not None else "database at GCGSYNC_DATABASE_URI"


def get_tracking_database_config() -> TrackingDatabaseConfig:
    uri = (os.getenv(DATABASE_URI_ENV) or "").strip() or None
    data_dir = (os.getenv(DATA_DIR_ENV) or "").strip()
    if data_dir:
        return TrackingDatabaseConfig(data_dir=Path(data_dir), uri=uri)
    return TrackingDatabaseConfig(uri=uri)
