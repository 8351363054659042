from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from gcgsync.adapters.sqlalchemy.mappings import create_all_tables
from gcgsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTrackingUnitOfWork,
    shutdown,
    startup,
)
from gcgsync.config.exports import ExportConfig

os.environ.setdefault("GCGSYNC_DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyTrackingUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyTrackingUnitOfWork:
        return SqlAlchemyTrackingUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "exports"
    directory.mkdir()
    return directory


@pytest.fixture
def export_config(export_dir: Path) -> ExportConfig:
    return ExportConfig(export_dir=export_dir)
