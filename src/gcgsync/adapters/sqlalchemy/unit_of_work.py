"""Connection to the tracking database and its unit of work.

``startup`` binds one engine for the process and creates the roster tables.
Each ``SqlAlchemyTrackingUnitOfWork`` is one transaction over both tables:
an import clears and refills them, a preview only reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from gcgsync.adapters.sqlalchemy.mappings import create_all_tables
from gcgsync.adapters.sqlalchemy.repositories import (
    SqlAlchemyNotGroupedRepository,
    SqlAlchemyRosterRepository,
)
from gcgsync.config.database import get_tracking_database_config
from gcgsync.domain.ports.unit_of_work import TrackingRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

    from gcgsync.config.database import TrackingDatabaseConfig

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the tracking database is used before ``startup`` or bound twice."""


@dataclass(slots=True)
class _TrackingDatabase:
    engine: Engine
    sessions: sessionmaker[Session]


@dataclass(slots=True)
class _Binding:
    database: _TrackingDatabase | None = None

    def require(self) -> _TrackingDatabase:
        if self.database is None:
            raise StartupError(
                "Tracking database not started; call "
                "gcgsync.adapters.sqlalchemy.unit_of_work.startup() first"
            )
        return self.database


_BINDING = _Binding()


def startup(
    config: TrackingDatabaseConfig | None = None,
    *,
    engine: Engine | None = None,
    force: bool = False,
) -> Engine:
    """Bind the tracking database and create any missing roster tables.

    ``engine`` wins over ``config``; without either, the location comes from the
    environment. Rebinding requires ``force=True``.
    """

    if _BINDING.database is not None and not force:
        raise StartupError("Tracking database already started; pass force=True to rebind")

    if engine is None:
        config = config or get_tracking_database_config()
        engine = create_engine(config.engine_uri())
        log.info("Using tracking database %s", config.describe())
    create_all_tables(engine)
    if _BINDING.database is not None and _BINDING.database.engine is not engine:
        _BINDING.database.engine.dispose()
    _BINDING.database = _TrackingDatabase(
        engine=engine, sessions=sessionmaker(bind=engine, expire_on_commit=False)
    )
    return engine


def configured_engine() -> Engine | None:
    return _BINDING.database.engine if _BINDING.database is not None else None


def is_started() -> bool:
    return _BINDING.database is not None


def shutdown() -> None:
    """Dispose the bound engine, if any."""

    if _BINDING.database is not None:
        _BINDING.database.engine.dispose()
    _BINDING.database = None


class SqlAlchemyTrackingUnitOfWork:
    """One transaction over the roster and not-grouped tables."""

    def __init__(self) -> None:
        self._sessions = _BINDING.require().sessions
        self._session: Session | None = None
        self._repositories: TrackingRepositories | None = None

    def __enter__(self) -> SqlAlchemyTrackingUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already open")
        session = self._sessions()
        self._session = session
        self._repositories = TrackingRepositories(
            roster=SqlAlchemyRosterRepository(session),
            not_grouped=SqlAlchemyNotGroupedRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self._session
        self._session = None
        self._repositories = None
        if session is not None:
            if exc_type is not None:
                session.rollback()
            session.close()
        return False

    @property
    def repositories(self) -> TrackingRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._repositories

    def _open_session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with-block")
        return self._session

    def commit(self) -> None:
        self._open_session().commit()

    def rollback(self) -> None:
        self._open_session().rollback()


if TYPE_CHECKING:
    from gcgsync.domain.ports.unit_of_work import TrackingUnitOfWork

    _uow_check: TrackingUnitOfWork = SqlAlchemyTrackingUnitOfWork()
