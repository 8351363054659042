"""Logging setup shared by the CLI and application services."""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("sqlalchemy.engine",)


def level_for_verbosity(verbosity: int) -> int:
    """Map a count of ``-v`` flags to a logging level."""

    if verbosity <= 0:
        return logging.INFO
    return logging.DEBUG


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    SQL echo stays at WARNING even when ``level`` is DEBUG; reconciliation findings
    are logged per record at DEBUG and would drown in statement logs otherwise.
    Pass ``force=True`` to reconfigure from tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
