"""Find the newest export file of a kind in the export directory."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from gcgsync.domain.ports.loading import Loaded, SourceErrorKind, SourceFailure

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from gcgsync.domain.ports.loading import LoadResult

log = getLogger(__name__)

# Excel keeps "~$name.xlsx" lock files next to open workbooks
_LOCK_FILE_PREFIX = "~$"


def find_latest_export(
    directory: Path,
    pattern: str,
    *,
    extensions: Iterable[str] = (".xlsx",),
    exclude: Iterable[str] = (),
) -> LoadResult[Path]:
    """Newest file (by mtime) whose lowercase name contains ``pattern`` and no ``exclude``."""

    if not directory.is_dir():
        return SourceFailure(
            kind=SourceErrorKind.MISSING_SOURCE,
            source=pattern,
            detail=f"export directory {directory} does not exist",
        )

    wanted = pattern.casefold()
    excluded = tuple(item.casefold() for item in exclude)
    suffixes = tuple(ext.casefold() for ext in extensions)
    candidates = [
        path
        for path in directory.iterdir()
        if path.is_file()
        and not path.name.startswith(_LOCK_FILE_PREFIX)
        and path.suffix.casefold() in suffixes
        and wanted in path.name.casefold()
        and not any(item in path.name.casefold() for item in excluded)
    ]
    if not candidates:
        return SourceFailure(
            kind=SourceErrorKind.MISSING_SOURCE,
            source=pattern,
            detail=f"no file matching {pattern!r} in {directory}",
        )

    latest = max(candidates, key=lambda path: (path.stat().st_mtime, path.name))
    if len(candidates) > 1:
        log.debug("Picked %s among %d files matching %r", latest.name, len(candidates), pattern)
    return Loaded(latest)
