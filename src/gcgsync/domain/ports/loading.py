"""Explicit results for loading truth data.

Readers report an absent file or column as a ``SourceFailure`` value instead of
raising, so the caller decides whether the loss is fatal (active members, tags) or
benign (the optional inactive export).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from gcgsync.domain.errors import MissingColumnError, MissingSourceError, ReconciliationError


class SourceErrorKind(StrEnum):
    MISSING_SOURCE = "missing_source"
    MISSING_COLUMN = "missing_column"
    UNREADABLE = "unreadable"


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceFailure:
    kind: SourceErrorKind
    source: str
    column: str | None = None
    detail: str | None = None

    def describe(self) -> str:
        if self.kind is SourceErrorKind.MISSING_COLUMN:
            return f"{self.source}: column {self.column!r} not found"
        if self.detail:
            return f"{self.source}: {self.kind.value} ({self.detail})"
        return f"{self.source}: {self.kind.value}"

    def to_error(self) -> ReconciliationError:
        """The exception to raise when this failure is fatal."""

        if self.kind is SourceErrorKind.MISSING_COLUMN:
            return MissingColumnError(self.column or "?", source=self.source)
        return MissingSourceError(self.source, detail=self.detail)


@dataclass(frozen=True, slots=True)
class Loaded[T]:
    value: T


type LoadResult[T] = Loaded[T] | SourceFailure


def unwrap[T](result: LoadResult[T]) -> T:
    """Return the loaded value or raise the failure as a domain error."""

    if isinstance(result, SourceFailure):
        raise result.to_error()
    return result.value


__all__ = ["LoadResult", "Loaded", "SourceErrorKind", "SourceFailure", "unwrap"]
