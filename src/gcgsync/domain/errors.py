"""Errors raised at the boundary of the reconciliation domain."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for errors that abort a reconciliation run."""


class InvalidRecordError(ValueError):
    """Raised when a record is constructed without its required fields."""


class MissingColumnError(ReconciliationError):
    """Raised when truth data lacks a column needed to join sources."""

    def __init__(self, column: str, *, source: str) -> None:
        self.column = column
        self.source = source
        super().__init__(
            f"Required column {column!r} not found in {source}; "
            "cannot join member data without it"
        )


class MissingSourceError(ReconciliationError):
    """Raised when a required export cannot be located."""

    def __init__(self, source: str, *, detail: str | None = None) -> None:
        self.source = source
        self.detail = detail
        message = f"Required source {source!r} is missing"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
