from __future__ import annotations

import pytest

from gcgsync.domain.errors import MissingColumnError, MissingSourceError
from gcgsync.domain.ports import Loaded, SourceErrorKind, SourceFailure, unwrap


def test_unwrap_returns_value() -> None:
    assert unwrap(Loaded(3)) == 3


def test_missing_column_becomes_descriptive_error() -> None:
    failure = SourceFailure(
        kind=SourceErrorKind.MISSING_COLUMN, source="people-active.xlsx", column="Breeze ID"
    )

    with pytest.raises(MissingColumnError, match="'Breeze ID' not found in people-active.xlsx"):
        unwrap(failure)


def test_missing_source_becomes_missing_source_error() -> None:
    failure = SourceFailure(kind=SourceErrorKind.MISSING_SOURCE, source="tags", detail="no file")

    with pytest.raises(MissingSourceError) as excinfo:
        unwrap(failure)

    assert excinfo.value.source == "tags"
    assert failure.describe() == "tags: missing_source (no file)"
