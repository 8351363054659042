from __future__ import annotations

import logging

import pytest

from gcgsync.domain.reconciliation import (
    ReconciliationPolicy,
    compute_excluded_ids,
    resolve_exclusions,
)
from tests.helpers.roster import make_roster_entry


def test_admin_roll_and_inactive_note_are_excluded() -> None:
    rolls = {"Eldership Roll": frozenset({"E1"})}
    roster = [make_roster_entry("N1", note="moved away")]

    excluded = compute_excluded_ids(rolls, roster)

    assert excluded == frozenset({"E1", "N1"})


def test_category_names_match_exactly_ignoring_case() -> None:
    rolls = {
        "youth ministry roll": frozenset({"Y1"}),
        "Gcg Youth Ministry Roll Leaders": frozenset({"X1"}),
    }

    result = resolve_exclusions(rolls, [])

    assert result.administrative == frozenset({"Y1"})
    assert result.missing_categories == ("Eldership Roll",)


def test_missing_category_is_logged_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = resolve_exclusions({}, [make_roster_entry("N1", note="inactive")])

    assert result.excluded_ids == frozenset({"N1"})
    assert result.missing_categories == ("Eldership Roll", "Youth Ministry Roll")
    assert "Eldership Roll" in caplog.text


def test_unidentified_inactive_rows_are_ignored() -> None:
    result = resolve_exclusions({}, [make_roster_entry(None, note="inactive")])

    assert result.inactive == frozenset()


def test_policy_categories() -> None:
    policy = ReconciliationPolicy(administrative_categories=("Staff",))
    rolls = {"Staff": frozenset({"S1"}), "Eldership Roll": frozenset({"E1"})}

    assert compute_excluded_ids(rolls, [], policy=policy) == frozenset({"S1"})
