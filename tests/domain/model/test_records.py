from __future__ import annotations

import pytest

from gcgsync.domain.errors import InvalidRecordError
from gcgsync.domain.model import (
    FamilyRole,
    GroupAssignment,
    Member,
    MembershipStatus,
    NotGroupedEntry,
    RosterEntry,
    TruthSnapshot,
)
from tests.helpers.roster import make_assignment, make_member


def test_member_without_id_requires_both_names() -> None:
    with pytest.raises(InvalidRecordError):
        Member(person_id=None, first_name="Ann", last_name=" ")

    member = Member(person_id=None, first_name="Ann", last_name="Lee")
    assert member.full_name == "Ann Lee"


def test_member_rejects_blank_identifier() -> None:
    with pytest.raises(InvalidRecordError):
        Member(person_id="  ", first_name="Ann", last_name="Lee")


def test_member_with_id_may_have_blank_names() -> None:
    member = Member(person_id="42", first_name="", last_name="")

    assert member.is_active
    assert member.full_name == ""


def test_group_assignment_requires_identifier_and_key() -> None:
    with pytest.raises(InvalidRecordError):
        GroupAssignment(
            person_id="", group_key="Gene Cone", group_display_name="Gene Cone", leader="Gene Cone"
        )
    with pytest.raises(InvalidRecordError):
        GroupAssignment(person_id="1", group_key=" ", group_display_name="", leader="")


def test_for_leaders_builds_display_name_with_co_leader() -> None:
    assignment = GroupAssignment.for_leaders(
        "1", leader=" Gene Cone ", co_leader="Scott Stringer"
    )

    assert assignment.group_key == "Gene Cone"
    assert assignment.group_display_name == "Gene Cone & Scott Stringer"
    assert assignment.co_leader == "Scott Stringer"


def test_for_leaders_without_co_leader() -> None:
    assignment = GroupAssignment.for_leaders("1", leader="Gene Cone", co_leader="  ")

    assert assignment.group_display_name == "Gene Cone"
    assert assignment.co_leader is None


def test_roster_entry_requires_names() -> None:
    with pytest.raises(InvalidRecordError):
        RosterEntry(person_id="1", first_name="Ann", last_name="")


def test_not_grouped_entry_requires_identifier() -> None:
    with pytest.raises(InvalidRecordError):
        NotGroupedEntry(person_id="", display_name="Ann Lee")


def test_family_role_from_label() -> None:
    assert FamilyRole.from_label("head_of_household") is FamilyRole.HEAD_OF_HOUSEHOLD
    assert FamilyRole.from_label("  spouse ") is FamilyRole.SPOUSE
    assert FamilyRole.from_label("Grandparent") is None
    assert FamilyRole.from_label("") is None
    assert FamilyRole.from_label(None) is None


def test_truth_snapshot_rejects_mismatched_assignment_key() -> None:
    with pytest.raises(InvalidRecordError):
        TruthSnapshot(assignments={"2": make_assignment("1")})


def test_truth_snapshot_rejects_synthetic_members() -> None:
    with pytest.raises(InvalidRecordError):
        TruthSnapshot(members=(make_member("1", status=MembershipStatus.SYNTHETIC),))


def test_truth_snapshot_active_members() -> None:
    active = make_member("1")
    inactive = make_member("2", status=MembershipStatus.INACTIVE)

    snapshot = TruthSnapshot(members=(active, inactive))

    assert snapshot.active_members == (active,)
