"""Builders for reconciliation records and snapshots used across tests."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from gcgsync.domain.model import (
    FamilyRole,
    GroupAssignment,
    GroupChangeUpdate,
    Member,
    MembershipStatus,
    NotGroupedEntry,
    PersistedSnapshot,
    RosterEntry,
    TruthSnapshot,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from gcgsync.domain.model import ChangeSet


def make_member(
    person_id: str | None,
    first_name: str = "Test",
    last_name: str = "Person",
    *,
    nickname: str | None = None,
    family_id: str | None = None,
    family_role: FamilyRole | None = None,
    status: MembershipStatus = MembershipStatus.ACTIVE,
) -> Member:
    return Member(
        person_id=person_id,
        first_name=first_name,
        last_name=last_name,
        nickname=nickname,
        family_id=family_id,
        family_role=family_role,
        status=status,
    )


def make_assignment(
    person_id: str,
    leader: str = "Gene Cone",
    co_leader: str | None = None,
    *,
    first_name: str = "Test",
    last_name: str = "Person",
) -> GroupAssignment:
    return GroupAssignment.for_leaders(
        person_id,
        leader=leader,
        co_leader=co_leader,
        first_name=first_name,
        last_name=last_name,
        source_tab=f"Gcg {leader}",
    )


def make_roster_entry(
    person_id: str | None,
    group: str = "Gene Cone",
    *,
    first_name: str = "Test",
    last_name: str = "Person",
    note: str = "",
    row_ref: object | None = None,
) -> RosterEntry:
    return RosterEntry(
        person_id=person_id,
        first_name=first_name,
        last_name=last_name,
        group_label_raw=group,
        note=note,
        row_ref=row_ref,
    )


def make_not_grouped_entry(
    person_id: str,
    display_name: str = "Test Person",
    *,
    family_id: str | None = None,
    family_role: FamilyRole | None = None,
) -> NotGroupedEntry:
    return NotGroupedEntry(
        person_id=person_id,
        display_name=display_name,
        family_id=family_id,
        family_role=family_role,
    )


def make_truth(
    members: Iterable[Member] = (),
    assignments: Iterable[GroupAssignment] = (),
    *,
    rolls: Mapping[str, Iterable[str]] | None = None,
    missing_sources: tuple[str, ...] = (),
) -> TruthSnapshot:
    return TruthSnapshot(
        members=tuple(members),
        assignments={assignment.person_id: assignment for assignment in assignments},
        rolls={name: frozenset(ids) for name, ids in (rolls or {}).items()},
        missing_sources=missing_sources,
    )


def make_persisted(
    roster: Iterable[RosterEntry] = (),
    not_grouped: Iterable[NotGroupedEntry] = (),
) -> PersistedSnapshot:
    return PersistedSnapshot(roster=tuple(roster), not_grouped=tuple(not_grouped))


def apply_changes(
    persisted: PersistedSnapshot, changes: ChangeSet, *, removed_label: str = "x"
) -> PersistedSnapshot:
    """The roster as it reads once every write-back in ``changes`` is made.

    Removed rows keep their place with ``removed_label``, the way the roster sheet
    marks people who left a group.
    """

    labels: dict[int, str] = {}
    backfilled: dict[int, str | None] = {}
    for update in changes.updates:
        key = id(update.roster_entry)
        if isinstance(update, GroupChangeUpdate):
            labels[key] = update.new_label
        else:
            labels[key] = update.assignment.group_display_name
            backfilled[key] = update.member.person_id
    for removal in changes.removals:
        labels[id(removal.roster_entry)] = removed_label

    roster: list[RosterEntry] = []
    for entry in persisted.roster:
        key = id(entry)
        if key in labels:
            entry = replace(
                entry,
                group_label_raw=labels[key],
                person_id=backfilled.get(key, entry.person_id),
            )
        roster.append(entry)
    roster.extend(
        make_roster_entry(
            addition.member.person_id,
            addition.assignment.group_display_name,
            first_name=addition.member.first_name,
            last_name=addition.member.last_name,
        )
        for addition in changes.additions
    )

    dropped = {id(removal.entry) for removal in changes.not_grouped_removals}
    not_grouped = [entry for entry in persisted.not_grouped if id(entry) not in dropped]
    not_grouped.extend(
        NotGroupedEntry(
            person_id=addition.member.person_id or "",
            display_name=addition.member.full_name,
            family_id=addition.member.family_id,
            family_role=addition.member.family_role,
        )
        for addition in changes.not_grouped_additions
    )
    return make_persisted(roster, not_grouped)
