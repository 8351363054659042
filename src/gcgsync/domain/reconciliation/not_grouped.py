"""Diff for the "not currently grouped" list."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gcgsync.domain.model import (
    NotGroupedAddition,
    NotGroupedRemoval,
    NotGroupedRemovalReason,
)

from .families import households
from .policy import ReconciliationPolicy
from .population import active_by_id

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from collections.abc import Set as AbstractSet

    from gcgsync.domain.model import GroupAssignment, Member, NotGroupedEntry

    from .families import Household

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class NotGroupedDiff:
    additions: tuple[NotGroupedAddition, ...] = ()
    removals: tuple[NotGroupedRemoval, ...] = ()


def _dedupe_current(current: Iterable[NotGroupedEntry]) -> list[NotGroupedEntry]:
    seen: set[str] = set()
    unique: list[NotGroupedEntry] = []
    for entry in current:
        if entry.person_id in seen:
            log.warning("Duplicate not-grouped entry for person %s ignored", entry.person_id)
            continue
        seen.add(entry.person_id)
        unique.append(entry)
    return unique


def diff_not_grouped(
    members: Iterable[Member],
    assignments: Mapping[str, GroupAssignment],
    excluded_ids: AbstractSet[str],
    current: Iterable[NotGroupedEntry],
    *,
    policy: ReconciliationPolicy | None = None,
) -> NotGroupedDiff:
    """Compare the desired not-grouped list with ``current``.

    Candidates are active members with an id, no group and no exclusion; one
    representative per household is desired. Removal reasons are checked in order:
    no longer active, now grouped, now excluded, otherwise lost representative status.
    """

    policy = policy or ReconciliationPolicy()
    active = active_by_id(members).by_id
    candidates = {
        person_id: member
        for person_id, member in active.items()
        if person_id not in assignments and person_id not in excluded_ids
    }
    person_id_of = {member: person_id for person_id, member in candidates.items()}

    household_of: dict[str, Household] = {}
    desired: dict[str, Household] = {}
    for household in households(candidates.values(), policy=policy):
        for member in household.members:
            household_of[person_id_of[member]] = household
        desired[person_id_of[household.representative]] = household

    current_entries = _dedupe_current(current)
    current_ids = {entry.person_id for entry in current_entries}

    additions = tuple(
        NotGroupedAddition(member=household.representative, family_size=household.size)
        for person_id, household in desired.items()
        if person_id not in current_ids
    )

    removals: list[NotGroupedRemoval] = []
    for entry in current_entries:
        person_id = entry.person_id
        if person_id in desired:
            continue
        if person_id not in active:
            removals.append(
                NotGroupedRemoval(entry=entry, reason=NotGroupedRemovalReason.NOT_ACTIVE)
            )
        elif person_id in assignments:
            removals.append(
                NotGroupedRemoval(entry=entry, reason=NotGroupedRemovalReason.NOW_GROUPED)
            )
        elif person_id in excluded_ids:
            removals.append(NotGroupedRemoval(entry=entry, reason=NotGroupedRemovalReason.EXCLUDED))
        else:
            household = household_of.get(person_id)
            removals.append(
                NotGroupedRemoval(
                    entry=entry,
                    reason=NotGroupedRemovalReason.LOST_REPRESENTATIVE,
                    representative=household.representative if household else None,
                )
            )

    log.debug(
        "Not-grouped diff: %d candidates in %d households, %d additions, %d removals",
        len(candidates),
        len(desired),
        len(additions),
        len(removals),
    )
    return NotGroupedDiff(additions=additions, removals=tuple(removals))
