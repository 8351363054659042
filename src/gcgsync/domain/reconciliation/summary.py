"""Per-group change counts and group participation for one run."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .normalize import normalize_group_key
from .policy import ReconciliationPolicy
from .population import active_by_id

if TYPE_CHECKING:
    from gcgsync.domain.model import ChangeSet, TruthSnapshot


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupSummary:
    group_key: str
    display_name: str
    members: int = 0
    additions: int = 0
    updates: int = 0
    removals: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class Participation:
    """Active members with and without a group.

    Synthetic members count as active and grouped, since their only record is a tag.
    """

    active: int
    grouped: int

    @property
    def not_grouped(self) -> int:
        return self.active - self.grouped

    @property
    def rate(self) -> float:
        """Percentage of active members in a group."""

        if not self.active:
            return 0.0
        return 100.0 * self.grouped / self.active


def summarize_groups(
    truth: TruthSnapshot,
    changes: ChangeSet,
    *,
    policy: ReconciliationPolicy | None = None,
) -> tuple[GroupSummary, ...]:
    """Member and change counts per group, ordered by display name.

    Removals count against the group their roster row still names, so groups that
    vanished from the tag export are listed too.
    """

    policy = policy or ReconciliationPolicy()
    names: dict[str, str] = {}
    members: Counter[str] = Counter()
    for assignment in truth.assignments.values():
        names.setdefault(assignment.group_key, assignment.group_display_name)
        members[assignment.group_key] += 1

    additions = Counter(addition.assignment.group_key for addition in changes.additions)
    updates = Counter(update.assignment.group_key for update in changes.updates)
    delimiter = policy.co_leader_delimiter
    removals = Counter(
        normalize_group_key(removal.roster_entry.group_label_raw, delimiter=delimiter)
        for removal in changes.removals
    )
    for key in removals:
        names.setdefault(key, key)

    return tuple(
        GroupSummary(
            group_key=key,
            display_name=name,
            members=members[key],
            additions=additions[key],
            updates=updates[key],
            removals=removals[key],
        )
        for key, name in sorted(names.items(), key=lambda item: item[1].casefold())
    )


def participation(truth: TruthSnapshot, changes: ChangeSet) -> Participation:
    active = active_by_id(truth.members).by_id
    grouped = sum(1 for person_id in active if person_id in truth.assignments)
    synthetic = len(changes.inconsistent_group_only)
    return Participation(active=len(active) + synthetic, grouped=grouped + synthetic)
