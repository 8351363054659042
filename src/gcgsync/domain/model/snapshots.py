"""Input snapshots for one reconciliation run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from gcgsync.domain.errors import InvalidRecordError
from gcgsync.domain.model.enums import MembershipStatus
from gcgsync.domain.model.records import GroupAssignment, Member, NotGroupedEntry, RosterEntry


@dataclass(frozen=True, slots=True, kw_only=True)
class TruthSnapshot:
    """Member directory (active and inactive) plus the tag export.

    ``rolls`` maps every non-group tab of the tag export to the person ids it lists;
    the exclusion stage picks administrative rolls out of it by name.
    ``missing_sources`` names optional exports that could not be loaded.
    """

    members: tuple[Member, ...] = ()
    assignments: Mapping[str, GroupAssignment] = field(
        default_factory=dict["str", "GroupAssignment"]
    )
    rolls: Mapping[str, frozenset[str]] = field(default_factory=dict["str", "frozenset[str]"])
    missing_sources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for person_id, assignment in self.assignments.items():
            if assignment.person_id != person_id:
                raise InvalidRecordError(
                    f"Assignment keyed by {person_id!r} belongs to {assignment.person_id!r}"
                )
        for member in self.members:
            if member.status is MembershipStatus.SYNTHETIC:
                raise InvalidRecordError(
                    f"Synthetic member {member.person_id!r} cannot come from the directory"
                )

    @property
    def active_members(self) -> tuple[Member, ...]:
        return tuple(member for member in self.members if member.is_active)


@dataclass(frozen=True, slots=True, kw_only=True)
class PersistedSnapshot:
    """What the tracking roster records before reconciliation."""

    roster: tuple[RosterEntry, ...] = ()
    not_grouped: tuple[NotGroupedEntry, ...] = ()
