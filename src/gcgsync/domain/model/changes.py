"""Change set produced by one reconciliation run.

Every record names the roster row(s) and truth-data records it was derived from so the
report renderer and the update applier never need to look anything up again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from gcgsync.domain.errors import InvalidRecordError
from gcgsync.domain.model.enums import UpdateKind

if TYPE_CHECKING:
    from gcgsync.domain.model.enums import NotGroupedRemovalReason, RemovalReason
    from gcgsync.domain.model.records import (
        GroupAssignment,
        Member,
        NotGroupedEntry,
        RosterEntry,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class Addition:
    """Grouped member with no roster row at all."""

    member: Member
    assignment: GroupAssignment


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupChangeUpdate:
    """Roster row whose leader differs from the tag export."""

    roster_entry: RosterEntry
    member: Member
    assignment: GroupAssignment
    old_label: str
    new_label: str
    old_key: str
    new_key: str
    kind: Literal[UpdateKind.GROUP_CHANGE] = UpdateKind.GROUP_CHANGE


@dataclass(frozen=True, slots=True, kw_only=True)
class MissingIdentifierUpdate:
    """Roster row matched by name only; its person id needs backfilling."""

    roster_entry: RosterEntry
    member: Member
    assignment: GroupAssignment
    kind: Literal[UpdateKind.MISSING_IDENTIFIER] = UpdateKind.MISSING_IDENTIFIER

    @property
    def person_id(self) -> str | None:
        return self.member.person_id


type MembershipUpdate = GroupChangeUpdate | MissingIdentifierUpdate


@dataclass(frozen=True, slots=True, kw_only=True)
class Removal:
    roster_entry: RosterEntry
    reason: RemovalReason
    member: Member | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExportIncomplete:
    """Active member on the roster whose group tag is missing from the export."""

    roster_entry: RosterEntry
    member: Member


@dataclass(frozen=True, slots=True, kw_only=True)
class SyntheticMember:
    """Group tag for a person the member directory does not know."""

    member: Member
    assignment: GroupAssignment


@dataclass(frozen=True, slots=True, kw_only=True)
class InactiveGrouped:
    """Directory-inactive member still carrying a group tag."""

    member: Member
    assignment: GroupAssignment


@dataclass(frozen=True, slots=True, kw_only=True)
class AmbiguousMatch:
    """Grouped member whose name fallback cannot be resolved to a single roster row.

    Either several unidentified rows share the name, or several grouped members
    compete for the same row.
    """

    member: Member
    assignment: GroupAssignment
    candidates: tuple[RosterEntry, ...]

    def __post_init__(self) -> None:
        if not self.candidates:
            raise InvalidRecordError("Ambiguous match must include at least one candidate")


@dataclass(frozen=True, slots=True, kw_only=True)
class NotGroupedAddition:
    member: Member
    family_size: int = 1


@dataclass(frozen=True, slots=True, kw_only=True)
class NotGroupedRemoval:
    entry: NotGroupedEntry
    reason: NotGroupedRemovalReason
    representative: Member | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Diagnostics:
    """Observable losses and skips that did not abort the run."""

    inactive_noted: int = 0
    excluded_ids: int = 0
    missing_categories: tuple[str, ...] = ()
    missing_sources: tuple[str, ...] = ()
    duplicate_roster_ids: tuple[str, ...] = ()
    # person ids the member directory lists more than once; the first row is used
    duplicate_member_ids: tuple[str, ...] = ()

    @property
    def degraded(self) -> bool:
        return bool(self.missing_categories or self.missing_sources)


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeSet:
    additions: tuple[Addition, ...] = ()
    removals: tuple[Removal, ...] = ()
    updates: tuple[MembershipUpdate, ...] = ()
    inconsistent_export_only: tuple[ExportIncomplete, ...] = ()
    inconsistent_group_only: tuple[SyntheticMember, ...] = ()
    ambiguous_matches: tuple[AmbiguousMatch, ...] = ()
    inactive_grouped: tuple[InactiveGrouped, ...] = ()
    not_grouped_additions: tuple[NotGroupedAddition, ...] = ()
    not_grouped_removals: tuple[NotGroupedRemoval, ...] = ()
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def has_changes(self) -> bool:
        """Whether anything would be written back to the roster."""

        return bool(
            self.additions
            or self.removals
            or self.updates
            or self.not_grouped_additions
            or self.not_grouped_removals
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.has_changes
            or self.inconsistent_export_only
            or self.inconsistent_group_only
            or self.ambiguous_matches
            or self.inactive_grouped
        )

    def summary(self) -> dict[str, int]:
        return {
            "additions": len(self.additions),
            "removals": len(self.removals),
            "updates": len(self.updates),
            "inconsistent_export_only": len(self.inconsistent_export_only),
            "inconsistent_group_only": len(self.inconsistent_group_only),
            "ambiguous_matches": len(self.ambiguous_matches),
            "inactive_grouped": len(self.inactive_grouped),
            "not_grouped_additions": len(self.not_grouped_additions),
            "not_grouped_removals": len(self.not_grouped_removals),
        }
