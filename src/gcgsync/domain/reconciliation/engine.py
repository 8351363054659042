"""Membership diff and the composed reconciliation run.

``reconcile_memberships`` compares the tag export with the tracking roster:

1) index roster rows by person id; rows whose note marks the person inactive are
   dropped from both sides of the comparison
2) walk grouped active members: add, update, backfill the id, or flag ambiguity
3) walk identified roster rows no longer grouped: remove, or flag an incomplete export
4) walk tag assignments no directory record backs: flag synthetic or inactive members

``ReconciliationEngine`` composes this with the exclusion, family and not-grouped
stages into a single ``ChangeSet``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gcgsync.domain.model import (
    Addition,
    AmbiguousMatch,
    ChangeSet,
    Diagnostics,
    ExportIncomplete,
    GroupChangeUpdate,
    InactiveGrouped,
    Member,
    MembershipStatus,
    MissingIdentifierUpdate,
    Removal,
    RemovalReason,
    SyntheticMember,
)

from .exclusions import resolve_exclusions
from .inactivity import KeywordInactivityClassifier
from .normalize import name_keys, normalize_full_name, normalize_group_key
from .not_grouped import diff_not_grouped
from .policy import ReconciliationPolicy
from .population import active_by_id, directory_by_id

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from gcgsync.domain.model import (
        GroupAssignment,
        MembershipUpdate,
        PersistedSnapshot,
        RosterEntry,
        TruthSnapshot,
    )

    from .inactivity import InactivityClassifier

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class MembershipDiff:
    additions: tuple[Addition, ...] = ()
    removals: tuple[Removal, ...] = ()
    updates: tuple[MembershipUpdate, ...] = ()
    inconsistent_export_only: tuple[ExportIncomplete, ...] = ()
    inconsistent_group_only: tuple[SyntheticMember, ...] = ()
    ambiguous_matches: tuple[AmbiguousMatch, ...] = ()
    inactive_grouped: tuple[InactiveGrouped, ...] = ()
    inactive_noted: int = 0
    duplicate_roster_ids: tuple[str, ...] = ()
    duplicate_member_ids: tuple[str, ...] = ()


@dataclass(slots=True)
class _RosterIndex:
    entries: list[RosterEntry] = field(default_factory=list["RosterEntry"])
    by_id: dict[str, int] = field(default_factory=dict["str", "int"])
    by_name: dict[str, list[int]] = field(default_factory=dict["str", "list[int]"])
    inactive_ids: set[str] = field(default_factory=set["str"])
    inactive_noted: int = 0
    duplicate_ids: list[str] = field(default_factory=list["str"])

    @classmethod
    def build(
        cls, roster_entries: Iterable[RosterEntry], classifier: InactivityClassifier
    ) -> _RosterIndex:
        index = cls()
        for entry in roster_entries:
            if classifier(entry.note):
                index.inactive_noted += 1
                if entry.person_id is not None:
                    index.inactive_ids.add(entry.person_id)
                continue
            position = len(index.entries)
            index.entries.append(entry)
            if entry.person_id is None:
                key = normalize_full_name(entry.first_name, entry.last_name)
                index.by_name.setdefault(key, []).append(position)
            elif entry.person_id in index.by_id:
                log.warning(
                    "Roster lists person %s more than once; keeping the first row",
                    entry.person_id,
                )
                index.duplicate_ids.append(entry.person_id)
            else:
                index.by_id[entry.person_id] = position
        return index

    def name_candidates(self, member: Member) -> list[int]:
        positions: list[int] = []
        for key in name_keys(member.first_name, member.last_name, nickname=member.nickname):
            for position in self.by_name.get(key, ()):
                if position not in positions:
                    positions.append(position)
        return positions


def reconcile_memberships(  # noqa: PLR0912
    members: Sequence[Member],
    assignments: Mapping[str, GroupAssignment],
    roster_entries: Iterable[RosterEntry],
    *,
    population: Sequence[Member] | None = None,
    policy: ReconciliationPolicy | None = None,
    classifier: InactivityClassifier | None = None,
) -> MembershipDiff:
    """Diff grouped active ``members`` against the tracking roster.

    ``population`` is the full directory (active and inactive) used to explain
    removals and tag anomalies; it defaults to ``members``.
    """

    policy = policy or ReconciliationPolicy()
    classifier = classifier or KeywordInactivityClassifier(policy.inactive_keywords)
    directory = directory_by_id(members if population is None else population)
    active = active_by_id(members)
    for person_id in active.duplicate_ids:
        log.warning(
            "Member directory lists person %s more than once; keeping the first row", person_id
        )
    roster = _RosterIndex.build(roster_entries, classifier)
    delimiter = policy.co_leader_delimiter

    additions: list[Addition] = []
    updates: list[MembershipUpdate] = []
    ambiguous: list[AmbiguousMatch] = []
    pending: list[tuple[Member, GroupAssignment, list[int]]] = []

    for person_id, member in active.by_id.items():
        assignment = assignments.get(person_id)
        if assignment is None:
            continue
        if person_id in roster.inactive_ids:
            log.debug("Skipping %s: roster note marks them inactive", person_id)
            continue
        position = roster.by_id.get(person_id)
        if position is None:
            pending.append((member, assignment, roster.name_candidates(member)))
            continue
        entry = roster.entries[position]
        old_key = normalize_group_key(entry.group_label_raw, delimiter=delimiter)
        new_key = normalize_group_key(assignment.group_display_name, delimiter=delimiter)
        if old_key != new_key:
            updates.append(
                GroupChangeUpdate(
                    roster_entry=entry,
                    member=member,
                    assignment=assignment,
                    old_label=entry.group_label_raw,
                    new_label=assignment.group_display_name,
                    old_key=old_key,
                    new_key=new_key,
                )
            )

    # a name-matched row may only be claimed by one member
    claims: dict[int, int] = {}
    for _member, _assignment, positions in pending:
        for position in positions:
            claims[position] = claims.get(position, 0) + 1

    for member, assignment, positions in pending:
        if not positions:
            additions.append(Addition(member=member, assignment=assignment))
        elif len(positions) == 1 and claims[positions[0]] == 1:
            updates.append(
                MissingIdentifierUpdate(
                    roster_entry=roster.entries[positions[0]],
                    member=member,
                    assignment=assignment,
                )
            )
        else:
            log.warning(
                "Cannot resolve %s (%s) by name: %d candidate roster rows",
                member.full_name,
                member.person_id,
                len(positions),
            )
            ambiguous.append(
                AmbiguousMatch(
                    member=member,
                    assignment=assignment,
                    candidates=tuple(roster.entries[p] for p in positions),
                )
            )

    removals: list[Removal] = []
    export_only: list[ExportIncomplete] = []
    for person_id, position in roster.by_id.items():
        if person_id in assignments:
            continue
        entry = roster.entries[position]
        if policy.is_placeholder_label(entry.group_label_raw):
            continue
        known = directory.get(person_id)
        if known is not None and known.is_active:
            export_only.append(ExportIncomplete(roster_entry=entry, member=known))
            continue
        reason = RemovalReason.INACTIVE_MEMBER if known else RemovalReason.NOT_IN_DIRECTORY
        removals.append(Removal(roster_entry=entry, reason=reason, member=known))

    synthetic: list[SyntheticMember] = []
    inactive_grouped: list[InactiveGrouped] = []
    for person_id, assignment in assignments.items():
        known = directory.get(person_id)
        if known is None:
            synthetic.append(
                SyntheticMember(
                    member=Member(
                        person_id=person_id,
                        first_name=assignment.first_name,
                        last_name=assignment.last_name,
                        status=MembershipStatus.SYNTHETIC,
                    ),
                    assignment=assignment,
                )
            )
        elif not known.is_active and person_id not in roster.inactive_ids:
            inactive_grouped.append(InactiveGrouped(member=known, assignment=assignment))

    return MembershipDiff(
        additions=tuple(additions),
        removals=tuple(removals),
        updates=tuple(updates),
        inconsistent_export_only=tuple(export_only),
        inconsistent_group_only=tuple(synthetic),
        ambiguous_matches=tuple(ambiguous),
        inactive_grouped=tuple(inactive_grouped),
        inactive_noted=roster.inactive_noted,
        duplicate_roster_ids=tuple(roster.duplicate_ids),
        duplicate_member_ids=active.duplicate_ids,
    )


@dataclass(slots=True)
class ReconciliationEngine:
    """Run every reconciliation stage over one pair of snapshots."""

    policy: ReconciliationPolicy = field(default_factory=ReconciliationPolicy)
    classifier: InactivityClassifier | None = None

    def _classifier(self) -> InactivityClassifier:
        if self.classifier is not None:
            return self.classifier
        return KeywordInactivityClassifier(self.policy.inactive_keywords)

    def reconcile(self, truth: TruthSnapshot, persisted: PersistedSnapshot) -> ChangeSet:
        classifier = self._classifier()
        active = truth.active_members

        membership = reconcile_memberships(
            active,
            truth.assignments,
            persisted.roster,
            population=truth.members,
            policy=self.policy,
            classifier=classifier,
        )
        exclusions = resolve_exclusions(
            truth.rolls, persisted.roster, policy=self.policy, classifier=classifier
        )
        not_grouped = diff_not_grouped(
            active,
            truth.assignments,
            exclusions.excluded_ids,
            persisted.not_grouped,
            policy=self.policy,
        )

        changes = ChangeSet(
            additions=membership.additions,
            removals=membership.removals,
            updates=membership.updates,
            inconsistent_export_only=membership.inconsistent_export_only,
            inconsistent_group_only=membership.inconsistent_group_only,
            ambiguous_matches=membership.ambiguous_matches,
            inactive_grouped=membership.inactive_grouped,
            not_grouped_additions=not_grouped.additions,
            not_grouped_removals=not_grouped.removals,
            diagnostics=Diagnostics(
                inactive_noted=membership.inactive_noted,
                excluded_ids=len(exclusions.excluded_ids),
                missing_categories=exclusions.missing_categories,
                missing_sources=truth.missing_sources,
                duplicate_roster_ids=membership.duplicate_roster_ids,
                duplicate_member_ids=membership.duplicate_member_ids,
            ),
        )
        log.info(
            "Reconciled %d active members against %d roster rows: %s",
            len(active),
            len(persisted.roster),
            ", ".join(f"{name}={count}" for name, count in changes.summary().items() if count),
        )
        return changes


def reconcile(
    truth: TruthSnapshot,
    persisted: PersistedSnapshot,
    *,
    policy: ReconciliationPolicy | None = None,
    classifier: InactivityClassifier | None = None,
) -> ChangeSet:
    engine = ReconciliationEngine(policy=policy or ReconciliationPolicy(), classifier=classifier)
    return engine.reconcile(truth, persisted)
