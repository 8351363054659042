"""One-line descriptions of change set findings, for the CLI log."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gcgsync.domain.model import GroupChangeUpdate, MissingIdentifierUpdate

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gcgsync.domain.model import ChangeSet, Member, MembershipUpdate, RosterEntry


def _who(member: Member | None, entry: RosterEntry | None = None) -> str:
    if member is not None:
        return f"{member.full_name} ({member.person_id or 'no id'})"
    if entry is not None:
        return f"{entry.full_name} ({entry.person_id or 'no id'})"
    return "unknown"


def _describe_update(update: MembershipUpdate) -> str:
    match update:
        case GroupChangeUpdate():
            return (
                f"update {_who(update.member)}: "
                f"{update.old_label or '(none)'} -> {update.new_label}"
            )
        case MissingIdentifierUpdate():
            return (
                f"backfill id {update.person_id} on roster row {update.roster_entry.row_ref} "
                f"for {update.roster_entry.full_name}"
            )


def describe_changes(changes: ChangeSet) -> Iterator[str]:
    for addition in changes.additions:
        yield f"add {_who(addition.member)} to {addition.assignment.group_display_name}"
    for update in changes.updates:
        yield _describe_update(update)
    for removal in changes.removals:
        yield f"remove {_who(removal.member, removal.roster_entry)}: {removal.reason.value}"
    for finding in changes.inconsistent_export_only:
        yield (
            f"check {_who(finding.member)}: active and on roster in "
            f"{finding.roster_entry.group_label_raw} but missing from group tags"
        )
    for finding in changes.inconsistent_group_only:
        yield (
            f"check {_who(finding.member)}: tagged in "
            f"{finding.assignment.group_display_name} but not in member directory"
        )
    for match in changes.ambiguous_matches:
        rows = ", ".join(str(entry.row_ref) for entry in match.candidates)
        yield f"ambiguous {_who(match.member)}: matches roster rows {rows} by name"
    for finding in changes.inactive_grouped:
        yield (
            f"inactive {_who(finding.member)} still tagged in "
            f"{finding.assignment.group_display_name}"
        )
    for addition in changes.not_grouped_additions:
        yield f"not grouped: add {_who(addition.member)} (household of {addition.family_size})"
    for removal in changes.not_grouped_removals:
        line = (
            f"not grouped: remove {removal.entry.display_name or removal.entry.person_id} "
            f"({removal.entry.person_id}): {removal.reason.value}"
        )
        if removal.representative is not None:
            line = f"{line}, now represented by {_who(removal.representative)}"
        yield line
