from __future__ import annotations

from gcgsync.domain.model import (
    Addition,
    AmbiguousMatch,
    ChangeSet,
    GroupChangeUpdate,
    MissingIdentifierUpdate,
    NotGroupedAddition,
    NotGroupedRemoval,
    NotGroupedRemovalReason,
    Removal,
    RemovalReason,
)
from gcgsync.ui.report import describe_changes
from tests.helpers.roster import (
    make_assignment,
    make_member,
    make_not_grouped_entry,
    make_roster_entry,
)


def test_describes_every_finding_in_order() -> None:
    ann = make_member("1", "Ann", "Lee")
    bo = make_member("2", "Bo", "Kim")
    assignment = make_assignment("1", "Gene Cone", "Scott Stringer")
    old_row = make_roster_entry("1", "Aaron White", first_name="Ann", last_name="Lee", row_ref=4)
    unidentified = make_roster_entry(None, first_name="Bo", last_name="Kim", row_ref=5)
    changes = ChangeSet(
        additions=(Addition(member=ann, assignment=assignment),),
        updates=(
            GroupChangeUpdate(
                roster_entry=old_row,
                member=ann,
                assignment=assignment,
                old_label="Aaron White",
                new_label="Gene Cone & Scott Stringer",
                old_key="Aaron White",
                new_key="Gene Cone",
            ),
            MissingIdentifierUpdate(
                roster_entry=unidentified, member=bo, assignment=make_assignment("2")
            ),
        ),
        removals=(
            Removal(
                roster_entry=make_roster_entry("9", first_name="Gone", last_name="Away"),
                reason=RemovalReason.NOT_IN_DIRECTORY,
            ),
        ),
        ambiguous_matches=(
            AmbiguousMatch(
                member=bo,
                assignment=make_assignment("2"),
                candidates=(unidentified, make_roster_entry(None, row_ref=8)),
            ),
        ),
        not_grouped_additions=(NotGroupedAddition(member=bo, family_size=3),),
        not_grouped_removals=(
            NotGroupedRemoval(
                entry=make_not_grouped_entry("7", "Cy Ray"),
                reason=NotGroupedRemovalReason.LOST_REPRESENTATIVE,
                representative=ann,
            ),
        ),
    )

    lines = list(describe_changes(changes))

    assert lines == [
        "add Ann Lee (1) to Gene Cone & Scott Stringer",
        "update Ann Lee (1): Aaron White -> Gene Cone & Scott Stringer",
        "backfill id 2 on roster row 5 for Bo Kim",
        "remove Gone Away (9): not found in member directory",
        "ambiguous Bo Kim (2): matches roster rows 5, 8 by name",
        "not grouped: add Bo Kim (2) (household of 3)",
        "not grouped: remove Cy Ray (7): lost family-representative status, "
        "now represented by Ann Lee (1)",
    ]


def test_empty_change_set_has_no_lines() -> None:
    assert list(describe_changes(ChangeSet())) == []
