"""Value records reconstructed from the exports and the tracking roster.

All records are frozen: a reconciliation run builds them once from its two snapshots
and never mutates them. Required fields are validated on construction so the diff
stages can rely on them without re-checking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gcgsync.domain.errors import InvalidRecordError
from gcgsync.domain.model.enums import MembershipStatus

if TYPE_CHECKING:
    from gcgsync.domain.model.enums import FamilyRole


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_identifier(kind: str, person_id: str | None, *, required: bool) -> None:
    if person_id is None:
        if required:
            raise InvalidRecordError(f"{kind} requires a person id")
        return
    if not person_id.strip():
        raise InvalidRecordError(f"{kind} person id must be None or non-blank, got {person_id!r}")


def _full_name(first_name: str, last_name: str) -> str:
    return " ".join(part for part in (first_name.strip(), last_name.strip()) if part)


@dataclass(frozen=True, slots=True, kw_only=True)
class Member:
    """A person from the member directory (or synthesised from a group tag)."""

    person_id: str | None
    first_name: str
    last_name: str
    nickname: str | None = None
    family_id: str | None = None
    family_role: FamilyRole | None = None
    status: MembershipStatus = MembershipStatus.ACTIVE

    def __post_init__(self) -> None:
        _check_identifier("Member", self.person_id, required=False)
        if self.person_id is None and (_is_blank(self.first_name) or _is_blank(self.last_name)):
            raise InvalidRecordError(
                "Member without a person id needs both first and last name for name matching"
            )

    @property
    def full_name(self) -> str:
        return _full_name(self.first_name, self.last_name)

    @property
    def is_active(self) -> bool:
        return self.status is MembershipStatus.ACTIVE


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupAssignment:
    """One person's group as recorded by the tag export."""

    person_id: str
    group_key: str
    group_display_name: str
    leader: str
    co_leader: str | None = None
    first_name: str = ""
    last_name: str = ""
    source_tab: str | None = None

    def __post_init__(self) -> None:
        _check_identifier("GroupAssignment", self.person_id, required=True)
        if _is_blank(self.group_key):
            raise InvalidRecordError(f"GroupAssignment for {self.person_id} has no group key")

    @classmethod
    def for_leaders(
        cls,
        person_id: str,
        *,
        leader: str,
        co_leader: str | None = None,
        delimiter: str = "&",
        first_name: str = "",
        last_name: str = "",
        source_tab: str | None = None,
    ) -> GroupAssignment:
        """Build an assignment whose display name joins leader and co-leader."""

        leader = leader.strip()
        co_leader = co_leader.strip() if co_leader and co_leader.strip() else None
        display = f"{leader} {delimiter} {co_leader}" if co_leader else leader
        return cls(
            person_id=person_id,
            group_key=leader,
            group_display_name=display,
            leader=leader,
            co_leader=co_leader,
            first_name=first_name,
            last_name=last_name,
            source_tab=source_tab,
        )

    @property
    def full_name(self) -> str:
        return _full_name(self.first_name, self.last_name)


@dataclass(frozen=True, slots=True, kw_only=True)
class RosterEntry:
    """A row of the tracking roster.

    ``row_ref`` is an opaque handle for whoever writes changes back (a sheet row
    number, a primary key); reconciliation only passes it through.
    """

    person_id: str | None
    first_name: str
    last_name: str
    group_label_raw: str = ""
    note: str = ""
    row_ref: object | None = None

    def __post_init__(self) -> None:
        _check_identifier("RosterEntry", self.person_id, required=False)
        if _is_blank(self.first_name) or _is_blank(self.last_name):
            raise InvalidRecordError("RosterEntry requires both first and last name")

    @property
    def full_name(self) -> str:
        return _full_name(self.first_name, self.last_name)


@dataclass(frozen=True, slots=True, kw_only=True)
class NotGroupedEntry:
    """A row of the "not currently grouped" list."""

    person_id: str
    display_name: str
    family_id: str | None = None
    family_role: FamilyRole | None = None
    row_ref: object | None = None

    def __post_init__(self) -> None:
        _check_identifier("NotGroupedEntry", self.person_id, required=True)
