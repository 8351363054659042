"""Person-id lookups over the member directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gcgsync.domain.model import Member


@dataclass(frozen=True, slots=True)
class ActiveMembers:
    """Active members keyed by person id, in directory order.

    A person listed more than once keeps their first row; the repeated ids are kept
    in ``duplicate_ids``. Members without an id cannot be joined and are left out.
    """

    by_id: dict[str, Member] = field(default_factory=dict["str", "Member"])
    duplicate_ids: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.by_id)


def active_by_id(members: Iterable[Member]) -> ActiveMembers:
    by_id: dict[str, Member] = {}
    duplicates: list[str] = []
    for member in members:
        if not member.is_active or member.person_id is None:
            continue
        if member.person_id in by_id:
            if member.person_id not in duplicates:
                duplicates.append(member.person_id)
            continue
        by_id[member.person_id] = member
    return ActiveMembers(by_id, tuple(duplicates))


def directory_by_id(population: Iterable[Member]) -> dict[str, Member]:
    """One record per person id; an active record wins over an inactive one."""

    directory: dict[str, Member] = {}
    for member in population:
        if member.person_id is None:
            continue
        known = directory.get(member.person_id)
        if known is None or (not known.is_active and member.is_active):
            directory[member.person_id] = member
    return directory
