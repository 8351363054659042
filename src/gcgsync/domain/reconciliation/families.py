"""Family-representative selection.

A household appears once on the not-grouped list, through its highest-priority
member. Ties on role priority break on first name, then person id, so the choice
does not depend on input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .policy import ReconciliationPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gcgsync.domain.model import Member


@dataclass(frozen=True, slots=True)
class Household:
    family_id: str | None
    members: tuple[Member, ...]

    @property
    def representative(self) -> Member:
        return self.members[0]

    @property
    def size(self) -> int:
        return len(self.members)


def _family_key(member: Member) -> str | None:
    if member.family_id is None:
        return None
    family_id = member.family_id.strip()
    return family_id or None


def representative_sort_key(
    member: Member, policy: ReconciliationPolicy
) -> tuple[int, str, str]:
    return (
        policy.priority_for(member.family_role),
        member.first_name.strip().casefold(),
        member.person_id or "",
    )


def households(
    candidates: Iterable[Member],
    *,
    policy: ReconciliationPolicy | None = None,
) -> list[Household]:
    """Group ``candidates`` by family id; members without one form their own household.

    Households keep the order in which each was first seen.
    """

    policy = policy or ReconciliationPolicy()
    grouped: dict[str, list[Member]] = {}
    order: list[str | list[Member]] = []
    for member in candidates:
        family_id = _family_key(member)
        if family_id is None:
            order.append([member])
            continue
        bucket = grouped.get(family_id)
        if bucket is None:
            bucket = grouped[family_id] = []
            order.append(family_id)
        bucket.append(member)

    result: list[Household] = []
    for item in order:
        if isinstance(item, list):
            result.append(Household(None, tuple(item)))
            continue
        members = sorted(grouped[item], key=lambda m: representative_sort_key(m, policy))
        result.append(Household(item, tuple(members)))
    return result


def select_representatives(
    candidates: Iterable[Member],
    *,
    policy: ReconciliationPolicy | None = None,
) -> list[Member]:
    return [household.representative for household in households(candidates, policy=policy)]
