"""Exclusion set for the not-grouped list.

People on an administrative roll (elders, youth) and people whose roster note marks
them inactive are never reported as ungrouped. Missing roll categories are not
fatal: the run continues with a smaller exclusion set and reports the gap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .inactivity import KeywordInactivityClassifier
from .policy import ReconciliationPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from collections.abc import Set as AbstractSet

    from gcgsync.domain.model import RosterEntry

    from .inactivity import InactivityClassifier

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ExclusionResult:
    administrative: frozenset[str] = frozenset()
    inactive: frozenset[str] = frozenset()
    missing_categories: tuple[str, ...] = ()

    @property
    def excluded_ids(self) -> frozenset[str]:
        return self.administrative | self.inactive


def _index_categories(
    rolls: Mapping[str, AbstractSet[str]],
) -> dict[str, set[str]]:
    index: dict[str, set[str]] = {}
    for name, person_ids in rolls.items():
        index.setdefault(name.strip().casefold(), set()).update(person_ids)
    return index


def resolve_exclusions(
    rolls: Mapping[str, AbstractSet[str]],
    roster_entries: Iterable[RosterEntry],
    *,
    policy: ReconciliationPolicy | None = None,
    classifier: InactivityClassifier | None = None,
) -> ExclusionResult:
    """Collect administrative and note-inactive ids.

    ``rolls`` maps a tag category name to the person ids tagged with it; category
    names are matched against the policy case-insensitively.
    """

    policy = policy or ReconciliationPolicy()
    classifier = classifier or KeywordInactivityClassifier(policy.inactive_keywords)

    index = _index_categories(rolls)
    administrative: set[str] = set()
    missing: list[str] = []
    for category in policy.administrative_categories:
        person_ids = index.get(category.strip().casefold())
        if person_ids is None:
            log.warning("Administrative category %r not found in tag export; skipping", category)
            missing.append(category)
            continue
        administrative.update(person_ids)

    inactive = {
        entry.person_id
        for entry in roster_entries
        if entry.person_id is not None and classifier(entry.note)
    }

    log.debug(
        "Exclusions: %d administrative, %d note-inactive, %d categories missing",
        len(administrative),
        len(inactive),
        len(missing),
    )
    return ExclusionResult(
        administrative=frozenset(administrative),
        inactive=frozenset(inactive),
        missing_categories=tuple(missing),
    )


def compute_excluded_ids(
    rolls: Mapping[str, AbstractSet[str]],
    roster_entries: Iterable[RosterEntry],
    *,
    policy: ReconciliationPolicy | None = None,
    classifier: InactivityClassifier | None = None,
) -> frozenset[str]:
    return resolve_exclusions(
        rolls, roster_entries, policy=policy, classifier=classifier
    ).excluded_ids
