"""Reconciliation of the tracking roster against the member and tag exports.

Stages, each a pure function of its inputs and the policy:
1) normalize group labels and names (``normalize``)
2) diff grouped members against roster rows (``engine.reconcile_memberships``)
3) collect administrative and note-inactive exclusions (``exclusions``)
4) pick one representative per household (``families``)
5) diff the not-grouped list (``not_grouped``)

``summary`` counts changes per group and group participation for reporting.

``ReconciliationEngine`` runs them in order and returns a ``ChangeSet``. Nothing here
performs I/O; loading and writing live in the adapters.
"""

from __future__ import annotations

from .engine import MembershipDiff, ReconciliationEngine, reconcile, reconcile_memberships
from .exclusions import ExclusionResult, compute_excluded_ids, resolve_exclusions
from .families import Household, households, select_representatives
from .inactivity import InactivityClassifier, KeywordInactivityClassifier, is_inactive
from .normalize import name_keys, normalize_full_name, normalize_group_key
from .not_grouped import NotGroupedDiff, diff_not_grouped
from .policy import (
    DEFAULT_ADMINISTRATIVE_CATEGORIES,
    DEFAULT_INACTIVE_KEYWORDS,
    DEFAULT_ROLE_PRIORITY,
    ReconciliationPolicy,
)
from .population import ActiveMembers, active_by_id, directory_by_id
from .summary import GroupSummary, Participation, participation, summarize_groups

__all__ = [
    "DEFAULT_ADMINISTRATIVE_CATEGORIES",
    "DEFAULT_INACTIVE_KEYWORDS",
    "DEFAULT_ROLE_PRIORITY",
    "ActiveMembers",
    "ExclusionResult",
    "GroupSummary",
    "Household",
    "InactivityClassifier",
    "KeywordInactivityClassifier",
    "MembershipDiff",
    "NotGroupedDiff",
    "Participation",
    "ReconciliationEngine",
    "ReconciliationPolicy",
    "active_by_id",
    "compute_excluded_ids",
    "diff_not_grouped",
    "directory_by_id",
    "households",
    "is_inactive",
    "name_keys",
    "normalize_full_name",
    "normalize_group_key",
    "participation",
    "reconcile",
    "reconcile_memberships",
    "resolve_exclusions",
    "select_representatives",
    "summarize_groups",
]
