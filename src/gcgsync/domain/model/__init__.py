"""Domain records for roster reconciliation."""

from __future__ import annotations

from .changes import (
    Addition,
    AmbiguousMatch,
    ChangeSet,
    Diagnostics,
    ExportIncomplete,
    GroupChangeUpdate,
    InactiveGrouped,
    MembershipUpdate,
    MissingIdentifierUpdate,
    NotGroupedAddition,
    NotGroupedRemoval,
    Removal,
    SyntheticMember,
)
from .enums import (
    FamilyRole,
    MembershipStatus,
    NotGroupedRemovalReason,
    RemovalReason,
    UpdateKind,
)
from .records import GroupAssignment, Member, NotGroupedEntry, RosterEntry
from .snapshots import PersistedSnapshot, TruthSnapshot

__all__ = [
    "Addition",
    "AmbiguousMatch",
    "ChangeSet",
    "Diagnostics",
    "ExportIncomplete",
    "FamilyRole",
    "GroupAssignment",
    "GroupChangeUpdate",
    "InactiveGrouped",
    "Member",
    "MembershipStatus",
    "MembershipUpdate",
    "MissingIdentifierUpdate",
    "NotGroupedAddition",
    "NotGroupedEntry",
    "NotGroupedRemoval",
    "NotGroupedRemovalReason",
    "PersistedSnapshot",
    "Removal",
    "RemovalReason",
    "RosterEntry",
    "SyntheticMember",
    "TruthSnapshot",
    "UpdateKind",
]
