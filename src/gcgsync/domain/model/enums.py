"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class MembershipStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    # tagged into a group but absent from the member directory
    SYNTHETIC = "synthetic"


class FamilyRole(StrEnum):
    """Household roles as labelled by the member directory export."""

    HEAD_OF_HOUSEHOLD = "Head of Household"
    SPOUSE = "Spouse"
    ADULT = "Adult"
    CHILD = "Child"
    UNASSIGNED = "Unassigned"

    @classmethod
    def from_label(cls, label: str | None) -> FamilyRole | None:
        """Parse a directory label; ``None`` when blank or unrecognised."""

        if label is None:
            return None
        wanted = " ".join(label.replace("_", " ").replace("-", " ").split()).casefold()
        if not wanted:
            return None
        for role in cls:
            if role.value.casefold() == wanted:
                return role
        return None


class UpdateKind(StrEnum):
    GROUP_CHANGE = "group_change"
    MISSING_IDENTIFIER = "missing_identifier"


class RemovalReason(StrEnum):
    INACTIVE_MEMBER = "marked inactive in member directory"
    NOT_IN_DIRECTORY = "not found in member directory"


class NotGroupedRemovalReason(StrEnum):
    NOW_GROUPED = "now has a group assignment"
    NOT_ACTIVE = "no longer an active member"
    EXCLUDED = "now excluded as inactive/administrative"
    LOST_REPRESENTATIVE = "lost family-representative status"
