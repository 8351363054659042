"""Business-rule settings shared by every reconciliation stage.

The policy is passed explicitly into each stage; nothing in the reconciliation
package reads configuration from the environment. ``gcgsync.config.reconciliation``
builds one from environment overrides for the CLI.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from gcgsync.domain.model import FamilyRole

DEFAULT_INACTIVE_KEYWORDS: Final[tuple[str, ...]] = (
    "inactive",
    "moved away",
    "no longer active",
    "left church",
    "transferred",
)
DEFAULT_ADMINISTRATIVE_CATEGORIES: Final[tuple[str, ...]] = (
    "Eldership Roll",
    "Youth Ministry Roll",
)
DEFAULT_ROLE_PRIORITY: Final[Mapping[FamilyRole, int]] = MappingProxyType(
    {
        FamilyRole.HEAD_OF_HOUSEHOLD: 1,
        FamilyRole.SPOUSE: 2,
        FamilyRole.ADULT: 3,
        FamilyRole.CHILD: 4,
        FamilyRole.UNASSIGNED: 5,
    }
)
DEFAULT_UNKNOWN_ROLE_PRIORITY: Final[int] = 5


def _default_role_priority() -> dict[FamilyRole, int]:
    return dict(DEFAULT_ROLE_PRIORITY)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationPolicy:
    co_leader_delimiter: str = "&"
    # group label meaning "removed" on the tracking roster
    removed_sentinel: str = "x"
    inactive_keywords: tuple[str, ...] = DEFAULT_INACTIVE_KEYWORDS
    administrative_categories: tuple[str, ...] = DEFAULT_ADMINISTRATIVE_CATEGORIES
    role_priority: Mapping[FamilyRole, int] = field(default_factory=_default_role_priority)
    unknown_role_priority: int = DEFAULT_UNKNOWN_ROLE_PRIORITY

    def __post_init__(self) -> None:
        if not self.co_leader_delimiter.strip():
            raise ValueError("co_leader_delimiter must not be blank")
        if any(not keyword.strip() for keyword in self.inactive_keywords):
            raise ValueError("inactive_keywords must not contain blank entries")

    def priority_for(self, role: FamilyRole | None) -> int:
        if role is None:
            return self.unknown_role_priority
        return self.role_priority.get(role, self.unknown_role_priority)

    def is_placeholder_label(self, label: str | None) -> bool:
        """Blank labels and the removed sentinel record no group at all."""

        if label is None:
            return True
        stripped = label.strip()
        return not stripped or stripped.casefold() == self.removed_sentinel.casefold()
