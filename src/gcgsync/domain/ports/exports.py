"""Ports for reading the member directory and tag exports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gcgsync.domain.model import GroupAssignment, Member

    from .loading import LoadResult


@dataclass(slots=True)
class MemberExport:
    """Members read from one directory export."""

    members: tuple[Member, ...]
    source: str
    skipped_rows: int = 0


@dataclass(slots=True)
class TagExport:
    """Group assignments and roll tabs read from the tag export."""

    assignments: dict[str, GroupAssignment] = field(default_factory=dict["str", "GroupAssignment"])
    rolls: dict[str, frozenset[str]] = field(default_factory=dict["str", "frozenset[str]"])
    # person ids tagged into more than one group; the first tab read wins
    duplicate_assignments: tuple[str, ...] = ()
    source: str = ""


@runtime_checkable
class RosterExportProvider(Protocol):
    """One population (active or inactive) of the member directory."""

    def load(self) -> LoadResult[MemberExport]: ...


@runtime_checkable
class TagExportProvider(Protocol):
    def load(self) -> LoadResult[TagExport]: ...


__all__ = ["MemberExport", "RosterExportProvider", "TagExport", "TagExportProvider"]
