"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gcgsync.adapters.sqlalchemy.store import SqlAlchemyPersistedStateStore
from gcgsync.adapters.sqlalchemy.unit_of_work import is_started, startup
from gcgsync.adapters.workbook import (
    WorkbookMemberDirectory,
    WorkbookPersistedStateStore,
    WorkbookTagExport,
    find_latest_export,
    read_member_directory,
    read_tag_export,
)
from gcgsync.domain.model import MembershipStatus, PersistedSnapshot, TruthSnapshot
from gcgsync.domain.ports.loading import SourceErrorKind, SourceFailure, unwrap
from gcgsync.domain.reconciliation import (
    ReconciliationEngine,
    ReconciliationPolicy,
    participation,
    summarize_groups,
)

if TYPE_CHECKING:
    from pathlib import Path

    from gcgsync.adapters.sqlalchemy.store import TrackingUnitOfWorkFactory
    from gcgsync.config.exports import ExportConfig
    from gcgsync.config.tracking import TrackingSheetConfig
    from gcgsync.domain.model import ChangeSet, Member
    from gcgsync.domain.ports.exports import RosterExportProvider, TagExportProvider
    from gcgsync.domain.ports.persistence import PersistedStateStore


log = getLogger(__name__)


@dataclass(slots=True)
class TruthSources:
    active: RosterExportProvider
    tags: TagExportProvider
    inactive: RosterExportProvider | None = None


def build_workbook_sources(
    config: ExportConfig, *, policy: ReconciliationPolicy | None = None
) -> TruthSources:
    delimiter = (policy or ReconciliationPolicy()).co_leader_delimiter
    return TruthSources(
        active=WorkbookMemberDirectory(config, MembershipStatus.ACTIVE),
        inactive=WorkbookMemberDirectory(config, MembershipStatus.INACTIVE),
        tags=WorkbookTagExport(config, delimiter=delimiter),
    )


def load_truth_snapshot(sources: TruthSources) -> TruthSnapshot:
    """Load both directory populations and the tag export.

    The active export and the tag export are required. A missing inactive export is
    recorded in ``missing_sources`` and the run continues without it.
    """

    active = unwrap(sources.active.load())
    tags = unwrap(sources.tags.load())

    inactive_members: tuple[Member, ...] = ()
    missing: list[str] = []
    if sources.inactive is not None:
        result = sources.inactive.load()
        if isinstance(result, SourceFailure):
            if result.kind is not SourceErrorKind.MISSING_SOURCE:
                raise result.to_error()
            log.warning("Inactive member export unavailable (%s); continuing", result.describe())
            missing.append(result.source)
        else:
            inactive_members = result.value.members

    return TruthSnapshot(
        members=active.members + inactive_members,
        assignments=tags.assignments,
        rolls=tags.rolls,
        missing_sources=tuple(missing),
    )


def load_persisted_snapshot(store: PersistedStateStore) -> PersistedSnapshot:
    return PersistedSnapshot(roster=store.load_roster(), not_grouped=store.load_not_grouped())


def database_store(
    unit_of_work_factory: TrackingUnitOfWorkFactory | None = None,
) -> SqlAlchemyPersistedStateStore:
    """The database-backed store, starting the adapter on first use."""

    if unit_of_work_factory is not None:
        return SqlAlchemyPersistedStateStore(unit_of_work_factory)
    if not is_started():
        startup()
    return SqlAlchemyPersistedStateStore()


def preview_changes(
    *,
    sources: TruthSources,
    store: PersistedStateStore,
    policy: ReconciliationPolicy | None = None,
) -> ChangeSet:
    """Compute what should change on the tracking roster, without changing anything."""

    effective_policy = policy or ReconciliationPolicy()
    truth = load_truth_snapshot(sources)
    persisted = load_persisted_snapshot(store)
    log.info(
        "Starting preview: members=%d, assignments=%d, roster=%d, not_grouped=%d",
        len(truth.members),
        len(truth.assignments),
        len(persisted.roster),
        len(persisted.not_grouped),
    )
    changes = ReconciliationEngine(policy=effective_policy).reconcile(truth, persisted)
    for group in summarize_groups(truth, changes, policy=effective_policy):
        log.info(
            "Group %s: %d members, %d additions, %d updates, %d removals",
            group.display_name,
            group.members,
            group.additions,
            group.updates,
            group.removals,
        )
    rate = participation(truth, changes)
    log.info(
        "In groups: %d of %d active members (%.1f%%), not grouped: %d",
        rate.grouped,
        rate.active,
        rate.rate,
        rate.not_grouped,
    )
    if changes.diagnostics.degraded:
        log.warning(
            "Preview ran with degraded inputs: missing sources=%s, missing categories=%s",
            list(changes.diagnostics.missing_sources),
            list(changes.diagnostics.missing_categories),
        )
    return changes


def import_tracking_sheet(
    path: Path,
    *,
    config: TrackingSheetConfig | None = None,
    unit_of_work_factory: TrackingUnitOfWorkFactory | None = None,
) -> tuple[int, int]:
    """Copy the roster and not-grouped sheets of a tracking workbook into the database."""

    workbook = (
        WorkbookPersistedStateStore(path, config)
        if config is not None
        else WorkbookPersistedStateStore(path)
    )
    snapshot = load_persisted_snapshot(workbook)
    return database_store(unit_of_work_factory).replace_all(snapshot)


@dataclass(frozen=True, slots=True)
class HealthCheckStep:
    name: str
    ok: bool
    detail: str
    required: bool = True


@dataclass(frozen=True, slots=True)
class HealthReport:
    steps: tuple[HealthCheckStep, ...]

    @property
    def healthy(self) -> bool:
        return all(step.ok for step in self.steps if step.required)


def _check_directory(
    config: ExportConfig, status: MembershipStatus, *, required: bool
) -> HealthCheckStep:
    name = f"{status.value} members"
    pattern = WorkbookMemberDirectory(config, status).pattern
    located = find_latest_export(config.export_dir, pattern, extensions=config.extensions)
    if isinstance(located, SourceFailure):
        return HealthCheckStep(name, False, located.describe(), required)
    loaded = read_member_directory(
        located.value, status=status, columns=config.directory_columns
    )
    if isinstance(loaded, SourceFailure):
        return HealthCheckStep(name, False, loaded.describe(), required)
    return HealthCheckStep(
        name, True, f"{len(loaded.value.members)} members in {located.value.name}", required
    )


def _check_tags(config: ExportConfig, policy: ReconciliationPolicy) -> HealthCheckStep:
    located = find_latest_export(
        config.export_dir, config.tags_pattern, extensions=config.extensions
    )
    if isinstance(located, SourceFailure):
        return HealthCheckStep("tags", False, located.describe())
    loaded = read_tag_export(located.value, config=config, delimiter=policy.co_leader_delimiter)
    if isinstance(loaded, SourceFailure):
        return HealthCheckStep("tags", False, loaded.describe())
    export = loaded.value
    groups = {assignment.group_key for assignment in export.assignments.values()}
    rolls = {name.casefold() for name in export.rolls}
    missing = [
        category
        for category in policy.administrative_categories
        if category.strip().casefold() not in rolls
    ]
    detail = (
        f"{len(groups)} groups, {len(export.assignments)} assignments, "
        f"{len(export.rolls)} roll tabs in {located.value.name}"
    )
    if missing:
        detail = f"{detail}; missing rolls: {', '.join(missing)}"
    return HealthCheckStep("tags", True, detail)


def health_check(
    config: ExportConfig, *, policy: ReconciliationPolicy | None = None
) -> HealthReport:
    """Locate and parse every export, reporting each step instead of raising."""

    effective_policy = policy or ReconciliationPolicy()
    directory_ok = config.export_dir.is_dir()
    steps = [
        HealthCheckStep(
            "export directory",
            directory_ok,
            str(config.export_dir) if directory_ok else f"{config.export_dir} does not exist",
        )
    ]
    if directory_ok:
        steps.append(_check_directory(config, MembershipStatus.ACTIVE, required=True))
        steps.append(_check_directory(config, MembershipStatus.INACTIVE, required=False))
        steps.append(_check_tags(config, effective_policy))

    report = HealthReport(tuple(steps))
    log.info("Health check %s", "passed" if report.healthy else "failed")
    return report
