"""Member directory export reader (active and inactive populations)."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from gcgsync.config.exports import DirectoryColumns, ExportConfig
from gcgsync.domain.model import FamilyRole, Member, MembershipStatus
from gcgsync.domain.ports.exports import MemberExport
from gcgsync.domain.ports.loading import Loaded, SourceErrorKind, SourceFailure

from .locator import find_latest_export
from .schema import DirectoryRow
from .sheets import WORKBOOK_READ_ERRORS, is_blank_row, locate_columns, open_workbook, row_values

if TYPE_CHECKING:
    from pathlib import Path

    from gcgsync.domain.ports.loading import LoadResult

log = getLogger(__name__)

_REQUIRED_FIELDS = ("person_id", "first_name", "last_name")


def _parse_role(label: str | None, unknown: set[str]) -> FamilyRole | None:
    if label is None:
        return None
    role = FamilyRole.from_label(label)
    if role is None:
        unknown.add(label)
        return FamilyRole.UNASSIGNED
    return role


def read_member_directory(
    path: Path,
    *,
    status: MembershipStatus = MembershipStatus.ACTIVE,
    columns: DirectoryColumns | None = None,
) -> LoadResult[MemberExport]:
    """Read members from the first worksheet of a directory export.

    The first row is the header. Rows without a person id are skipped.
    """

    columns = columns or DirectoryColumns()
    source = path.name
    try:
        with open_workbook(path) as workbook:
            sheet = workbook.worksheets[0]
            rows = list(sheet.iter_rows(values_only=True))
    except WORKBOOK_READ_ERRORS as exc:
        return SourceFailure(kind=SourceErrorKind.UNREADABLE, source=source, detail=str(exc))

    header = rows[0] if rows else ()
    located, missing = locate_columns(header, asdict(columns))
    for field_name in _REQUIRED_FIELDS:
        if field_name not in located:
            return SourceFailure(
                kind=SourceErrorKind.MISSING_COLUMN,
                source=source,
                column=getattr(columns, field_name),
            )
    if missing:
        log.debug("%s has no optional columns %s", source, ", ".join(missing))

    members: list[Member] = []
    unknown_roles: set[str] = set()
    skipped = 0
    for row in rows[1:]:
        if is_blank_row(row):
            continue
        try:
            parsed = DirectoryRow.model_validate(row_values(row, located))
        except ValidationError:
            skipped += 1
            continue
        members.append(
            Member(
                person_id=parsed.person_id,
                first_name=parsed.first_name or "",
                last_name=parsed.last_name or "",
                nickname=parsed.nickname,
                family_id=parsed.family_id,
                family_role=_parse_role(parsed.family_role, unknown_roles),
                status=status,
            )
        )

    if unknown_roles:
        log.warning(
            "%s: unrecognised family roles treated as unassigned: %s",
            source,
            ", ".join(sorted(unknown_roles)),
        )
    if skipped:
        log.info("%s: skipped %d rows without a person id", source, skipped)
    log.info("Read %d %s members from %s", len(members), status.value, source)
    return Loaded(MemberExport(members=tuple(members), source=source, skipped_rows=skipped))


@dataclass(slots=True)
class WorkbookMemberDirectory:
    """Newest directory export of one population in the export directory."""

    config: ExportConfig
    status: MembershipStatus = MembershipStatus.ACTIVE
    columns: DirectoryColumns = field(init=False)

    def __post_init__(self) -> None:
        self.columns = self.config.directory_columns

    @property
    def pattern(self) -> str:
        if self.status is MembershipStatus.INACTIVE:
            return self.config.inactive_pattern
        return self.config.active_pattern

    def load(self) -> LoadResult[MemberExport]:
        located = find_latest_export(
            self.config.export_dir, self.pattern, extensions=self.config.extensions
        )
        if isinstance(located, SourceFailure):
            return located
        return read_member_directory(located.value, status=self.status, columns=self.columns)
