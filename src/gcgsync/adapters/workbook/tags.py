"""Tag export reader.

The tag export holds one worksheet per tag. Group tabs are named after their leaders,
``"Gcg Gene Cone  Scott Stringer"`` for a group led by Gene Cone with co-leader Scott
Stringer (the export drops the ampersand and leaves a double space). Every other tab is
a roll tab, such as ``"Eldership Roll"``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from gcgsync.config.exports import (
    DEFAULT_ADMIN_TAB_TOKENS,
    DEFAULT_GROUP_TAB_PREFIX,
    ExportConfig,
    TagColumns,
)
from gcgsync.domain.model import GroupAssignment
from gcgsync.domain.ports.exports import TagExport
from gcgsync.domain.ports.loading import Loaded, SourceErrorKind, SourceFailure

from .locator import find_latest_export
from .schema import TagRow
from .sheets import WORKBOOK_READ_ERRORS, is_blank_row, locate_columns, open_workbook, row_values

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from gcgsync.domain.ports.loading import LoadResult

log = getLogger(__name__)

_CO_LEADER_SEPARATOR = "  "


def _is_name(part: str) -> bool:
    words = part.split()
    return len(words) >= 2 and all(len(word) >= 2 and word[0].isupper() for word in words)


def is_group_tab(
    name: str,
    *,
    prefix: str = DEFAULT_GROUP_TAB_PREFIX,
    admin_tokens: Sequence[str] = DEFAULT_ADMIN_TAB_TOKENS,
) -> bool:
    """Whether a tab name is a real small group rather than an administrative tag.

    The name after the prefix must hold no administrative token (substring match,
    case-insensitive) and one or two leader names of at least two capitalized words.
    """

    if not name.startswith(prefix):
        return False
    names = name[len(prefix) :]
    lowered = names.casefold()
    if any(token.casefold() in lowered for token in admin_tokens):
        return False
    parts = names.split(_CO_LEADER_SEPARATOR)
    if len(parts) > 2:
        return False
    return all(_is_name(part) for part in parts)


def extract_leaders(name: str, *, prefix: str = DEFAULT_GROUP_TAB_PREFIX) -> tuple[str, str | None]:
    names = name[len(prefix) :] if name.startswith(prefix) else name
    leader, _, co_leader = names.strip().partition(_CO_LEADER_SEPARATOR)
    return leader.strip(), co_leader.strip() or None


@dataclass(slots=True)
class _TagExportBuilder:
    source: str
    delimiter: str
    assignments: dict[str, GroupAssignment]
    rolls: dict[str, frozenset[str]]
    duplicates: list[str]

    def add_group(self, tab: str, rows: list[TagRow], *, prefix: str) -> None:
        leader, co_leader = extract_leaders(tab, prefix=prefix)
        for row in rows:
            assignment = GroupAssignment.for_leaders(
                row.person_id,
                leader=leader,
                co_leader=co_leader,
                delimiter=self.delimiter,
                first_name=row.first_name or "",
                last_name=row.last_name or "",
                source_tab=tab,
            )
            existing = self.assignments.get(row.person_id)
            if existing is not None:
                log.warning(
                    "Person %s is tagged in %r and %r; keeping %r",
                    row.person_id,
                    existing.source_tab,
                    tab,
                    existing.source_tab,
                )
                self.duplicates.append(row.person_id)
                continue
            self.assignments[row.person_id] = assignment

    def add_roll(self, tab: str, rows: list[TagRow]) -> None:
        self.rolls[tab.strip()] = frozenset(row.person_id for row in rows)

    def build(self) -> TagExport:
        return TagExport(
            assignments=self.assignments,
            rolls=self.rolls,
            duplicate_assignments=tuple(self.duplicates),
            source=self.source,
        )


def _tab_rows(
    rows: list[tuple[object, ...]], columns: TagColumns
) -> list[TagRow] | None:
    """Parse a tab; ``None`` when it has rows but no person-id column."""

    if not rows:
        return []
    located, _missing = locate_columns(rows[0], asdict(columns))
    if "person_id" not in located:
        return None
    parsed: list[TagRow] = []
    for row in rows[1:]:
        if is_blank_row(row):
            continue
        try:
            parsed.append(TagRow.model_validate(row_values(row, located)))
        except ValidationError:
            continue
    return parsed


def read_tag_export(
    path: Path,
    *,
    config: ExportConfig | None = None,
    delimiter: str = "&",
) -> LoadResult[TagExport]:
    prefix = config.group_tab_prefix if config else DEFAULT_GROUP_TAB_PREFIX
    admin_tokens = config.admin_tab_tokens if config else DEFAULT_ADMIN_TAB_TOKENS
    columns = config.tag_columns if config else TagColumns()
    source = path.name

    builder = _TagExportBuilder(
        source=source, delimiter=delimiter, assignments={}, rolls={}, duplicates=[]
    )
    group_tabs = 0
    try:
        with open_workbook(path) as workbook:
            for sheet in workbook.worksheets:
                tab = sheet.title
                grouped = is_group_tab(tab, prefix=prefix, admin_tokens=admin_tokens)
                rows = _tab_rows(list(sheet.iter_rows(values_only=True)), columns)
                if rows is None:
                    if grouped:
                        return SourceFailure(
                            kind=SourceErrorKind.MISSING_COLUMN,
                            source=f"{source} [{tab}]",
                            column=columns.person_id,
                        )
                    log.debug("Roll tab %r has no %r column; ignored", tab, columns.person_id)
                    continue
                if grouped:
                    group_tabs += 1
                    builder.add_group(tab, rows, prefix=prefix)
                else:
                    builder.add_roll(tab, rows)
    except WORKBOOK_READ_ERRORS as exc:
        return SourceFailure(kind=SourceErrorKind.UNREADABLE, source=source, detail=str(exc))

    export = builder.build()
    log.info(
        "Read %d group assignments from %d group tabs and %d roll tabs in %s",
        len(export.assignments),
        group_tabs,
        len(export.rolls),
        source,
    )
    return Loaded(export)


@dataclass(slots=True)
class WorkbookTagExport:
    config: ExportConfig
    delimiter: str = "&"

    def load(self) -> LoadResult[TagExport]:
        located = find_latest_export(
            self.config.export_dir, self.config.tags_pattern, extensions=self.config.extensions
        )
        if isinstance(located, SourceFailure):
            return located
        return read_tag_export(located.value, config=self.config, delimiter=self.delimiter)
