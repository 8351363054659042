from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from gcgsync.adapters.workbook import WorkbookPersistedStateStore
from gcgsync.app import (
    build_workbook_sources,
    database_store,
    health_check,
    import_tracking_sheet,
    preview_changes,
)
from gcgsync.config import (
    ConfigurationError,
    configure_logging,
    get_export_config,
    get_reconciliation_policy,
    get_tracking_sheet_config,
    level_for_verbosity,
)
from gcgsync.ui.report import describe_changes

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile the GCG tracking roster")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log per-record findings at debug level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser("preview", help="Show what would change on the roster")
    preview.add_argument(
        "--tracking-sheet",
        type=str,
        help="Tracking workbook to compare against (defaults to the imported database copy)",
    )
    preview.add_argument(
        "--export-dir",
        type=str,
        help="Directory holding the member and tag exports (defaults to GCGSYNC_EXPORT_DIR)",
    )

    import_sheet = subparsers.add_parser(
        "import-sheet", help="Import a tracking workbook into the database"
    )
    import_sheet.add_argument("path", type=str, help="Tracking workbook (.xlsx)")

    check = subparsers.add_parser("check", help="Verify that the exports can be found and read")
    check.add_argument(
        "--export-dir",
        type=str,
        help="Directory holding the member and tag exports (defaults to GCGSYNC_EXPORT_DIR)",
    )

    return parser.parse_args(list(argv))


def _existing_file(value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_file():
        raise ValueError(f"File not found: {value}")
    return path


def _run_preview(args: argparse.Namespace) -> None:
    policy = get_reconciliation_policy()
    export_config = get_export_config(export_dir=args.export_dir)
    if args.tracking_sheet:
        store = WorkbookPersistedStateStore(
            _existing_file(args.tracking_sheet), get_tracking_sheet_config()
        )
    else:
        store = database_store()

    changes = preview_changes(
        sources=build_workbook_sources(export_config, policy=policy),
        store=store,
        policy=policy,
    )
    for line in describe_changes(changes):
        log.info(line)
    summary = ", ".join(f"{name}={count}" for name, count in changes.summary().items())
    log.info("Preview finished: %s", summary)
    if changes.is_empty:
        log.info("Roster is up to date")


def _run_check(args: argparse.Namespace) -> bool:
    report = health_check(
        get_export_config(export_dir=args.export_dir), policy=get_reconciliation_policy()
    )
    for step in report.steps:
        level = logging.INFO if step.ok else (logging.ERROR if step.required else logging.WARNING)
        log.log(level, "%s %s: %s", "ok" if step.ok else "FAIL", step.name, step.detail)
    return report.healthy


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=level_for_verbosity(parsed_args.verbose))

    healthy = True
    try:
        if parsed_args.command == "preview":
            _run_preview(parsed_args)
        elif parsed_args.command == "import-sheet":
            import_path = _existing_file(parsed_args.path)
            roster_rows, not_grouped_rows = import_tracking_sheet(
                import_path, config=get_tracking_sheet_config()
            )
            log.info(
                "Imported %d roster rows and %d not-grouped rows from %s",
                roster_rows,
                not_grouped_rows,
                import_path.name,
            )
        elif parsed_args.command == "check":
            healthy = _run_check(parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ConfigurationError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)

    if not healthy:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
