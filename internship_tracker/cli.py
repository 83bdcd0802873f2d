"""
Command line front end.

Each invocation loads the stored ledger, applies one command through the
LedgerService (which persists the change) and prints the result.

Usage:
    internship-tracker weeks
    internship-tracker set monday individual 2.5
    internship-tracker add-type travel --category indirect
    internship-tracker export ~/Documents
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from internship_tracker.domain.exceptions import SnapshotImportError, StorageError
from internship_tracker.domain.ledger import HourLedger
from internship_tracker.domain.models import Category, WeekData, WEEKDAYS
from internship_tracker.i18n import set_language, tr
from internship_tracker.infra.config import Settings, get_settings
from internship_tracker.infra.db import DatabaseEngine, init_db
from internship_tracker.infra.repository import create_repository
from internship_tracker.services.backup_service import BackupService
from internship_tracker.services.excel_report_service import ExcelReportService
from internship_tracker.services.ledger_service import LedgerService
from internship_tracker.services.report_service import ReportService, format_hours

logger = logging.getLogger(__name__)

DAY_CHOICES = [day.value for day in WEEKDAYS]
CATEGORY_CHOICES = [category.value for category in Category]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="internship-tracker",
        description="Log direct and indirect internship counseling hours per week."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--language", choices=["auto", "en", "de"], help="Output language")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("weeks", help="List all weeks with their totals")
    sub.add_parser("new-week", help="Add an empty week")

    p = sub.add_parser("delete-week", help="Delete a week")
    p.add_argument("week", help="Week id or name")

    p = sub.add_parser("show", help="Show the hours table for a week and day")
    p.add_argument("--week", help="Week id or name (default: most recent)")
    p.add_argument("--day", choices=DAY_CHOICES, default=DAY_CHOICES[0])

    p = sub.add_parser("set", help="Set the hours of one hour type on one day")
    p.add_argument("day", choices=DAY_CHOICES)
    p.add_argument("hour_type")
    p.add_argument("value", help="Hours; invalid or negative input is stored as 0")
    p.add_argument("--week", help="Week id or name (default: most recent)")

    p = sub.add_parser("clear", help="Reset all hours of a week to 0")
    p.add_argument("--week", help="Week id or name (default: most recent)")

    sub.add_parser("types", help="List hour types by category")

    p = sub.add_parser("add-type", help="Add an hour type")
    p.add_argument("name")
    p.add_argument("--category", choices=CATEGORY_CHOICES, default=Category.DIRECT.value)

    p = sub.add_parser("delete-type", help="Delete an hour type and its hours")
    p.add_argument("name")
    p.add_argument("--category", choices=CATEGORY_CHOICES, required=True)

    p = sub.add_parser("export", help="Export all weeks to a JSON file")
    p.add_argument("destination", nargs="?", type=Path, help="File or directory")

    p = sub.add_parser("import", help="Replace all weeks with a JSON export")
    p.add_argument("source", type=Path)

    p = sub.add_parser("report", help="Render a report from a template")
    p.add_argument("--week", help="Week id or name (default: most recent)")
    p.add_argument("--day", choices=DAY_CHOICES, default=DAY_CHOICES[0])
    p.add_argument("--template", help="Template file name")
    p.add_argument("--output", type=Path, help="Write the report to this file")

    p = sub.add_parser("excel", help="Write an Excel workbook with all weeks")
    p.add_argument("output", type=Path)

    return parser


def find_week(service: LedgerService, reference: Optional[str]) -> Optional[WeekData]:
    """Resolve a week by id or (case-insensitive) name; None means the selected week"""
    ledger = service.ledger
    if reference is None:
        return ledger.selected_week

    week = ledger.get_week(reference)
    if week is not None:
        return week
    return next((w for w in ledger.weeks if w.name.lower() == reference.lower()), None)


def _warn_if_unsaved(service: LedgerService) -> None:
    if not service.last_save_ok:
        print(tr("cli.save_failed"), file=sys.stderr)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute one parsed command against the stored ledger"""
    if settings.storage_backend == "sqlite":
        await init_db(settings.get_db_url())

    service = LedgerService(create_repository(settings), settings.preferences)
    try:
        try:
            await service.load()
        except StorageError as e:
            logger.error(f"Could not read stored ledger: {e}")
            print(tr("cli.load_failed", error=e), file=sys.stderr)
            return 1
        return await _dispatch(args, service, settings)
    finally:
        await DatabaseEngine.reset_instance()


async def _dispatch(args: argparse.Namespace, service: LedgerService, settings: Settings) -> int:
    ledger = service.ledger
    reports = ReportService()

    if args.command == "weeks":
        overview = reports.week_overview(ledger)
        if not overview:
            print(tr("cli.no_weeks"))
        for week in overview:
            marker = "*" if week['selected'] else " "
            print(f"{marker} {week['name']:<20} {week['id']:<34} "
                  f"{format_hours(week['direct']):>8} {format_hours(week['indirect']):>8} "
                  f"{format_hours(week['total']):>8}")
        return 0

    if args.command == "new-week":
        week = await service.create_week()
        print(tr("cli.week_created", name=week.name, id=week.id))
        _warn_if_unsaved(service)
        return 0

    if args.command == "types":
        for category in Category:
            print(f"{tr('category.' + category.value)}: {', '.join(ledger.types_for(category))}")
        return 0

    if args.command == "add-type":
        if not await service.add_hour_type(args.name, args.category):
            print(tr("cli.type_not_added", name=args.name), file=sys.stderr)
            return 1
        print(tr("cli.type_added", name=args.name.strip(), category=args.category))
        _warn_if_unsaved(service)
        return 0

    if args.command == "delete-type":
        if not await service.delete_hour_type(args.name, args.category):
            print(tr("cli.type_not_deleted", name=args.name, category=args.category), file=sys.stderr)
            return 1
        print(tr("cli.type_deleted", name=args.name, category=args.category))
        _warn_if_unsaved(service)
        return 0

    if args.command == "export":
        backup = BackupService(service, export_dir=settings.get_export_dir())
        path = backup.export_to_file(args.destination)
        print(tr("cli.exported", path=path))
        return 0

    if args.command == "import":
        backup = BackupService(service, export_dir=settings.get_export_dir())
        try:
            count = await backup.import_from_file(args.source)
        except (FileNotFoundError, SnapshotImportError) as e:
            print(f"{tr('cli.import_failed')}: {e}", file=sys.stderr)
            return 1
        print(tr("cli.imported", count=count, path=args.source))
        _warn_if_unsaved(service)
        return 0

    if args.command == "excel":
        path = ExcelReportService().generate_report(ledger, args.output)
        print(tr("cli.report_saved", path=path))
        return 0

    reference = getattr(args, "week", None)
    week = find_week(service, reference)

    # Read-only views render "no week" themselves when the ledger is empty
    if args.command in ("show", "report") and (week is not None or reference is None):
        return _render(args, ledger, reports, settings, week)

    # Remaining commands act on a single week
    if week is None:
        print(tr("cli.week_not_found", id=reference or "-"), file=sys.stderr)
        return 1

    if args.command == "delete-week":
        await service.delete_week(week.id)
        print(tr("cli.week_deleted", id=week.id))
        _warn_if_unsaved(service)
        return 0

    if args.command == "set":
        value = await service.set_hour(week.id, args.day, args.hour_type, args.value)
        print(tr("cli.hour_set", week=week.name, day=args.day, hour_type=args.hour_type,
                 value=format_hours(value)))
        _warn_if_unsaved(service)
        return 0

    if args.command == "clear":
        await service.clear_week(week.id)
        print(tr("cli.week_cleared", name=week.name))
        _warn_if_unsaved(service)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def _render(args: argparse.Namespace, ledger: HourLedger, reports: ReportService, settings: Settings,
            week: Optional[WeekData]) -> int:
    """Print or write the hours table; week is None when there are no weeks"""
    week_id = week.id if week else None
    if args.command == "show":
        print(reports.generate_report(ledger, week_id=week_id, day=args.day), end="")
        return 0

    template = args.template or settings.preferences.default_report_template
    output = args.output
    if output is None and settings.preferences.reports_directory:
        output = Path(settings.preferences.reports_directory) / f"hours_{week_id or 'no_week'}_{Path(template).name}"
    content = reports.generate_report(ledger, template, week_id=week_id, day=args.day, output_file=output)
    if output:
        print(tr("cli.report_saved", path=output))
    else:
        print(content, end="")
    return 0


def main(argv=None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    set_language(args.language or settings.preferences.language)

    return asyncio.run(run(args, settings))
