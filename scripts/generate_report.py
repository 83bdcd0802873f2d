"""
Script to generate hour reports based on a YAML configuration.

Example config:
    template: hours_summary.md
    week: Week 3            # id or name, default: most recent week
    day: wednesday          # default: monday
    output_path: reports/week3.md
    excel_path: reports/all_weeks.xlsx
"""

import sys
import yaml
import asyncio
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from internship_tracker.cli import find_week
from internship_tracker.domain.models import DayOfWeek
from internship_tracker.infra.config import get_settings
from internship_tracker.infra.db import DatabaseEngine, init_db
from internship_tracker.infra.repository import create_repository
from internship_tracker.services.excel_report_service import ExcelReportService
from internship_tracker.services.ledger_service import LedgerService
from internship_tracker.services.report_service import ReportService


class ReportConfiguration(BaseModel):
    """Configuration for one report run, usually loaded from a YAML file."""
    template: str = Field(default="hours_summary.txt", description="Template file name")
    week: Optional[str] = Field(None, description="Week id or name")
    day: DayOfWeek = DayOfWeek.MONDAY
    output_path: Optional[str] = Field(None, description="Path to save the rendered report")
    excel_path: Optional[str] = Field(None, description="Optional path for an Excel workbook")


async def main():
    if len(sys.argv) < 2:
        print("Usage: python generate_report.py <config_file.yaml>")
        sys.exit(1)

    config_path = Path(sys.argv[1])
    if not config_path.exists():
        print(f"Error: Config file '{config_path}' not found.")
        sys.exit(1)

    print(f"Loading configuration from {config_path}...")
    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = ReportConfiguration(**config_data)
    except Exception as e:
        print(f"Error parsing configuration: {e}")
        sys.exit(1)

    settings = get_settings()
    if settings.storage_backend == "sqlite":
        await init_db(settings.get_db_url())

    service = LedgerService(create_repository(settings), settings.preferences)
    ledger = await service.load()

    week = find_week(service, config.week)
    if week is None:
        print(f"Error: Week '{config.week}' not found.")
        sys.exit(1)

    # Determine output path
    if config.output_path:
        output_file = Path(config.output_path)
    else:
        output_file = config_path.parent / f"report_{week.id}_{config.template}"

    ReportService().generate_report(ledger, config.template, week_id=week.id, day=config.day,
                                    output_file=output_file)
    print(f"Report successfully saved to: {output_file.absolute()}")

    if config.excel_path:
        excel_file = ExcelReportService().generate_report(ledger, config.excel_path)
        print(f"Excel workbook saved to: {excel_file}")

    await DatabaseEngine.reset_instance()


if __name__ == "__main__":
    asyncio.run(main())
