"""
Excel Report Service using XlsxWriter.
Generates an Excel workbook with a Summary dashboard and one sheet per week.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Set, Union

import xlsxwriter

from internship_tracker.domain.ledger import HourLedger, daily_total, type_total, weekly_total
from internship_tracker.domain.models import Category, WeekData, WEEKDAYS
from internship_tracker.i18n import tr
from internship_tracker.services.report_service import day_name, display_name

logger = logging.getLogger(__name__)

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")
MAX_SHEET_NAME = 31


def sheet_name(name: str, used: Set[str]) -> str:
    """
    Make a worksheet name Excel accepts: no []:*?/\\, at most 31
    characters, unique (case-insensitive) within the workbook.
    """
    base = _INVALID_SHEET_CHARS.sub("_", name).strip("'").strip() or "Sheet"
    base = base[:MAX_SHEET_NAME]
    candidate = base
    counter = 2
    while candidate.lower() in used:
        suffix = f" ({counter})"
        candidate = base[:MAX_SHEET_NAME - len(suffix)] + suffix
        counter += 1
    used.add(candidate.lower())
    return candidate


class ExcelReportService:
    """
    Generates .xlsx reports with:
    - Tab 1: Summary (overall totals per hour type, subtotals, chart)
    - One tab per week (hour types x Monday..Saturday)
    """

    def generate_report(self, ledger: HourLedger, output_path: Union[str, Path]) -> str:
        """
        Generate the Excel report and save it to output_path.
        Returns the path as string.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        workbook = xlsxwriter.Workbook(str(output_path))
        formats = self._create_formats(workbook)
        used_names: Set[str] = set()

        # --- TAB 1: SUMMARY ---
        ws_summary = workbook.add_worksheet(sheet_name(tr("report.sheet_summary"), used_names))
        self._create_summary_sheet(workbook, ws_summary, ledger, formats)

        # --- ONE TAB PER WEEK ---
        for week in ledger.weeks:
            ws_week = workbook.add_worksheet(sheet_name(week.name, used_names))
            self._create_week_sheet(ws_week, ledger, week, formats)

        workbook.close()
        logger.info(f"Excel report written to {output_path} ({len(ledger.weeks)} weeks)")
        return str(output_path)

    @staticmethod
    def _create_formats(workbook) -> Dict[str, object]:
        return {
            'header': workbook.add_format({
                'bold': True, 'bg_color': '#4472C4', 'font_color': 'white', 'border': 1
            }),
            'category': workbook.add_format({
                'bold': True, 'bg_color': '#E2EFDA', 'border': 1
            }),
            'label': workbook.add_format({'border': 1}),
            'hours': workbook.add_format({'border': 1, 'num_format': '0.0#'}),
            'subtotal_label': workbook.add_format({
                'bold': True, 'bg_color': '#DDEBF7', 'border': 1
            }),
            'subtotal': workbook.add_format({
                'bold': True, 'bg_color': '#DDEBF7', 'border': 1, 'num_format': '0.0#'
            }),
            'total_label': workbook.add_format({
                'bold': True, 'bg_color': '#FFF2CC', 'border': 1
            }),
            'total': workbook.add_format({
                'bold': True, 'bg_color': '#FFF2CC', 'border': 1, 'num_format': '0.0#'
            }),
        }

    def _create_summary_sheet(self, workbook, worksheet, ledger: HourLedger, formats):
        """Overall totals per hour type, grouped by category"""
        headers = [tr("report.col_hour_type"), tr("report.col_overall")]
        for col, header in enumerate(headers):
            worksheet.write(0, col, header, formats['header'])

        row_idx = 1
        category_totals: Dict[Category, float] = {}
        for category in Category:
            types = ledger.types_for(category)
            totals = ledger.overall_totals(types)

            worksheet.write(row_idx, 0, tr(f"category.{category.value}"), formats['category'])
            worksheet.write(row_idx, 1, "", formats['category'])
            row_idx += 1

            for hour_type in types:
                worksheet.write(row_idx, 0, display_name(hour_type, category), formats['label'])
                worksheet.write(row_idx, 1, totals[hour_type], formats['hours'])
                row_idx += 1

            worksheet.write(row_idx, 0, tr(f"category.{category.value}_subtotal"), formats['subtotal_label'])
            category_totals[category] = sum(totals.values())
            worksheet.write(row_idx, 1, category_totals[category], formats['subtotal'])
            row_idx += 1

        grand_total = sum(category_totals.values())
        worksheet.write(row_idx, 0, tr("report.row_total"), formats['total_label'])
        worksheet.write(row_idx, 1, grand_total, formats['total'])

        worksheet.set_column(0, 0, 36)
        worksheet.set_column(1, 1, 14)

        # Chart data block: category name + subtotal, referenced by the chart
        data_col = 3
        worksheet.write(0, data_col, tr("report.col_hour_type"), formats['header'])
        worksheet.write(0, data_col + 1, tr("report.col_overall"), formats['header'])
        for i, category in enumerate(Category, start=1):
            worksheet.write(i, data_col, tr(f"category.{category.value}"), formats['label'])
            worksheet.write(i, data_col + 1, category_totals[category], formats['hours'])
        worksheet.set_column(data_col, data_col, 20)
        worksheet.set_column(data_col + 1, data_col + 1, 14)

        chart = workbook.add_chart({'type': 'column'})
        sheet = worksheet.get_name()
        chart.add_series({
            'name': tr("report.chart_title"),
            'categories': [sheet, 1, data_col, len(Category), data_col],
            'values': [sheet, 1, data_col + 1, len(Category), data_col + 1],
            'data_labels': {'value': True},
        })
        chart.set_title({'name': tr("report.chart_title")})
        chart.set_legend({'none': True})
        worksheet.insert_chart(len(Category) + 3, data_col, chart)

    def _create_week_sheet(self, worksheet, ledger: HourLedger, week: WeekData, formats):
        """Hour types x weekdays for one week, with subtotal and total rows"""
        headers = [tr("report.col_hour_type")] + [day_name(day) for day in WEEKDAYS] + [tr("report.col_weekly")]
        for col, header in enumerate(headers):
            worksheet.write(0, col, header, formats['header'])

        row_idx = 1
        for category in Category:
            types = ledger.types_for(category)

            worksheet.write(row_idx, 0, tr(f"category.{category.value}"), formats['category'])
            for col in range(1, len(headers)):
                worksheet.write(row_idx, col, "", formats['category'])
            row_idx += 1

            for hour_type in types:
                worksheet.write(row_idx, 0, display_name(hour_type, category), formats['label'])
                for col, day in enumerate(WEEKDAYS, start=1):
                    worksheet.write(row_idx, col, week.days[day].get(hour_type, 0.0), formats['hours'])
                worksheet.write(row_idx, len(WEEKDAYS) + 1, type_total(week, hour_type), formats['hours'])
                row_idx += 1

            self._write_total_row(worksheet, row_idx, tr(f"category.{category.value}_subtotal"),
                                  week, types, formats['subtotal_label'], formats['subtotal'])
            row_idx += 1

        row_idx += 1
        self._write_total_row(worksheet, row_idx, tr("report.row_total"), week, ledger.all_hour_types,
                              formats['total_label'], formats['total'])

        worksheet.set_column(0, 0, 36)
        worksheet.set_column(1, len(headers) - 1, 13)
        worksheet.freeze_panes(1, 1)

    @staticmethod
    def _write_total_row(worksheet, row_idx: int, label: str, week: WeekData, types: List[str],
                         label_format, value_format):
        worksheet.write(row_idx, 0, label, label_format)
        for col, day in enumerate(WEEKDAYS, start=1):
            worksheet.write(row_idx, col, daily_total(week.days[day], types), value_format)
        worksheet.write(row_idx, len(WEEKDAYS) + 1, weekly_total(week, types), value_format)
