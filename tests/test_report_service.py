"""
Tests for the text/markdown reports and the Excel workbook.
"""

import zipfile

import pytest

from internship_tracker.domain.ledger import HourLedger
from internship_tracker.domain.models import Category
from internship_tracker.i18n import set_language
from internship_tracker.services.excel_report_service import ExcelReportService, sheet_name
from internship_tracker.services.report_service import (
    ReportService,
    capitalize_words,
    display_name,
    format_hours,
)


@pytest.mark.parametrize("value, expected", [
    (3.0, "3"),
    (2.5, "2.5"),
    (0.25, "0.25"),
    (0.0, "0"),
    (10.0, "10"),
])
def test_format_hours(value, expected):
    assert format_hours(value) == expected


def test_display_names():
    assert capitalize_words("play therapy") == "Play Therapy"
    assert display_name("individual", Category.DIRECT) == "Individual Counseling"
    assert display_name("documentation", Category.INDIRECT) == "Documentation"


def test_display_names_in_german():
    set_language("de")
    assert display_name("individual", Category.DIRECT) == "Individual Beratung"


def test_text_report(filled_ledger):
    w1 = filled_ledger.weeks[0]
    report = ReportService().generate_report(filled_ledger, week_id=w1.id, day="monday")

    assert "Internship hours for Week 1 - Monday" in report
    assert "Individual Counseling" in report
    assert "Supervision" in report
    assert "Direct Hours Subtotal" in report

    total_line = next(line for line in report.splitlines() if line.startswith("Total Hours"))
    assert total_line.split()[-3:] == ["3", "5", "7"]
    assert "Weeks tracked: 2" in report


def test_markdown_report_written_to_file(filled_ledger, tmp_path):
    output = tmp_path / "reports" / "summary.md"
    content = ReportService().generate_report(filled_ledger, "hours_summary.md", output_file=output)

    assert output.read_text(encoding="utf-8") == content
    assert "| Individual Counseling |" in content
    assert "| Week 2 * |" in content


def test_report_without_weeks():
    report = ReportService().generate_report(HourLedger())
    assert "No week selected" in report


def test_week_overview(filled_ledger):
    overview = ReportService.week_overview(filled_ledger)
    assert [(w["name"], w["direct"], w["indirect"], w["total"], w["selected"]) for w in overview] == [
        ("Week 1", 3.0, 2.0, 5.0, False),
        ("Week 2", 1.0, 1.0, 2.0, True),
    ]


def test_custom_template_dir(filled_ledger, tmp_path):
    (tmp_path / "short.txt").write_text("{{ summary.overall|format_hours }} h", encoding="utf-8")
    service = ReportService(template_dir=tmp_path)

    assert service.list_templates() == ["short.txt"]
    assert service.generate_report(filled_ledger, "short.txt") == "7 h"


def test_bundled_templates_listed():
    assert ReportService().list_templates() == ["hours_summary.md", "hours_summary.txt"]


def test_render_template_string():
    assert ReportService().render_template_string("{{ x|format_hours }}", x=1.50) == "1.5"


def test_sheet_names_are_sanitized_and_unique():
    used = set()
    assert sheet_name("Summary", used) == "Summary"
    assert sheet_name("summary", used) == "summary (2)"
    assert sheet_name("Week 1/2: [intro]", used) == "Week 1_2_ _intro_"
    long_name = sheet_name("x" * 40, used)
    assert len(long_name) == 31
    assert len(sheet_name("x" * 40, used)) == 31
    assert sheet_name("", used) == "Sheet"


def test_excel_report(filled_ledger, tmp_path):
    output = tmp_path / "excel" / "hours.xlsx"
    result = ExcelReportService().generate_report(filled_ledger, output)

    assert result == str(output)
    with zipfile.ZipFile(output) as workbook:
        sheets = [n for n in workbook.namelist() if n.startswith("xl/worksheets/sheet")]
        workbook_xml = workbook.read("xl/workbook.xml").decode("utf-8")

    assert len(sheets) == 3
    assert 'name="Summary"' in workbook_xml
    assert 'name="Week 1"' in workbook_xml
    assert 'name="Week 2"' in workbook_xml


def test_excel_report_with_clashing_week_names(tmp_path):
    ledger = HourLedger(week_name_template="Summary")
    ledger.create_week()
    ledger.create_week()

    output = tmp_path / "hours.xlsx"
    ExcelReportService().generate_report(ledger, output)

    with zipfile.ZipFile(output) as workbook:
        workbook_xml = workbook.read("xl/workbook.xml").decode("utf-8")
    assert 'name="Summary (2)"' in workbook_xml
    assert 'name="Summary (3)"' in workbook_xml
