"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
Allows users to customize reports without changing code.
"""

import datetime
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader

from internship_tracker.domain.ledger import HourLedger, weekly_total
from internship_tracker.domain.models import Category, DayOfWeek, HourTypeRow
from internship_tracker.i18n import tr
from internship_tracker.utils import get_resource_path

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "hours_summary.txt"


def format_hours(value: float) -> str:
    """Show hours without trailing zeros (3.0 -> '3', 2.50 -> '2.5')"""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest alone"""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def display_name(hour_type: str, category: Category) -> str:
    """Display name of an hour type; direct types read '<Type> Counseling'"""
    name = capitalize_words(hour_type)
    if category == Category.DIRECT:
        return tr("hour_type.direct_label", name=name)
    return name


def hour_type_label(row: HourTypeRow) -> str:
    return display_name(row.hour_type, row.category)


def day_name(day: Union[DayOfWeek, str]) -> str:
    return tr(f"day.{DayOfWeek(day).value}")


class ReportService:
    """
    Generates reports from the ledger using Jinja2 templates.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = Path(template_dir)

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )

        # Add custom filters
        self.env.filters['format_hours'] = format_hours
        self.env.filters['format_date'] = self._format_date
        self.env.filters['day_name'] = day_name
        self.env.filters['hour_type_label'] = hour_type_label
        self.env.globals['tr'] = tr

    @staticmethod
    def _format_date(dt: datetime.datetime, fmt: str = "%Y-%m-%d %H:%M") -> str:
        """Format datetime object"""
        return dt.strftime(fmt)

    @staticmethod
    def week_overview(ledger: HourLedger) -> List[Dict[str, object]]:
        """Per-week direct/indirect/total figures in ledger order"""
        direct = ledger.direct_hour_types
        indirect = ledger.indirect_hour_types
        overview = []
        for week in ledger.weeks:
            direct_total = weekly_total(week, direct)
            indirect_total = weekly_total(week, indirect)
            overview.append({
                'id': week.id,
                'name': week.name,
                'direct': direct_total,
                'indirect': indirect_total,
                'total': direct_total + indirect_total,
                'selected': week.id == ledger.selected_week_id,
            })
        return overview

    def build_context(self, ledger: HourLedger, week_id: Optional[str] = None,
                      day: Optional[Union[DayOfWeek, str]] = None) -> dict:
        """Template variables for a ledger report"""
        summary = ledger.summarize(week_id, day)
        return {
            'summary': summary,
            'direct': summary.category(Category.DIRECT),
            'indirect': summary.category(Category.INDIRECT),
            'weeks': self.week_overview(ledger),
            'generated_at': datetime.datetime.now(),
        }

    def generate_report(self, ledger: HourLedger,
                        template_name: str = DEFAULT_TEMPLATE,
                        week_id: Optional[str] = None,
                        day: Optional[Union[DayOfWeek, str]] = None,
                        output_file: Optional[Path] = None) -> str:
        """
        Generate a report for a week and day.

        Args:
            ledger: The ledger to report on
            template_name: Name of the template file (e.g., 'hours_summary.txt')
            week_id: Week to show; defaults to the ledger's selected week
            day: Day to show; defaults to the ledger's selected day
            output_file: Optional file path to save the report

        Returns:
            The generated report as a string
        """
        context = self.build_context(ledger, week_id, day)

        # Render template
        template = self.env.get_template(template_name)
        report_content = template.render(**context)

        # Save to file if specified
        if output_file:
            output_file = Path(output_file)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(report_content)
            logger.info(f"Report written to {output_file}")

        return report_content

    def render_template_string(self, template_string: str, **context) -> str:
        """
        Render a template from a string instead of a file.

        Args:
            template_string: The template content as a string
            **context: Variables to pass to the template

        Returns:
            The rendered content
        """
        template = self.env.from_string(template_string)
        return template.render(**context)

    def list_templates(self) -> List[str]:
        """List all available template files"""
        return sorted(
            [f.name for f in self.template_dir.glob("*.txt")] +
            [f.name for f in self.template_dir.glob("*.md")] +
            [f.name for f in self.template_dir.glob("*.html")]
        )
