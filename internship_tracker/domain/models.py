"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Weeks come back from browser-era export files and from storage as loose JSON.
Pydantic validates the shape once at the boundary (all six weekdays present,
numeric hour values) so the ledger can trust its records afterwards.
"""

import math
from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator


class Category(str, Enum):
    """Classification of an hour type"""
    DIRECT = "direct"
    INDIRECT = "indirect"


class DayOfWeek(str, Enum):
    """The six weekdays a week records hours for (no Sunday)"""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


WEEKDAYS: List[DayOfWeek] = list(DayOfWeek)

# Validated identifier for an hour type, e.g. "individual" or "documentation"
HourTypeName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

DailyHours = Dict[str, float]

DEFAULT_DIRECT_HOUR_TYPES = ["individual", "intake", "group"]
DEFAULT_INDIRECT_HOUR_TYPES = ["consultation", "documentation", "supervision"]


def clean_hours(value: float) -> float:
    """Clamp negative, NaN and infinite hour values to 0"""
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return value


class WeekData(BaseModel):
    """
    A named week holding hours for Monday through Saturday.

    days maps every weekday to a DailyHours record (hour type -> hours).
    A missing hour type inside a day counts as 0.
    """
    id: str = Field(..., min_length=1)
    name: str
    days: Dict[DayOfWeek, DailyHours]

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_numbers(cls, value):
        # Old exports used Date.now() style numeric ids
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("days")
    @classmethod
    def _all_weekdays(cls, days: Dict[DayOfWeek, DailyHours]) -> Dict[DayOfWeek, DailyHours]:
        missing = [day.value for day in WEEKDAYS if day not in days]
        if missing:
            raise ValueError(f"missing weekdays: {', '.join(missing)}")

        # Keep Monday..Saturday order and drop invalid hour values
        return {
            day: {hour_type: clean_hours(hours) for hour_type, hours in days[day].items()}
            for day in WEEKDAYS
        }

    def day(self, day: DayOfWeek) -> DailyHours:
        """Get the hours record for one weekday"""
        return self.days[DayOfWeek(day)]


class LedgerSnapshot(BaseModel):
    """
    Everything the ledger persists.

    hour_types is None when the stored data carries no classification
    (e.g. data written before classifications were persisted). The
    configured defaults are used in that case.
    """
    weeks: List[WeekData] = Field(default_factory=list)
    hour_types: Optional[Dict[str, Category]] = None


class TrackerPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    model_config = ConfigDict(from_attributes=True)

    # Hour type defaults for a fresh ledger
    direct_hour_types: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DIRECT_HOUR_TYPES),
        description="Client-facing hour types"
    )
    indirect_hour_types: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INDIRECT_HOUR_TYPES),
        description="Supporting hour types"
    )
    persist_hour_types: bool = Field(
        default=True,
        description="Store custom hour types next to the week data so they survive a reload"
    )

    # Weeks
    week_name_template: str = Field(default="Week {number}", description="Name for new weeks")

    # Export settings
    export_filename: str = "internship_hours_data.json"
    export_directory: Optional[str] = None

    # Report settings
    default_report_template: str = "hours_summary.txt"
    reports_directory: Optional[str] = None

    language: str = Field(default="auto", description="UI language: 'en', 'de', or 'auto' (detect from system)")

    @model_validator(mode="after")
    def _check_hour_types(self) -> "TrackerPreferences":
        if not self.direct_hour_types or not self.indirect_hour_types:
            raise ValueError("each category needs at least one default hour type")
        overlap = set(self.direct_hour_types) & set(self.indirect_hour_types)
        if overlap:
            raise ValueError(f"hour types in both categories: {', '.join(sorted(overlap))}")
        return self

    def default_hour_types(self) -> Dict[str, Category]:
        """Classification mapping for a fresh ledger"""
        hour_types = {name: Category.DIRECT for name in self.direct_hour_types}
        hour_types.update({name: Category.INDIRECT for name in self.indirect_hour_types})
        return hour_types


class HourTypeRow(BaseModel):
    """One hour type's line in the summary table"""
    hour_type: str
    category: Category
    daily: float = 0.0
    weekly: float = 0.0
    overall: float = 0.0


class CategorySummary(BaseModel):
    """Rows and subtotals of one category"""
    category: Category
    rows: List[HourTypeRow] = Field(default_factory=list)
    daily: float = 0.0
    weekly: float = 0.0
    overall: float = 0.0


class LedgerSummary(BaseModel):
    """
    Read model of the hours table for one week and one day.

    week_id/week_name are None when the ledger has no week to show; daily
    and weekly figures are 0 in that case while overall totals still apply.
    """
    week_id: Optional[str] = None
    week_name: Optional[str] = None
    day: DayOfWeek = DayOfWeek.MONDAY
    categories: List[CategorySummary] = Field(default_factory=list)
    daily: float = 0.0
    weekly: float = 0.0
    overall: float = 0.0
    week_count: int = 0

    def category(self, category: Category) -> CategorySummary:
        """Get the section for a category"""
        return next(section for section in self.categories if section.category == category)
