"""
HourLedger - the in-memory hours model.

Owns the weeks, the hour type classification and the selection state.
Everything here is synchronous and knows nothing about storage; the
LedgerService persists a snapshot after each mutation.
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from internship_tracker.utils import parse_hours

from .exceptions import WeekNotFoundError
from .models import (
    Category,
    CategorySummary,
    DailyHours,
    DayOfWeek,
    HourTypeName,
    HourTypeRow,
    LedgerSnapshot,
    LedgerSummary,
    TrackerPreferences,
    WeekData,
    WEEKDAYS,
)
from .snapshot import Payload, dump_weeks, parse_weeks

logger = logging.getLogger(__name__)

_HOUR_TYPE_NAME = TypeAdapter(HourTypeName)


def daily_total(hours: DailyHours, types: Iterable[str]) -> float:
    """Sum of the given hour types within one day (missing types count as 0)"""
    return sum(hours.get(hour_type, 0.0) for hour_type in types)


def weekly_total(week: WeekData, types: Iterable[str]) -> float:
    """Sum of daily_total over all six days of a week"""
    types = list(types)
    return sum(daily_total(week.days[day], types) for day in WEEKDAYS)


def type_total(week: WeekData, hour_type: str) -> float:
    """One hour type's total over the week"""
    return sum(week.days[day].get(hour_type, 0.0) for day in WEEKDAYS)


class HourLedger:
    """
    Weeks of counseling hours, bucketed into direct and indirect hour types.

    The classification (hour type -> category) is one ordered mapping, so a
    type can never sit in both categories or in neither.
    """

    def __init__(self, weeks: Optional[List[WeekData]] = None,
                 hour_types: Optional[Dict[str, Category]] = None,
                 week_name_template: str = "Week {number}"):
        """
        Args:
            weeks: Existing weeks in creation order
            hour_types: Classification mapping; defaults to the built-in types
            week_name_template: Format string for new week names ({number} is 1-based)
        """
        self._weeks: List[WeekData] = list(weeks or [])
        if hour_types is None:
            hour_types = TrackerPreferences().default_hour_types()
        self._hour_types: Dict[str, Category] = {name: Category(cat) for name, cat in hour_types.items()}
        self.week_name_template = week_name_template

        self._selected_week_id: Optional[str] = self._weeks[-1].id if self._weeks else None
        self._selected_day: DayOfWeek = DayOfWeek.MONDAY

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot,
                      default_hour_types: Optional[Dict[str, Category]] = None,
                      week_name_template: str = "Week {number}") -> "HourLedger":
        """Rebuild a ledger from persisted state, selecting the last week"""
        hour_types = snapshot.hour_types if snapshot.hour_types else default_hour_types
        return cls(
            weeks=[week.model_copy(deep=True) for week in snapshot.weeks],
            hour_types=hour_types,
            week_name_template=week_name_template,
        )

    def to_snapshot(self) -> LedgerSnapshot:
        """Copy of the persistable state"""
        return LedgerSnapshot(
            weeks=[week.model_copy(deep=True) for week in self._weeks],
            hour_types=dict(self._hour_types),
        )

    # Read accessors

    @property
    def weeks(self) -> List[WeekData]:
        """Copies of the weeks; changes go through the ledger operations"""
        return [week.model_copy(deep=True) for week in self._weeks]

    @property
    def hour_types(self) -> Dict[str, Category]:
        return dict(self._hour_types)

    def types_for(self, category: Union[Category, str]) -> List[str]:
        """Hour types of one category, in the order they were added"""
        category = Category(category)
        return [name for name, cat in self._hour_types.items() if cat == category]

    @property
    def direct_hour_types(self) -> List[str]:
        return self.types_for(Category.DIRECT)

    @property
    def indirect_hour_types(self) -> List[str]:
        return self.types_for(Category.INDIRECT)

    @property
    def all_hour_types(self) -> List[str]:
        """Direct types first, then indirect"""
        return self.direct_hour_types + self.indirect_hour_types

    def get_week(self, week_id: Optional[str]) -> Optional[WeekData]:
        return next((week for week in self._weeks if week.id == week_id), None)

    def _require_week(self, week_id: str) -> WeekData:
        week = self.get_week(week_id)
        if week is None:
            raise WeekNotFoundError(week_id)
        return week

    @property
    def selected_week_id(self) -> Optional[str]:
        return self._selected_week_id

    @property
    def selected_week(self) -> Optional[WeekData]:
        return self.get_week(self._selected_week_id)

    @property
    def selected_day(self) -> DayOfWeek:
        return self._selected_day

    def select_week(self, week_id: str) -> bool:
        """Select a week for display. Unknown ids leave the selection alone."""
        if self.get_week(week_id) is None:
            return False
        self._selected_week_id = week_id
        return True

    def select_day(self, day: Union[DayOfWeek, str]) -> DayOfWeek:
        self._selected_day = DayOfWeek(day)
        return self._selected_day

    # Week operations

    def _empty_days(self) -> Dict[DayOfWeek, DailyHours]:
        return {day: {name: 0.0 for name in self._hour_types} for day in WEEKDAYS}

    def _new_week_id(self) -> str:
        week_id = uuid.uuid4().hex
        while self.get_week(week_id) is not None:
            week_id = uuid.uuid4().hex
        return week_id

    def create_week(self) -> WeekData:
        """Append an empty week and select it"""
        week = WeekData(
            id=self._new_week_id(),
            name=self.week_name_template.format(number=len(self._weeks) + 1),
            days=self._empty_days(),
        )
        self._weeks.append(week)
        self._selected_week_id = week.id
        logger.debug(f"Created week {week.name} ({week.id})")
        return week

    def delete_week(self, week_id: str) -> bool:
        """
        Remove a week.

        If it was selected, the last remaining week becomes selected (or none).

        Returns:
            False if no week has that id
        """
        week = self.get_week(week_id)
        if week is None:
            return False

        self._weeks.remove(week)
        if self._selected_week_id == week_id:
            self._selected_week_id = self._weeks[-1].id if self._weeks else None
        logger.debug(f"Deleted week {week.name} ({week_id})")
        return True

    def set_hour(self, week_id: str, day: Union[DayOfWeek, str], hour_type: str, raw_value) -> float:
        """
        Store hours for one (day, hour type) cell of a week.

        Bad input (text, negative numbers) is stored as 0 instead of rejected.

        Returns:
            The value actually stored

        Raises:
            WeekNotFoundError: unknown week id
            ValueError: unknown weekday
        """
        week = self._require_week(week_id)
        value = parse_hours(raw_value)
        week.days[DayOfWeek(day)][hour_type] = value
        return value

    def clear_week(self, week_id: str) -> bool:
        """
        Reset every hour value of a week to 0, keeping its hour type keys.

        Returns:
            False if no week has that id
        """
        week = self.get_week(week_id)
        if week is None:
            return False

        for day in WEEKDAYS:
            hours = week.days[day]
            for hour_type in list(hours):
                hours[hour_type] = 0.0
            for hour_type in self._hour_types:
                hours.setdefault(hour_type, 0.0)
        return True

    # Hour type operations

    def add_hour_type(self, name: str, category: Union[Category, str]) -> bool:
        """
        Register a new hour type and add it (at 0) to every day of every week.

        Returns:
            False for an empty name or one that is already registered
        """
        category = Category(category)
        try:
            name = _HOUR_TYPE_NAME.validate_python(name)
        except ValidationError:
            return False
        if name in self._hour_types:
            return False

        self._hour_types[name] = category
        for week in self._weeks:
            for day in WEEKDAYS:
                week.days[day][name] = 0.0
        logger.info(f"Added {category.value} hour type '{name}'")
        return True

    def delete_hour_type(self, name: str, category: Union[Category, str]) -> bool:
        """
        Unregister an hour type and drop its values from every week.

        Returns:
            False if the type is not in that category or is the category's last type
        """
        category = Category(category)
        try:
            name = _HOUR_TYPE_NAME.validate_python(name)
        except ValidationError:
            return False
        if self._hour_types.get(name) != category:
            return False
        if len(self.types_for(category)) <= 1:
            return False

        del self._hour_types[name]
        for week in self._weeks:
            for day in WEEKDAYS:
                week.days[day].pop(name, None)
        logger.info(f"Deleted {category.value} hour type '{name}'")
        return True

    # Totals

    def overall_totals(self, types: Iterable[str]) -> Dict[str, float]:
        """Each hour type's sum over every day of every week"""
        totals = {hour_type: 0.0 for hour_type in types}
        for week in self._weeks:
            for day in WEEKDAYS:
                hours = week.days[day]
                for hour_type in totals:
                    totals[hour_type] += hours.get(hour_type, 0.0)
        return totals

    def summarize(self, week_id: Optional[str] = None,
                  day: Optional[Union[DayOfWeek, str]] = None) -> LedgerSummary:
        """
        Build the hours table for a week and day.

        Args:
            week_id: Week to show; defaults to the selected week
            day: Day to show; defaults to the selected day
        """
        week = self.get_week(week_id if week_id is not None else self._selected_week_id)
        day = DayOfWeek(day) if day is not None else self._selected_day

        summary = LedgerSummary(
            week_id=week.id if week else None,
            week_name=week.name if week else None,
            day=day,
            week_count=len(self._weeks),
        )

        for category in Category:
            types = self.types_for(category)
            overall = self.overall_totals(types)
            section = CategorySummary(category=category)
            for hour_type in types:
                section.rows.append(HourTypeRow(
                    hour_type=hour_type,
                    category=category,
                    daily=week.days[day].get(hour_type, 0.0) if week else 0.0,
                    weekly=type_total(week, hour_type) if week else 0.0,
                    overall=overall[hour_type],
                ))
            section.daily = daily_total(week.days[day], types) if week else 0.0
            section.weekly = weekly_total(week, types) if week else 0.0
            section.overall = sum(overall.values())
            summary.categories.append(section)

        summary.daily = sum(section.daily for section in summary.categories)
        summary.weekly = sum(section.weekly for section in summary.categories)
        summary.overall = sum(section.overall for section in summary.categories)
        return summary

    # Import / export

    def export_snapshot(self) -> List[dict]:
        """The week list in export file shape"""
        return dump_weeks(self._weeks)

    def import_snapshot(self, data: Payload) -> List[WeekData]:
        """
        Replace all weeks with imported data and select the last one.

        The ledger is left untouched when the data does not validate.

        Args:
            data: JSON text/bytes or an already parsed list of weeks

        Raises:
            SnapshotImportError: malformed JSON, wrong shape or duplicate ids
        """
        weeks = parse_weeks(data)
        self._weeks = weeks
        self._selected_week_id = weeks[-1].id if weeks else None
        logger.info(f"Imported {len(weeks)} weeks")
        return list(weeks)
