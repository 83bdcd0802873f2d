"""Domain layer - Pure business entities and logic"""

from .exceptions import (
    LedgerNotLoadedError,
    SnapshotImportError,
    StorageError,
    TrackerError,
    WeekNotFoundError,
)
from .ledger import HourLedger, daily_total, type_total, weekly_total
from .models import (
    Category,
    DayOfWeek,
    LedgerSnapshot,
    LedgerSummary,
    TrackerPreferences,
    WeekData,
    WEEKDAYS,
)

__all__ = [
    "Category",
    "DayOfWeek",
    "HourLedger",
    "LedgerNotLoadedError",
    "LedgerSnapshot",
    "LedgerSummary",
    "SnapshotImportError",
    "StorageError",
    "TrackerError",
    "TrackerPreferences",
    "WEEKDAYS",
    "WeekData",
    "WeekNotFoundError",
    "daily_total",
    "type_total",
    "weekly_total",
]
