"""
Ledger Service - Applies user actions to the ledger and persists the result.

Architecture Decision: Ports and Adapters
HourLedger is synchronous and storage-free. This service owns the one
injected LedgerRepository and writes a full snapshot after every mutation
that changed something, so the storage medium can be swapped (or faked in
tests) without touching the ledger.
"""

import logging
from typing import List, Optional, Union

from internship_tracker.domain.exceptions import LedgerNotLoadedError
from internship_tracker.domain.ledger import HourLedger
from internship_tracker.domain.models import Category, DayOfWeek, LedgerSummary, TrackerPreferences, WeekData
from internship_tracker.domain.snapshot import Payload
from internship_tracker.infra.repository import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """
    The single write surface used by the presentation layer.

    Every mutating coroutine returns the same value as the matching
    HourLedger call; persistence failures are logged, never raised.
    """

    def __init__(self, repository: LedgerRepository, preferences: Optional[TrackerPreferences] = None):
        self.repository = repository
        self.preferences = preferences or TrackerPreferences()
        self._ledger: Optional[HourLedger] = None
        self.last_save_ok: bool = True

    @property
    def ledger(self) -> HourLedger:
        if self._ledger is None:
            raise LedgerNotLoadedError("LedgerService.load() has not been awaited")
        return self._ledger

    @property
    def is_loaded(self) -> bool:
        return self._ledger is not None

    async def load(self) -> HourLedger:
        """
        Read the stored ledger once at startup.

        Missing or corrupt data starts a fresh ledger with one empty
        week, which is persisted right away.

        Raises:
            StorageError: the backend could not be read; nothing was saved
        """
        snapshot = await self.repository.load()

        if snapshot is None:
            logger.info("No stored ledger found, starting with a fresh week")
            self._ledger = HourLedger(
                hour_types=self.preferences.default_hour_types(),
                week_name_template=self.preferences.week_name_template,
            )
            self._ledger.create_week()
            await self._persist()
        else:
            self._ledger = HourLedger.from_snapshot(
                snapshot,
                default_hour_types=self.preferences.default_hour_types(),
                week_name_template=self.preferences.week_name_template,
            )

        return self._ledger

    async def _persist(self) -> bool:
        """Write the full ledger; failures only leave a log entry"""
        self.last_save_ok = await self.repository.save(self.ledger.to_snapshot())
        if not self.last_save_ok:
            logger.warning("Ledger changes are only kept in memory until the next successful save")
        return self.last_save_ok

    # Mutations

    async def create_week(self) -> WeekData:
        week = self.ledger.create_week()
        await self._persist()
        return week

    async def delete_week(self, week_id: str) -> bool:
        deleted = self.ledger.delete_week(week_id)
        if deleted:
            await self._persist()
        else:
            logger.debug(f"Ignoring delete of unknown week {week_id}")
        return deleted

    async def set_hour(self, week_id: str, day: Union[DayOfWeek, str], hour_type: str, raw_value) -> float:
        value = self.ledger.set_hour(week_id, day, hour_type, raw_value)
        await self._persist()
        return value

    async def clear_week(self, week_id: str) -> bool:
        cleared = self.ledger.clear_week(week_id)
        if cleared:
            await self._persist()
        return cleared

    async def add_hour_type(self, name: str, category: Union[Category, str]) -> bool:
        added = self.ledger.add_hour_type(name, category)
        if added:
            await self._persist()
        return added

    async def delete_hour_type(self, name: str, category: Union[Category, str]) -> bool:
        deleted = self.ledger.delete_hour_type(name, category)
        if deleted:
            await self._persist()
        return deleted

    async def import_snapshot(self, data: Payload) -> List[WeekData]:
        """
        Replace all weeks with imported data.

        Raises:
            SnapshotImportError: the data is invalid; nothing was changed or saved
        """
        weeks = self.ledger.import_snapshot(data)
        await self._persist()
        return weeks

    # Selection (presentation state, not persisted)

    def select_week(self, week_id: str) -> bool:
        return self.ledger.select_week(week_id)

    def select_day(self, day: Union[DayOfWeek, str]) -> DayOfWeek:
        return self.ledger.select_day(day)

    # Reads

    def export_snapshot(self) -> List[dict]:
        return self.ledger.export_snapshot()

    def summarize(self, week_id: Optional[str] = None,
                  day: Optional[Union[DayOfWeek, str]] = None) -> LedgerSummary:
        return self.ledger.summarize(week_id, day)
