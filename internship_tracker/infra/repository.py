"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
The ledger stays pure; it never touches storage. The service talks to a
LedgerRepository port instead, which makes it easy to:
- Switch storage implementations (SQLite database, plain JSON file)
- Mock data for testing
- Change data sources later without touching the ledger
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from internship_tracker.domain.exceptions import SnapshotImportError, StorageError
from internship_tracker.domain.models import LedgerSnapshot
from internship_tracker.domain.snapshot import hour_types_to_json, parse_hour_types, parse_weeks, weeks_to_json
from internship_tracker.infra.config import Settings
from internship_tracker.infra.db import StorageItemModel, get_engine

logger = logging.getLogger(__name__)

WEEKS_KEY = "internshipWeeks"
HOUR_TYPES_KEY = "internshipHourTypes"


class LedgerRepository(ABC):
    """
    Persistence port for the ledger.

    load() raises StorageError when the backend cannot be read; None only
    means there is no usable data. save() never raises: a failed write is
    reported as False and the in-memory ledger stays authoritative.
    """

    @abstractmethod
    async def load(self) -> Optional[LedgerSnapshot]:
        """Read the stored ledger, or None when there is no usable data.

        Raises:
            StorageError: the backend could not be read
        """

    @abstractmethod
    async def save(self, snapshot: LedgerSnapshot) -> bool:
        """Write the full ledger. Returns False if the write failed."""


class KeyValueLedgerRepository(LedgerRepository):
    """
    Stores the ledger as JSON strings in a key-value store.

    Weeks live under WEEKS_KEY in the original browser storage shape; the
    hour type classification lives under HOUR_TYPES_KEY.
    """

    def __init__(self, persist_hour_types: bool = True):
        self.persist_hour_types = persist_hour_types

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Read one value. Raises StorageError on backend failure."""

    @abstractmethod
    async def set_items(self, items: Dict[str, str]) -> None:
        """Write several values at once. Raises StorageError on backend failure."""

    async def load(self) -> Optional[LedgerSnapshot]:
        # StorageError propagates; None is reserved for missing or corrupt data
        raw_weeks = await self.get_item(WEEKS_KEY)
        if raw_weeks is None:
            return None

        try:
            weeks = parse_weeks(raw_weeks)
        except SnapshotImportError as e:
            logger.error(f"Error parsing stored weeks, ignoring them: {e}")
            return None

        hour_types = None
        if self.persist_hour_types:
            raw_hour_types = await self.get_item(HOUR_TYPES_KEY)
            try:
                if raw_hour_types is not None:
                    hour_types = parse_hour_types(raw_hour_types)
            except SnapshotImportError as e:
                logger.warning(f"Stored hour types unusable, falling back to defaults: {e}")

        logger.info(f"Loaded {len(weeks)} weeks from storage")
        return LedgerSnapshot(weeks=weeks, hour_types=hour_types)

    async def save(self, snapshot: LedgerSnapshot) -> bool:
        items = {WEEKS_KEY: weeks_to_json(snapshot.weeks)}
        if self.persist_hour_types and snapshot.hour_types:
            items[HOUR_TYPES_KEY] = hour_types_to_json(snapshot.hour_types)

        try:
            await self.set_items(items)
        except StorageError as e:
            logger.error(f"Error saving ledger: {e}")
            return False
        return True


class SqlLedgerRepository(KeyValueLedgerRepository):
    """
    Key-value storage in the storage_items table.
    """

    def __init__(self, session: Optional[AsyncSession] = None, persist_hour_types: bool = True):
        super().__init__(persist_hour_types)
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def get_item(self, key: str) -> Optional[str]:
        try:
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    select(StorageItemModel.value).where(StorageItemModel.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError("read", e) from e

    async def set_items(self, items: Dict[str, str]) -> None:
        try:
            session = await self._get_session()
            async with session:
                now = datetime.now()
                for key, value in items.items():
                    await session.merge(StorageItemModel(key=key, value=value, updated_at=now))
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("write", e) from e


class JsonFileLedgerRepository(KeyValueLedgerRepository):
    """
    Key-value storage in a single JSON object file ({key: string value}).
    """

    def __init__(self, path: Path, persist_hour_types: bool = True):
        super().__init__(persist_hour_types)
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise StorageError("read", e) from e
        except ValueError as e:
            logger.warning(f"Storage file {self.path} is corrupt, treating it as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, treating it as empty")
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    async def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    async def set_items(self, items: Dict[str, str]) -> None:
        data = self._read_all()
        data.update(items)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError("write", e) from e


def create_repository(settings: Settings, session: Optional[AsyncSession] = None) -> KeyValueLedgerRepository:
    """Build the repository configured by settings.storage_backend"""
    persist_hour_types = settings.preferences.persist_hour_types
    if settings.storage_backend == "json":
        return JsonFileLedgerRepository(settings.get_storage_file(), persist_hour_types=persist_hour_types)
    return SqlLedgerRepository(session=session, persist_hour_types=persist_hour_types)
