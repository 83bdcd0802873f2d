"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from internship_tracker.domain.exceptions import StorageError
from internship_tracker.domain.ledger import HourLedger
from internship_tracker.i18n import set_language
from internship_tracker.infra.db import Base
from internship_tracker.infra.repository import KeyValueLedgerRepository


class InMemoryLedgerRepository(KeyValueLedgerRepository):
    """Key-value repository backed by a dict; can be told to fail reads or writes"""

    def __init__(self, items: Optional[Dict[str, str]] = None, persist_hour_types: bool = True):
        super().__init__(persist_hour_types)
        self.items: Dict[str, str] = dict(items or {})
        self.fail_reads = False
        self.fail_writes = False
        self.save_count = 0

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError("read", OSError("database is locked"))
        return self.items.get(key)

    async def set_items(self, items: Dict[str, str]) -> None:
        if self.fail_writes:
            raise StorageError("write", OSError("quota exceeded"))
        self.items.update(items)
        self.save_count += 1


@pytest.fixture(autouse=True)
def english():
    """Reports and labels are asserted in English"""
    set_language("en")
    yield
    set_language("en")


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def memory_repo():
    return InMemoryLedgerRepository()


@pytest.fixture
def ledger():
    """Ledger with the default hour types and one empty week"""
    ledger = HourLedger()
    ledger.create_week()
    return ledger


@pytest.fixture
def filled_ledger():
    """
    Two weeks:
    W1: monday individual=2, intake=1; tuesday documentation=1.5, supervision=0.5
    W2: friday group=1, consultation=1
    """
    ledger = HourLedger()
    w1 = ledger.create_week()
    ledger.set_hour(w1.id, "monday", "individual", 2)
    ledger.set_hour(w1.id, "monday", "intake", 1)
    ledger.set_hour(w1.id, "tuesday", "documentation", 1.5)
    ledger.set_hour(w1.id, "tuesday", "supervision", 0.5)
    w2 = ledger.create_week()
    ledger.set_hour(w2.id, "friday", "group", 1)
    ledger.set_hour(w2.id, "friday", "consultation", 1)
    return ledger
