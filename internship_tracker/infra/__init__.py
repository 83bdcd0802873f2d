"""Infrastructure layer - Configuration and persistence"""

from .config import Settings, get_settings, reload_settings
from .db import DatabaseEngine, StorageItemModel, get_engine, init_db
from .repository import (
    JsonFileLedgerRepository,
    KeyValueLedgerRepository,
    LedgerRepository,
    SqlLedgerRepository,
    create_repository,
)

__all__ = [
    "DatabaseEngine",
    "JsonFileLedgerRepository",
    "KeyValueLedgerRepository",
    "LedgerRepository",
    "Settings",
    "SqlLedgerRepository",
    "StorageItemModel",
    "create_repository",
    "get_engine",
    "get_settings",
    "init_db",
    "reload_settings",
]
