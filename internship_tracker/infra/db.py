"""
SQLAlchemy database models and configuration.

Architecture Decision: Why SQLAlchemy?
- The ledger only needs a key-value store, but a single ORM table keeps
  writes transactional and the file format a standard SQLite database
- Supports async operations for non-blocking database access
- Easy to migrate to PostgreSQL or other databases if needed
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import os

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, DateTime, Text


# Base class for all models
class Base(DeclarativeBase):
    pass


class StorageItemModel(Base):
    """
    One key-value item, the equivalent of a browser localStorage entry.

    Values are opaque strings (JSON text for the ledger).
    """
    __tablename__ = "storage_items"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)


def default_data_dir() -> Path:
    """Per-user data directory: AppData on Windows, ~/.local/share elsewhere"""
    if os.name == 'nt':  # Windows
        return Path(os.getenv('APPDATA')) / 'InternshipTracker'
    return Path.home() / '.local' / 'share' / 'internshiptracker'


class DatabaseEngine:
    """
    Manages database connection and session lifecycle.

    Singleton pattern ensures only one engine exists per application.
    """
    _instance: Optional['DatabaseEngine'] = None

    def __init__(self, db_url: str):
        self.db_url = db_url
        self.engine = create_async_engine(db_url, echo=False)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    @classmethod
    def get_instance(cls, db_url: Optional[str] = None) -> 'DatabaseEngine':
        """Get or create the database engine instance"""
        if cls._instance is None:
            if db_url is None:
                data_dir = default_data_dir()
                data_dir.mkdir(parents=True, exist_ok=True)
                db_path = data_dir / 'internship_hours.db'
                db_url = f"sqlite+aiosqlite:///{db_path}"

            cls._instance = cls(db_url)
        return cls._instance

    @classmethod
    async def reset_instance(cls) -> None:
        """Dispose of the current engine so the next get_instance() starts fresh"""
        if cls._instance is not None:
            await cls._instance.engine.dispose()
            cls._instance = None

    async def create_tables(self):
        """Create all tables in the database"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def get_session(self) -> AsyncSession:
        """Get a new database session"""
        return self.session_factory()


# Convenience functions
def get_engine(db_url: Optional[str] = None) -> DatabaseEngine:
    """Get the database engine instance"""
    return DatabaseEngine.get_instance(db_url)


async def init_db(db_url: Optional[str] = None) -> DatabaseEngine:
    """Initialize the database (create tables)"""
    engine = get_engine(db_url)
    await engine.create_tables()
    return engine
