"""
Data Seeder for the Internship Hours Tracker.
Fills the configured storage with a few weeks of realistic hours for demos.

Usage:
    python scripts/seed_data.py [number_of_weeks]
"""

import asyncio
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from internship_tracker.domain.ledger import HourLedger
from internship_tracker.domain.models import WEEKDAYS
from internship_tracker.infra.config import get_settings
from internship_tracker.infra.db import DatabaseEngine, init_db
from internship_tracker.infra.repository import create_repository

# Typical hours per day: (min, max) for each default hour type
TYPICAL_HOURS = {
    "individual": (1.0, 4.0),
    "intake": (0.0, 1.5),
    "group": (0.0, 2.0),
    "consultation": (0.0, 1.0),
    "documentation": (0.5, 2.0),
    "supervision": (0.0, 1.0),
}


def build_ledger(week_count: int, settings) -> HourLedger:
    prefs = settings.preferences
    ledger = HourLedger(
        hour_types=prefs.default_hour_types(),
        week_name_template=prefs.week_name_template,
    )

    for _ in range(week_count):
        week = ledger.create_week()
        for day in WEEKDAYS:
            # Saturdays are mostly off
            if day == WEEKDAYS[-1] and random.random() > 0.2:
                continue
            for hour_type in ledger.all_hour_types:
                low, high = TYPICAL_HOURS.get(hour_type, (0.0, 1.0))
                # Round to quarter hours like a person would enter them
                ledger.set_hour(week.id, day, hour_type, round(random.uniform(low, high) * 4) / 4)
        print(f"Generated {week.name}")

    return ledger


async def seed(week_count: int):
    settings = get_settings()
    if settings.storage_backend == "sqlite":
        await init_db(settings.get_db_url())

    repository = create_repository(settings)
    existing = await repository.load()
    if existing and existing.weeks:
        print(f"Replacing {len(existing.weeks)} stored weeks")

    ledger = build_ledger(week_count, settings)
    if await repository.save(ledger.to_snapshot()):
        print("Seeding complete.")
    else:
        print("ERROR: Could not save the seeded data.")
        sys.exit(1)

    await DatabaseEngine.reset_instance()


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 6
    asyncio.run(seed(count))
