"""Seed the demo plan (pods, leads, vendor testers, base scenario) into an empty database."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from qaplan.database import async_session_maker, init_db
from qaplan.services.seed_service import seed_if_empty


async def seed():
    await init_db()
    async with async_session_maker() as db:
        seeded = await seed_if_empty(db)
        await db.commit()
    if seeded:
        print("Seeded demo plan into scenario 'Base Plan'")
    else:
        print("Database already has scenarios, nothing to seed")


if __name__ == "__main__":
    asyncio.run(seed())
