# gameboard/scripts/seed_games.py
"""
Adds a game row for the upcoming week (and the one after) to the Games sheet.

Game rows are normally typed into the sheet by hand; this is the quick way
to get something on screen in a fresh deployment.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from gameboard.config import Settings
from gameboard.database import Database
from gameboard.services.games import GameScheduler
from gameboard.tables import TableAccess, build_table_store
from gameboard.tables.schema import GAMES_SHEET, bootstrap_schema
from gameboard.utils.dt import TimeProvider
from gameboard.utils.weeks import acceptable_starts

log = logging.getLogger(__name__)

SAMPLE_GAMES = [
    (
        "Caption This",
        "Write the funniest caption for this week's team photo.",
        "One caption per person. Votes close Thursday.",
        "Your caption…",
    ),
    (
        "Two Truths and a Lie",
        "Share three statements about yourself. One of them is false.",
        "Guess other people's lies in the thread for points.",
        "Truth, truth, lie…",
    ),
]


async def seed(tables: TableAccess, clock: TimeProvider) -> int:
    await bootstrap_schema(tables)

    monday, _friday = acceptable_starts(clock.now())
    for i, (title, prompt, instructions, placeholder) in enumerate(SAMPLE_GAMES):
        week = monday + timedelta(days=7 * i)
        await tables.append_row(
            GAMES_SHEET,
            [week.isoformat(), title, prompt, instructions, placeholder, False],
        )
        log.info("Seeded %r for week %s", title, week.isoformat())

    return await GameScheduler(tables, clock).flip_game_activity()


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    settings = Settings.load()

    db: Database | None = None
    if settings.storage_backend == "sql":
        db = Database(settings.database_url)
        await db.init_models()

    try:
        tables = await build_table_store(settings, db)
        active = await seed(tables, TimeProvider(settings.timezone))
    finally:
        if db is not None:
            await db.close()

    log.info("✅ Seeded games (%d active this week).", active)


if __name__ == "__main__":
    asyncio.run(main())
