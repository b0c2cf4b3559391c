# gameboard/main.py
import asyncio
import contextlib
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from gameboard.config import Settings
from gameboard.database import Database
from gameboard.handlers import router as handlers_router
from gameboard.scheduler import setup_scheduler
from gameboard.services.games import GameScheduler
from gameboard.services.leaderboard import LeaderboardStore
from gameboard.tables import build_table_store
from gameboard.utils.dt import TimeProvider


def setup_logging(is_dev: bool) -> None:
    """
    Clean production logging:
    - app logs: INFO (or DEBUG in dev)
    - library logs: WARNING+ (no query/pool/HTTP spam)
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "aiosqlite",
        "apscheduler",
        "gspread",
        "google.auth",
        "urllib3",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("gameboard")

    db: Database | None = None
    if settings.storage_backend == "sql":
        db = Database(settings.database_url)
        await db.init_models()
        log.info("DB initialized")

    tables = await build_table_store(settings, db)
    log.info("Table store: %s", tables.__class__.__name__)

    clock = TimeProvider(settings.timezone)
    games = GameScheduler(tables, clock)
    leaderboard = LeaderboardStore(tables)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )

    dp = Dispatcher()

    # Inject workflow data
    dp.workflow_data["games"] = games
    dp.workflow_data["leaderboard"] = leaderboard

    dp.include_router(handlers_router)

    # Registers the Friday flip, bootstraps sheets, flips once
    scheduler = await setup_scheduler(games, settings)
    log.info("Scheduler started")

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        try:
            scheduler.shutdown(wait=False)
        except Exception:
            log.exception("Failed to shutdown scheduler")

        if db is not None:
            try:
                await db.close()
            except Exception:
                log.exception("Failed to close DB")

        with contextlib.suppress(Exception):
            await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
