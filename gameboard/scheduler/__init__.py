from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from gameboard.config.settings import Settings
from gameboard.scheduler.jobs import build_scheduler, schedule_weekly_activation_trigger
from gameboard.services.games import GameScheduler


async def setup_scheduler(games: GameScheduler, settings: Settings) -> AsyncIOScheduler:
    scheduler = build_scheduler(settings)
    await schedule_weekly_activation_trigger(scheduler, games, settings)
    scheduler.start()
    return scheduler
