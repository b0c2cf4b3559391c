from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from gameboard.config.settings import Settings
from gameboard.services.games import GameScheduler
from gameboard.tables.schema import bootstrap_schema

log = logging.getLogger(__name__)

FLIP_JOB_ID = "flip_game_activity"


# -------------------------------------------------
# Main job: weekly game flip
# -------------------------------------------------

async def run_weekly_flip(games: GameScheduler) -> None:
    try:
        active = await games.flip_game_activity()
    except Exception:
        log.exception("Weekly game flip failed")
        raise
    log.info("Weekly game flip done: %d active", active)


# -------------------------------------------------
# Scheduler setup
# -------------------------------------------------

def build_scheduler(settings: Settings) -> AsyncIOScheduler:
    return AsyncIOScheduler(timezone=settings.timezone)


def flip_trigger(settings: Settings) -> CronTrigger:
    # Every Friday at FLIP_HOUR:FLIP_MINUTE local time
    return CronTrigger(
        day_of_week="fri",
        hour=settings.flip_hour,
        minute=settings.flip_minute,
        timezone=settings.timezone,
    )


async def schedule_weekly_activation_trigger(
    scheduler: AsyncIOScheduler,
    games: GameScheduler,
    settings: Settings,
) -> bool:
    """
    Registers the Friday flip once, then bootstraps both sheets and runs
    one flip straight away.

    Returns True when the job was newly registered.
    """
    added = False
    if scheduler.get_job(FLIP_JOB_ID) is None:
        scheduler.add_job(
            run_weekly_flip,
            trigger=flip_trigger(settings),
            kwargs={"games": games},
            id=FLIP_JOB_ID,
            coalesce=True,
            misfire_grace_time=3600,
        )
        added = True
        log.info(
            "Registered %s: Fridays %02d:%02d %s",
            FLIP_JOB_ID,
            settings.flip_hour,
            settings.flip_minute,
            settings.timezone,
        )
    else:
        log.info("%s already registered; leaving it", FLIP_JOB_ID)

    await bootstrap_schema(games.tables)
    await games.flip_game_activity()
    return added
