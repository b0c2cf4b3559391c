from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from gameboard.database import Database
from gameboard.services.games import GameScheduler
from gameboard.services.leaderboard import LeaderboardStore
from gameboard.tables.sql_store import SqlTableStore
from gameboard.utils.dt import TimeProvider

UTC = ZoneInfo("UTC")


@dataclass(frozen=True, slots=True)
class FixedClock(TimeProvider):
    at: datetime = field(default_factory=lambda: datetime(2026, 10, 14, 12, 0, tzinfo=UTC))

    def now(self) -> datetime:
        return self.at


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.init_models()
    yield database
    await database.close()


@pytest.fixture
def tables(db):
    return SqlTableStore(db)


@pytest.fixture
def clock():
    # Wednesday 2026-10-14 -> target Friday 2026-10-16, Monday 2026-10-12
    return FixedClock()


@pytest.fixture
def games(tables, clock):
    return GameScheduler(tables, clock)


@pytest.fixture
def leaderboard(tables):
    return LeaderboardStore(tables)
