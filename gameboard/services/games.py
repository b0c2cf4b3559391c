# gameboard/services/games.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from gameboard.tables import TableAccess
from gameboard.tables.schema import GAMES_HEADERS, GAMES_SHEET, ensure_sheet, resolve_columns
from gameboard.utils.dt import TimeProvider
from gameboard.utils.values import cell_text, format_sheet_date, parse_is_active
from gameboard.utils.weeks import acceptable_starts, matches_any_day

log = logging.getLogger(__name__)

FIRST_DATA_ROW = 2


@dataclass(frozen=True, slots=True)
class GameRecord:
    week_start: str  # YYYY-MM-DD, "" when the stored date is unreadable
    title: str
    prompt: str
    instructions: str
    input_placeholder: str

    def to_dict(self) -> dict[str, str]:
        return {
            "weekStart": self.week_start,
            "title": self.title,
            "prompt": self.prompt,
            "instructions": self.instructions,
            "inputPlaceholder": self.input_placeholder,
        }


class GameScheduler:
    """
    Weekly game rotation over the Games sheet.

    A game is eligible when its WeekStart is the Monday of the week holding
    the upcoming Friday, or that Friday itself. On a Friday the target is
    that same day.
    """

    def __init__(self, tables: TableAccess, clock: TimeProvider) -> None:
        self.tables = tables
        self.clock = clock

    def eligible_starts(self) -> tuple[date, date]:
        # always from a fresh "now"; the weekly flip depends on it
        return acceptable_starts(self.clock.now())

    async def _load(self) -> tuple[list[list[Any]], dict[str, int]]:
        await ensure_sheet(self.tables, GAMES_SHEET, GAMES_HEADERS)
        rows = await self.tables.read_all(GAMES_SHEET)
        header = rows[0] if rows else []
        cols = resolve_columns(GAMES_SHEET, header, GAMES_HEADERS)
        return rows[FIRST_DATA_ROW - 1:], cols

    async def get_active_games(self) -> list[GameRecord]:
        data, cols = await self._load()
        targets = self.eligible_starts()
        tz = self.clock.tz

        out: list[GameRecord] = []
        for row in data:
            week_start = row[cols["WeekStart"]]
            if not parse_is_active(row[cols["IsActive"]]):
                continue
            if not matches_any_day(week_start, targets, tz):
                continue

            out.append(
                GameRecord(
                    week_start=format_sheet_date(week_start, tz),
                    title=cell_text(row[cols["Title"]]),
                    prompt=cell_text(row[cols["Prompt"]]),
                    instructions=cell_text(row[cols["Instructions"]]),
                    input_placeholder=cell_text(row[cols["InputPlaceholder"]]),
                )
            )

        log.debug("Active games for %s: %d of %d rows", targets[1].isoformat(), len(out), len(data))
        return out

    async def flip_game_activity(self) -> int:
        """
        Rewrites every IsActive cell in one write: True for rows in the
        current window, False for all others. Returns the active count.
        """
        data, cols = await self._load()
        targets = self.eligible_starts()

        if not data:
            log.info("Games sheet has no rows; nothing to flip")
            return 0

        tz = self.clock.tz
        flags = [matches_any_day(row[cols["WeekStart"]], targets, tz) for row in data]

        await self.tables.write_column(
            GAMES_SHEET,
            cols["IsActive"] + 1,
            FIRST_DATA_ROW,
            flags,
        )

        active = sum(flags)
        log.info(
            "Flipped game activity for week %s / %s: %d active, %d inactive",
            targets[0].isoformat(),
            targets[1].isoformat(),
            active,
            len(flags) - active,
        )
        return active
