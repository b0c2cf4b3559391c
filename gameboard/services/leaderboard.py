# gameboard/services/leaderboard.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from gameboard.errors import ValidationError
from gameboard.tables import TableAccess
from gameboard.tables.schema import (
    LEADERBOARD_HEADERS,
    LEADERBOARD_SHEET,
    ensure_sheet,
    resolve_columns,
)
from gameboard.utils.values import to_number

log = logging.getLogger(__name__)

FIRST_DATA_ROW = 2


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    name: str
    score: int | float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "score": self.score}


def _clean_name(value: Any) -> str:
    # 0 / False in the Name column count as blank
    if value is None or (not isinstance(value, str) and not value):
        return ""
    return str(value).strip()


class LeaderboardStore:
    """
    Name -> cumulative score ledger on the Leaderboard sheet.

    Entries come back in storage order. Ranking is left to whoever
    displays them.
    """

    def __init__(self, tables: TableAccess) -> None:
        self.tables = tables

    async def _load(self) -> tuple[list[list[Any]], dict[str, int]]:
        await ensure_sheet(self.tables, LEADERBOARD_SHEET, LEADERBOARD_HEADERS)
        rows = await self.tables.read_all(LEADERBOARD_SHEET)
        header = rows[0] if rows else []
        cols = resolve_columns(LEADERBOARD_SHEET, header, LEADERBOARD_HEADERS)
        return rows[FIRST_DATA_ROW - 1:], cols

    async def get_leaderboard(self) -> list[LeaderboardEntry]:
        data, cols = await self._load()

        out: list[LeaderboardEntry] = []
        for row in data:
            name = _clean_name(row[cols["Name"]])
            if not name:
                continue
            score = to_number(row[cols["Score"]])
            out.append(LeaderboardEntry(name=name, score=score if score is not None else 0))
        return out

    async def record_score(self, name: Any, delta: Any) -> list[LeaderboardEntry]:
        """
        Adds `delta` to `name`'s score, creating the entry if needed.

        The first row whose trimmed name matches wins. Returns the
        leaderboard as re-read after the write.
        """
        clean = _clean_name(name)
        if not clean:
            raise ValidationError("Name must not be empty")

        amount = to_number(delta)
        if amount is None:
            raise ValidationError(f"Score must be a finite number, got {delta!r}")

        data, cols = await self._load()
        name_col = cols["Name"]
        score_col = cols["Score"]

        for offset, row in enumerate(data):
            if _clean_name(row[name_col]) != clean:
                continue

            current = to_number(row[score_col])
            new_score = (current if current is not None else 0) + amount
            await self.tables.write_cell(
                LEADERBOARD_SHEET,
                FIRST_DATA_ROW + offset,
                score_col + 1,
                new_score,
            )
            log.info("Score for %s: %s -> %s", clean, current, new_score)
            break
        else:
            width = max(name_col, score_col) + 1
            new_row: list[Any] = [""] * width
            new_row[name_col] = clean
            new_row[score_col] = amount
            await self.tables.append_row(LEADERBOARD_SHEET, new_row)
            log.info("New leaderboard entry %s with %s", clean, amount)

        return await self.get_leaderboard()
