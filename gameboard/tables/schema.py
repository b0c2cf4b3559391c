# gameboard/tables/schema.py
from __future__ import annotations

import logging
from typing import Any, Sequence

from gameboard.errors import SchemaError
from gameboard.tables import TableAccess

log = logging.getLogger(__name__)

GAMES_SHEET = "Games"
GAMES_HEADERS: tuple[str, ...] = (
    "WeekStart",
    "Title",
    "Prompt",
    "Instructions",
    "InputPlaceholder",
    "IsActive",
)

LEADERBOARD_SHEET = "Leaderboard"
LEADERBOARD_HEADERS: tuple[str, ...] = ("Name", "Score")


def _header_text(row: Sequence[Any]) -> list[str]:
    cells = ["" if c is None else str(c).strip() for c in row]
    while cells and not cells[-1]:
        cells.pop()
    return cells


async def ensure_sheet(
    tables: TableAccess,
    name: str,
    headers: Sequence[str],
    *,
    repair: bool = False,
) -> None:
    """
    Get-or-create `name` with `headers` as a bold row 1.

    A blank header row is always written. A header that differs from
    `headers` is only rewritten when `repair` is set; otherwise it is left
    for `resolve_columns` to report.
    """
    if not await tables.has_sheet(name):
        await tables.create_sheet(name)
        await tables.write_row(name, 1, list(headers), bold=True)
        log.info("Bootstrapped sheet %s with header %s", name, ", ".join(headers))
        return

    current = _header_text(await tables.read_row(name, 1))
    if current == list(headers):
        return

    if not current:
        await tables.write_row(name, 1, list(headers), bold=True)
        log.info("Wrote missing header for sheet %s", name)
        return

    if repair:
        await tables.write_row(name, 1, list(headers), bold=True)
        log.warning(
            "Repaired header of sheet %s: %s -> %s",
            name,
            ", ".join(current),
            ", ".join(headers),
        )


def resolve_columns(sheet: str, header: Sequence[Any], required: Sequence[str]) -> dict[str, int]:
    """
    Zero-based index of each required column, looked up by name.
    """
    names = [("" if c is None else str(c).strip()) for c in header]
    out: dict[str, int] = {}
    for column in required:
        try:
            out[column] = names.index(column)
        except ValueError:
            raise SchemaError(sheet, column) from None
    return out


async def bootstrap_schema(tables: TableAccess) -> None:
    """Creates both sheets and forces their headers to the expected layout."""
    await ensure_sheet(tables, GAMES_SHEET, GAMES_HEADERS, repair=True)
    await ensure_sheet(tables, LEADERBOARD_SHEET, LEADERBOARD_HEADERS, repair=True)
