from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from gameboard.errors import SchemaError
from gameboard.services.games import GameRecord, GameScheduler
from gameboard.tables.schema import GAMES_HEADERS, GAMES_SHEET, ensure_sheet

from tests.conftest import FixedClock

# clock fixture: Wednesday 2026-10-14, window = {Mon 2026-10-12, Fri 2026-10-16}
THIS_MONDAY = "2026-10-12"
THIS_FRIDAY = "2026-10-16"
LAST_MONDAY = "2026-10-05"
NEXT_MONDAY = "2026-10-19"


async def _seed(tables, rows):
    await ensure_sheet(tables, GAMES_SHEET, GAMES_HEADERS)
    for row in rows:
        await tables.append_row(GAMES_SHEET, row)


def _game(week_start, title="", is_active=False, prompt="p", instructions="i", placeholder="ph"):
    return [week_start, title, prompt, instructions, placeholder, is_active]


async def _is_active_column(tables):
    rows = await tables.read_all(GAMES_SHEET)
    idx = rows[0].index("IsActive")
    return [r[idx] for r in rows[1:]]


async def test_header_only_returns_nothing(games, tables):
    await ensure_sheet(tables, GAMES_SHEET, GAMES_HEADERS)
    assert await games.get_active_games() == []


async def test_missing_sheet_is_created_lazily(games, tables):
    assert await games.get_active_games() == []
    assert await tables.read_all(GAMES_SHEET) == [list(GAMES_HEADERS)]


async def test_last_week_inactive_row_is_excluded(games, tables):
    await _seed(tables, [_game(LAST_MONDAY, "Old", is_active=False)])
    assert await games.get_active_games() == []


async def test_active_flag_alone_is_not_enough(games, tables):
    await _seed(tables, [_game(LAST_MONDAY, "Stale", is_active=True)])
    assert await games.get_active_games() == []


async def test_friday_keyed_row_with_yes_flag_is_included(games, tables):
    await _seed(tables, [_game(THIS_FRIDAY, "Friday Fun", is_active="yes")])

    active = await games.get_active_games()

    assert active == [
        GameRecord(
            week_start=THIS_FRIDAY,
            title="Friday Fun",
            prompt="p",
            instructions="i",
            input_placeholder="ph",
        )
    ]


async def test_to_dict_shape(games, tables):
    await _seed(tables, [_game(THIS_MONDAY, "Quiz", is_active=True, placeholder="")])

    [game] = await games.get_active_games()

    assert game.to_dict() == {
        "weekStart": THIS_MONDAY,
        "title": "Quiz",
        "prompt": "p",
        "instructions": "i",
        "inputPlaceholder": "",
    }


async def test_mixed_rows_and_flag_forms(games, tables):
    await _seed(
        tables,
        [
            _game(THIS_MONDAY, "A", is_active=True),
            _game(THIS_MONDAY, "B", is_active="TRUE"),
            _game(THIS_MONDAY, "C", is_active=1),
            _game(THIS_MONDAY, "D", is_active="no"),
            _game("not a date", "E", is_active=True),
            _game("", "F", is_active=True),
            _game(NEXT_MONDAY, "G", is_active=True),
            _game(f"{THIS_MONDAY}T15:45:00", "H", is_active=" Yes "),
        ],
    )

    titles = [g.title for g in await games.get_active_games()]

    assert titles == ["A", "B", "C", "H"]


async def test_week_start_is_formatted_in_configured_zone(tables):
    berlin = ZoneInfo("Europe/Berlin")
    clock = FixedClock(timezone="Europe/Berlin", at=datetime(2026, 10, 14, 12, 0, tzinfo=berlin))
    games = GameScheduler(tables, clock)
    # Sunday 23:00 UTC is already Monday 01:00 in Berlin
    sunday_night_utc = datetime(2026, 10, 11, 23, 0, tzinfo=ZoneInfo("UTC"))
    await _seed(tables, [_game(sunday_night_utc, "Dated", is_active=True)])

    [game] = await games.get_active_games()

    assert game.week_start == THIS_MONDAY


async def test_flip_rewrites_every_flag(games, tables):
    await _seed(
        tables,
        [
            _game(LAST_MONDAY, "old", is_active=True),
            _game(THIS_MONDAY, "monday", is_active=False),
            _game(THIS_FRIDAY, "friday", is_active="no"),
            _game("garbage", "broken", is_active="yes"),
            _game(NEXT_MONDAY, "next", is_active=1),
        ],
    )

    active = await games.flip_game_activity()

    assert active == 2
    assert await _is_active_column(tables) == [False, True, True, False, False]
    assert [g.title for g in await games.get_active_games()] == ["monday", "friday"]


async def test_flip_is_idempotent(games, tables):
    await _seed(
        tables,
        [
            _game(THIS_MONDAY, "a", is_active=False),
            _game(LAST_MONDAY, "b", is_active=True),
        ],
    )

    await games.flip_game_activity()
    first = await _is_active_column(tables)
    await games.flip_game_activity()
    second = await _is_active_column(tables)

    assert first == second == [True, False]


async def test_flip_recomputes_window_each_call(tables):
    await _seed(
        tables,
        [
            _game(THIS_MONDAY, "this week", is_active=False),
            _game(NEXT_MONDAY, "next week", is_active=False),
        ],
    )
    utc = ZoneInfo("UTC")

    thursday = GameScheduler(tables, FixedClock(at=datetime(2026, 10, 15, 9, 0, tzinfo=utc)))
    await thursday.flip_game_activity()
    assert await _is_active_column(tables) == [True, False]

    saturday = GameScheduler(tables, FixedClock(at=datetime(2026, 10, 17, 9, 0, tzinfo=utc)))
    await saturday.flip_game_activity()
    assert await _is_active_column(tables) == [False, True]


async def test_flip_on_header_only_sheet(games, tables):
    await ensure_sheet(tables, GAMES_SHEET, GAMES_HEADERS)
    assert await games.flip_game_activity() == 0
    assert await tables.read_all(GAMES_SHEET) == [list(GAMES_HEADERS)]


async def test_columns_are_found_by_name(games, tables):
    reordered = ["IsActive", "Title", "WeekStart", "Prompt", "Instructions", "InputPlaceholder"]
    await tables.create_sheet(GAMES_SHEET)
    await tables.write_row(GAMES_SHEET, 1, reordered, bold=True)
    await tables.append_row(GAMES_SHEET, [False, "moved", THIS_FRIDAY, "p", "i", "ph"])

    await games.flip_game_activity()

    assert await tables.read_row(GAMES_SHEET, 2) == [True, "moved", THIS_FRIDAY, "p", "i", "ph"]
    assert [g.title for g in await games.get_active_games()] == ["moved"]


@pytest.mark.parametrize("operation", ["get_active_games", "flip_game_activity"])
async def test_missing_is_active_column_is_a_schema_error(games, tables, operation):
    await tables.create_sheet(GAMES_SHEET)
    await tables.write_row(
        GAMES_SHEET, 1, ["WeekStart", "Title", "Prompt", "Instructions", "InputPlaceholder"]
    )
    await tables.append_row(GAMES_SHEET, [THIS_MONDAY, "t", "p", "i", "ph"])

    with pytest.raises(SchemaError) as exc:
        await getattr(games, operation)()

    assert exc.value.column == "IsActive"
    assert await tables.read_row(GAMES_SHEET, 2) == [THIS_MONDAY, "t", "p", "i", "ph"]
