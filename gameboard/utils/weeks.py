# gameboard/utils/weeks.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from gameboard.utils.values import parse_sheet_date

FRIDAY_SUN0 = 5


def _as_date(value: date | datetime) -> date:
    # time of day is dropped (midnight)
    return value.date() if isinstance(value, datetime) else value


def weekday_sun0(value: date | datetime) -> int:
    # Sunday = 0 ... Saturday = 6
    return (value.weekday() + 1) % 7


def upcoming_friday(now: date | datetime) -> date:
    """
    `now` itself when it is a Friday, else the next Friday.
    """
    day = _as_date(now)
    return day + timedelta(days=(FRIDAY_SUN0 - weekday_sun0(day) + 7) % 7)


def week_start_of(value: date | datetime) -> date:
    # Monday of the week containing `value`
    day = _as_date(value)
    return day - timedelta(days=(weekday_sun0(day) + 6) % 7)


def acceptable_starts(now: date | datetime) -> tuple[date, date]:
    """
    (Monday of the target week, target Friday).

    Game rows may be keyed by either date, so both count as a match.
    """
    friday = upcoming_friday(now)
    return (week_start_of(friday), friday)


def same_day(stored: Any, target: date, tz: ZoneInfo | None = None) -> bool:
    d = parse_sheet_date(stored, tz)
    return d is not None and d == target


def matches_any_day(stored: Any, targets: tuple[date, ...], tz: ZoneInfo | None = None) -> bool:
    return any(same_day(stored, t, tz) for t in targets)
