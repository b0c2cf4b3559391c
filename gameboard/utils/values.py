# gameboard/utils/values.py
"""
Normalization of loosely typed sheet cells.

Sheet backends hand back whatever the cell holds: Python bools and numbers
from the SQL store, mostly strings from Google Sheets, and occasionally
serial day numbers for dates. Everything that interprets a cell goes
through here.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

TRUTHY_STRINGS = frozenset({"true", "yes", "1"})

# Day zero of Google Sheets / Excel serial dates.
SERIAL_EPOCH = date(1899, 12, 30)

DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%d.%m.%Y",
)


def parse_is_active(value: Any) -> bool:
    """
    True only for: bool True, numeric 1, or one of "true"/"yes"/"1"
    (case-insensitive, surrounding whitespace ignored). Everything else is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return False


def _tidy(number: float) -> int | float:
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def to_number(value: Any) -> int | float | None:
    """
    Finite number from an int, float or numeric string. None otherwise.
    Booleans are not numbers here.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return _tidy(value) if math.isfinite(value) else None

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return int(s)
        except ValueError:
            pass
        try:
            f = float(s)
        except ValueError:
            return None
        return _tidy(f) if math.isfinite(f) else None

    return None


def parse_sheet_date(value: Any, tz: ZoneInfo | None = None) -> date | None:
    """
    Calendar date of a stored cell, or None when it cannot be read as one.

    Aware datetimes are converted to `tz` before the date is taken.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            value = value.astimezone(tz)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value <= 0:
            return None
        try:
            return SERIAL_EPOCH + timedelta(days=int(value))
        except OverflowError:
            return None

    if not isinstance(value, str):
        return None

    s = value.strip()
    if not s:
        return None

    try:
        return parse_sheet_date(datetime.fromisoformat(s), tz)
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue

    return None


def format_sheet_date(value: Any, tz: ZoneInfo | None = None) -> str:
    """YYYY-MM-DD for a readable date cell, "" otherwise."""
    d = parse_sheet_date(value, tz)
    return d.isoformat() if d else ""


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
