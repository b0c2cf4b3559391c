from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from gameboard.utils.values import (
    SERIAL_EPOCH,
    cell_text,
    format_sheet_date,
    parse_is_active,
    parse_sheet_date,
    to_number,
)


@pytest.mark.parametrize(
    "value",
    [True, 1, 1.0, "true", "TRUE", " True ", "yes", "YES", "1", " 1 "],
)
def test_truthy_flags(value):
    assert parse_is_active(value) is True


@pytest.mark.parametrize(
    "value",
    [False, 0, 2, -1, 0.5, "false", "no", "0", "y", "on", "", None, [], {"a": 1}],
)
def test_everything_else_is_inactive(value):
    assert parse_is_active(value) is False


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        (2.5, 2.5),
        (3.0, 3),
        ("7", 7),
        (" -4 ", -4),
        ("1.25", 1.25),
        ("1e2", 100),
    ],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "abc", "nan", "inf", float("nan"), float("inf"), True, False, [1]],
)
def test_to_number_rejects(value):
    assert to_number(value) is None


def test_to_number_keeps_integral_floats_as_int():
    assert isinstance(to_number("3.0"), int)


def test_parse_sheet_date_forms():
    assert parse_sheet_date(date(2026, 10, 12)) == date(2026, 10, 12)
    assert parse_sheet_date(datetime(2026, 10, 12, 9, 15)) == date(2026, 10, 12)
    assert parse_sheet_date("2026-10-12") == date(2026, 10, 12)
    assert parse_sheet_date("10/12/2026") == date(2026, 10, 12)
    assert parse_sheet_date("12.10.2026") == date(2026, 10, 12)
    assert parse_sheet_date(45000) == SERIAL_EPOCH + timedelta(days=45000)


def test_parse_sheet_date_converts_aware_values_to_zone():
    tokyo_morning = datetime(2026, 10, 17, 1, 0, tzinfo=timezone(timedelta(hours=9)))
    assert parse_sheet_date(tokyo_morning, ZoneInfo("UTC")) == date(2026, 10, 16)


@pytest.mark.parametrize("value", [None, "", "soon", -3, 0, True, object()])
def test_parse_sheet_date_unreadable(value):
    assert parse_sheet_date(value) is None


def test_format_sheet_date():
    assert format_sheet_date("2026-10-12T00:00:00") == "2026-10-12"
    assert format_sheet_date("garbage") == ""


def test_cell_text():
    assert cell_text(None) == ""
    assert cell_text(12) == "12"
    assert cell_text("hi") == "hi"
