from datetime import date

import pytest

from gigboard.schemas.availability import MonthCursor
from gigboard.utils.dates import (
    add_months,
    date_key,
    is_past,
    leading_blanks,
    local_today,
    month_grid,
    month_title,
    parse_date_key,
)


@pytest.mark.parametrize(
    "year, month, expected_days",
    [
        (2025, 4, 30),
        (2025, 1, 31),
        (2025, 2, 28),
        (2024, 2, 29),
        (2025, 12, 31),
    ],
)
def test_month_grid_covers_whole_month(year, month, expected_days):
    days = month_grid(MonthCursor(year=year, month=month))

    assert len(days) == expected_days
    assert days[0] == date(year, month, 1)
    assert days[-1] == date(year, month, expected_days)
    assert all(earlier < later for earlier, later in zip(days, days[1:]))


def test_month_grid_is_restartable():
    cursor = MonthCursor(year=2025, month=3)
    assert month_grid(cursor) == month_grid(cursor)


def test_date_key_is_zero_padded():
    assert date_key(date(2025, 3, 1)) == "2025-03-01"
    assert date_key(date(987, 11, 9)) == "0987-11-09"


def test_parse_date_key_round_trips_canonical_keys():
    assert parse_date_key("2025-03-10") == date(2025, 3, 10)


@pytest.mark.parametrize("value", ["2025-3-1", "2025-02-30", "10/03/2025", "", "2025-03-10T00:00"])
def test_parse_date_key_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        parse_date_key(value)


def test_is_past_compares_calendar_days():
    today = date(2025, 3, 1)
    assert is_past(date(2025, 2, 28), today)
    assert not is_past(today, today)
    assert not is_past(date(2025, 3, 2), today)


def test_leading_blanks_uses_sunday_first_weeks():
    # 1 March 2025 is a Saturday, 1 June 2025 a Sunday
    assert leading_blanks(MonthCursor(year=2025, month=3)) == 6
    assert leading_blanks(MonthCursor(year=2025, month=6)) == 0


def test_month_title():
    assert month_title(MonthCursor(year=2025, month=3)) == "March 2025"


def test_cursor_shift_rolls_over_years():
    cursor = MonthCursor(year=2025, month=1)

    assert cursor.shift(-1) == MonthCursor(year=2024, month=12)
    assert cursor.shift(12) == MonthCursor(year=2026, month=1)
    assert MonthCursor(year=2025, month=12).shift(1) == MonthCursor(year=2026, month=1)


def test_local_today_returns_a_date():
    today = local_today("UTC")
    assert type(today) is date


@pytest.mark.parametrize(
    "day, months, expected",
    [
        (date(2025, 3, 1), 1, date(2025, 4, 1)),
        (date(2025, 1, 31), 1, date(2025, 2, 28)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2025, 12, 15), 1, date(2026, 1, 15)),
    ],
)
def test_add_months_clamps_to_month_end(day, months, expected):
    assert add_months(day, months) == expected
