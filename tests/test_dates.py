from datetime import date
import pytest

from leavecompass.calendar_logic import (
    calculate_holiday_cycle, format_dd_mm_yyyy, holiday_year_for, parse_dd_mm_yyyy,
    parse_flexible_date, to_date_set, year_tabs,
)


@pytest.mark.parametrize("d", [
    date(2025, 1, 1), date(2024, 2, 29), date(2025, 12, 31), date(1999, 7, 4),
])
def test_dd_mm_yyyy_roundtrip(d):
    assert parse_flexible_date(format_dd_mm_yyyy(d)) == d


@pytest.mark.parametrize("raw", ["31/02/2025", "29/02/2025", "31/04/2025", "00/01/2025", "01/13/2025"])
def test_invalid_day_of_month_is_none(raw):
    assert parse_flexible_date(raw) is None


@pytest.mark.parametrize("raw", [
    None, "", "   ", "garbage", "12/03", "aa/bb/cccc", "1//2025", 42,
    "²/01/2025", "①/01/2025", "01/01/２０２５", "9999999999/1/1", "01/01/99999999999999999999",
])
def test_garbage_is_none(raw):
    assert parse_flexible_date(raw) is None


def test_trailing_time_is_discarded():
    assert parse_flexible_date("12/03/2025 10:15") == date(2025, 3, 12)
    assert parse_dd_mm_yyyy("12/03/2025 10:15:00") == date(2025, 3, 12)


def test_iso_strings():
    assert parse_flexible_date("2025-03-12") == date(2025, 3, 12)
    # nur das Kalenderdatum zählt, nicht der Zeitpunkt
    assert parse_flexible_date("2025-03-12T23:30:00+02:00") == date(2025, 3, 12)
    assert parse_flexible_date("2025-02-31") is None


def test_date_set_merges_formats():
    s = to_date_set(["25/12/2025", "2025-12-25", "bad", date(2025, 12, 26)])
    assert s == {date(2025, 12, 25), date(2025, 12, 26)}


def test_holiday_year_for():
    assert holiday_year_for(date(2025, 11, 30)) == 2025
    assert holiday_year_for(date(2025, 12, 1)) == 2026
    assert holiday_year_for(date(2025, 1, 15)) == 2025


def test_holiday_cycle_strings():
    assert calculate_holiday_cycle(2025) == {
        "holiday_cycle_start": "01/12/2024",
        "holiday_cycle_end": "30/11/2025",
    }


def test_year_tabs():
    assert year_tabs(2025) == [2024, 2025, 2026]
