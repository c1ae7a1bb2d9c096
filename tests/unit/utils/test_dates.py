"""
Tests for date helpers.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from myhours.exceptions import ValidationError
from myhours.utils.dates import (
    is_day_before,
    last_work_day,
    parse_day_month,
    parse_iso_date,
    parse_iso_datetime,
)


@pytest.mark.parametrize(
    ("today", "expected"),
    [
        (date(2024, 3, 4), date(2024, 3, 1)),  # Monday -> Friday
        (date(2024, 3, 5), date(2024, 3, 4)),  # Tuesday -> Monday
        (date(2024, 3, 8), date(2024, 3, 7)),  # Friday -> Thursday
        (date(2024, 3, 9), date(2024, 3, 8)),  # Saturday -> Friday
        (date(2024, 3, 10), date(2024, 3, 8)),  # Sunday -> Friday
        (date(2024, 1, 1), date(2023, 12, 29)),  # across a year
    ],
)
def test_last_work_day(today, expected):
    assert last_work_day(today) == expected


def test_last_work_day_is_never_a_weekend():
    start = date(2024, 1, 1)
    for offset in range(14):
        assert last_work_day(start + timedelta(days=offset)).weekday() < 5


class TestParseDayMonth:
    def test_uses_current_year(self):
        assert parse_day_month("01-03", today=date(2024, 6, 1)) == date(2024, 3, 1)

    def test_single_digits(self):
        assert parse_day_month("5-3", today=date(2024, 6, 1)) == date(2024, 3, 5)

    def test_leap_day(self):
        assert parse_day_month("29-02", today=date(2024, 1, 1)) == date(2024, 2, 29)

    @pytest.mark.parametrize("text", ["", "31-02", "2024-03-01", "03/01", "tomorrow"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError, match="DD-MM") as exc_info:
            parse_day_month(text, today=date(2024, 6, 1))
        assert exc_info.value.field_name == "date"


class TestParseIsoDate:
    def test_valid(self):
        assert parse_iso_date(" 2024-03-04 ") == date(2024, 3, 4)

    def test_invalid_names_the_field(self):
        with pytest.raises(ValidationError, match="week must look like") as exc_info:
            parse_iso_date("04-03-2024", field_name="week")
        assert exc_info.value.invalid_value == "04-03-2024"


class TestParseIsoDatetime:
    def test_utc_suffix(self):
        assert parse_iso_datetime("2024-03-04T09:30:00Z") == datetime(
            2024, 3, 4, 9, 30, tzinfo=timezone.utc
        )

    def test_explicit_offset(self):
        moment = parse_iso_datetime("2024-03-04T09:30:00+02:00")
        assert moment.utcoffset() == timedelta(hours=2)
        assert moment.astimezone(timezone.utc).hour == 7

    def test_naive_is_local(self):
        moment = parse_iso_datetime("2024-03-04T09:30:00")
        assert moment.tzinfo is not None
        assert moment.replace(tzinfo=None) == datetime(2024, 3, 4, 9, 30)

    def test_bare_time_is_today(self):
        moment = parse_iso_datetime("09:30", today=date(2024, 3, 4))
        assert moment.date() == date(2024, 3, 4)
        assert (moment.hour, moment.minute) == (9, 30)
        assert moment.tzinfo is not None

    @pytest.mark.parametrize("text", ["", "soon", "2024-13-01T00:00", "25:00"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError, match="ISO-8601"):
            parse_iso_datetime(text)


@pytest.mark.parametrize(
    ("checked", "expected"),
    [(date(2024, 3, 3), True), (date(2024, 3, 1), False), (date(2024, 3, 4), False)],
)
def test_is_day_before(checked, expected):
    assert is_day_before(checked, date(2024, 3, 4)) is expected
