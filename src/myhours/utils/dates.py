"""Date helpers for command arguments.

Parsing failures raise ``ValidationError`` so they are reported before any
network call is made.
"""

from __future__ import annotations

import datetime as _dt
from typing import Optional

from myhours.exceptions import ValidationError


def last_work_day(today: _dt.date) -> _dt.date:
    """
    The most recent weekday before ``today``.

    Sunday and Monday look back to Friday; every other day looks back one
    day (so Saturday gives Friday too).

    Examples
    --------
    >>> last_work_day(date(2024, 3, 4))  # Monday
    datetime.date(2024, 3, 1)
    """
    weekday = today.weekday()
    if weekday == 6:
        return today - _dt.timedelta(days=2)
    if weekday == 0:
        return today - _dt.timedelta(days=3)
    return today - _dt.timedelta(days=1)


def parse_day_month(text: str, today: Optional[_dt.date] = None) -> _dt.date:
    """Parse ``DD-MM`` as a day in the current year."""
    year = (today or _dt.date.today()).year
    try:
        parsed = _dt.datetime.strptime(f"{text.strip()}-{year}", "%d-%m-%Y")
    except ValueError as e:
        raise ValidationError(
            f"Date must look like DD-MM, got {text!r}",
            field_name="date",
            invalid_value=text,
        ) from e
    return parsed.date()


def parse_iso_date(text: str, field_name: str = "date") -> _dt.date:
    """Parse ``YYYY-MM-DD``."""
    try:
        return _dt.date.fromisoformat(text.strip())
    except ValueError as e:
        raise ValidationError(
            f"{field_name} must look like YYYY-MM-DD, got {text!r}",
            field_name=field_name,
            invalid_value=text,
        ) from e


def parse_iso_datetime(
    text: str,
    field_name: str = "start_time",
    today: Optional[_dt.date] = None,
) -> _dt.datetime:
    """
    Parse an ISO-8601 timestamp; naive values are taken as local time.

    A bare time such as ``09:30`` means that time today.
    """
    value = text.strip().replace("Z", "+00:00")
    try:
        if "T" in value or "-" in value.split("+")[0]:
            moment = _dt.datetime.fromisoformat(value)
        else:
            moment = _dt.datetime.combine(
                today or _dt.date.today(), _dt.time.fromisoformat(value)
            )
    except ValueError as e:
        raise ValidationError(
            f"{field_name} must be an ISO-8601 timestamp, got {text!r}",
            field_name=field_name,
            invalid_value=text,
        ) from e
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment


def is_day_before(checked: _dt.date, today: _dt.date) -> bool:
    return (today - checked).days == 1
