"""Utility modules for myhours."""

from myhours.utils.dates import last_work_day, parse_day_month, parse_iso_date

__all__ = ["last_work_day", "parse_day_month", "parse_iso_date"]
