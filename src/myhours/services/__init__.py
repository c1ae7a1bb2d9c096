"""
Services module for myhours.

Contains the MyHours API client and the business logic built on it: report
aggregation, tag resolution and weekly hour distribution.
"""

from __future__ import annotations

from myhours.services.hour_distributor import HourDistributor, plan_week
from myhours.services.myhours_client import MyHoursClient
from myhours.services.report_aggregator import aggregate
from myhours.services.tag_resolver import TagResolver

__all__: list[str] = [
    "HourDistributor",
    "MyHoursClient",
    "TagResolver",
    "aggregate",
    "plan_week",
]
