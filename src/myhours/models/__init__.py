"""
Data models module for myhours.

Defines Pydantic models for the cached session, raw MyHours log entries and
tags, aggregated report tasks, and weekly hour distribution.
"""

from __future__ import annotations

from .distribution import (
    Allocation,
    CreateEntry,
    DeleteMarkedEntries,
    DistributionStep,
)
from .session import LoginCredentials, Session, TokenGrant
from .time_entry import AggregatedTask, Tag, TimeEntry, TimeInterval

__all__ = [
    # Session
    "LoginCredentials",
    "Session",
    "TokenGrant",
    # Entries
    "AggregatedTask",
    "Tag",
    "TimeEntry",
    "TimeInterval",
    # Distribution
    "Allocation",
    "CreateEntry",
    "DeleteMarkedEntries",
    "DistributionStep",
]
