"""
Time entry models.

Defines Pydantic models for raw MyHours log entries, their start/stop
intervals and tags, plus the aggregated task view used by reports.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Tag(BaseModel):
    """A MyHours tag. Identity is by ``id``."""

    id: int
    name: str
    hex_color: Optional[str] = None
    archived: bool = False
    date_archived: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class TimeInterval(BaseModel):
    """
    One start/stop interval of a log entry.

    Timestamps sent without a UTC offset are interpreted in the local
    timezone. ``end_time`` is ``None`` while the interval is running.
    """

    id: Optional[int] = None
    start_time: Optional[_dt.datetime] = None
    end_time: Optional[_dt.datetime] = None
    duration: int = 0
    running: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_local_timezone(
        cls, v: Optional[_dt.datetime]
    ) -> Optional[_dt.datetime]:
        """Attach the local timezone to naive timestamps."""
        if v is not None and v.tzinfo is None:
            return v.astimezone()
        return v


class TimeEntry(BaseModel):
    """
    A raw log entry as returned by ``GET /logs``.

    An entry can hold several intervals when it was started and stopped more
    than once under the same id. ``duration`` is the service's running total
    in seconds across all of them.
    """

    id: int
    note: Optional[str] = None
    date: Optional[str] = None
    running: bool = False
    duration: int = 0
    tags: List[Tag] = Field(default_factory=list)
    times: List[TimeInterval] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("tags", "times", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """The service sends ``null`` instead of an empty list."""
        return [] if v is None else v


class AggregatedTask(BaseModel):
    """
    Entries sharing an exact note, folded into one report line.

    ``start`` and ``end`` are ``None`` only when no member entry carries an
    interval (for example entries inserted with a bare duration).
    """

    ids: List[int]
    start: Optional[_dt.datetime] = None
    end: Optional[_dt.datetime] = None
    total_duration_seconds: int = Field(..., ge=0)
    note: str = Field(..., min_length=1)
    tags: List[Tag] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
