"""
Weekly hour distribution ("fudge").

Backfills a week by booking the same number of hours against each
allocation on every weekday. Entries created this way carry a marker note;
every run first deletes the marked entries of each day and then recreates
them, so rerunning with different allocations converges on the new state.

The work is modelled as an ordered list of steps that can be inspected
(dry run) before it is executed. Steps run strictly in order and are not
transactional: a failure part way through leaves the earlier days rewritten
and the later ones untouched.
"""

from __future__ import annotations

import datetime as _dt
import logging
import math
from typing import Iterable, Optional, Sequence

from myhours.models.distribution import (
    Allocation,
    CreateEntry,
    DeleteMarkedEntries,
    DistributionStep,
)
from myhours.models.time_entry import Tag
from myhours.services.myhours_client import MyHoursClient
from myhours.services.tag_resolver import TagResolver

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
DURATION_UNIT_SECONDS = 5

# date.weekday(): Monday is 0, Saturday 5, Sunday 6
_WEEKEND = frozenset({5, 6})


def duration_seconds(hours: float) -> int:
    """
    Convert hours to seconds, rounded half up to the API's 5 second unit.

    Examples
    --------
    >>> duration_seconds(1.0)
    3600
    >>> duration_seconds(0.5)
    1800
    """
    units = math.floor(hours * 3600 / DURATION_UNIT_SECONDS + 0.5)
    return units * DURATION_UNIT_SECONDS


def is_weekend(day: _dt.date) -> bool:
    return day.weekday() in _WEEKEND


def week_days(week_start: _dt.date) -> list[_dt.date]:
    """The seven calendar days beginning at ``week_start``."""
    return [week_start + _dt.timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def plan_week(
    week_start: _dt.date,
    allocations: Sequence[Allocation],
    marker_note: str,
    tags: Iterable[Tag] = (),
) -> list[DistributionStep]:
    """
    Build the ordered steps that rewrite a week.

    Each day gets one delete step. Weekdays then get one create step per
    allocation, in allocation order. Weekends are only cleaned.

    Parameters
    ----------
    week_start : date
        First of the seven days to rewrite.
    allocations : Sequence[Allocation]
        Hours per weekday for each project/task.
    marker_note : str
        Note identifying fudged entries.
    tags : Iterable[Tag], optional
        Tags applied to every created entry.

    Returns
    -------
    list[DistributionStep]
        Steps in execution order.
    """
    tag_ids = [tag.id for tag in tags]
    steps: list[DistributionStep] = []
    for day in week_days(week_start):
        steps.append(DeleteMarkedEntries(day=day, note=marker_note))
        if is_weekend(day):
            continue
        for allocation in allocations:
            steps.append(
                CreateEntry(
                    day=day,
                    note=marker_note,
                    duration_seconds=duration_seconds(allocation.hours),
                    project_id=allocation.project_id,
                    task_id=allocation.task_id,
                    tag_ids=tag_ids,
                )
            )
    return steps


class HourDistributor:
    """
    Executes weekly distribution plans against the MyHours API.

    Parameters
    ----------
    client : MyHoursClient
        Client used for the delete and insert calls.
    access_token : str
        Bearer token from the session manager.
    marker_note : str
        Note identifying entries owned by the distributor.
    tag_resolver : TagResolver | None, optional
        Used to turn tag names into tags (default: a resolver on ``client``).
    """

    def __init__(
        self,
        client: MyHoursClient,
        access_token: str,
        marker_note: str,
        tag_resolver: Optional[TagResolver] = None,
    ) -> None:
        self.client = client
        self.access_token = access_token
        self.marker_note = marker_note
        self.tag_resolver = tag_resolver or TagResolver(client, access_token)

    def plan(
        self,
        week_start: _dt.date,
        allocations: Sequence[Allocation],
        tags: Iterable[Tag] = (),
    ) -> list[DistributionStep]:
        return plan_week(week_start, allocations, self.marker_note, tags)

    def distribute(
        self,
        week_start: _dt.date,
        allocations: Sequence[Allocation],
        tag_names: Optional[Sequence[str]] = None,
    ) -> list[DistributionStep]:
        """
        Rewrite the fudged entries of the week starting at ``week_start``.

        Returns
        -------
        list[DistributionStep]
            The steps that were executed, in order.

        Raises
        ------
        RemoteError
            On the first failing call; earlier steps stay applied.
        """
        tags = self.tag_resolver.resolve(tag_names) if tag_names else []
        steps = self.plan(week_start, allocations, tags)
        logger.info(
            "Distributing %d allocation(s) over week of %s (%d steps)",
            len(allocations),
            week_start,
            len(steps),
        )
        for step in steps:
            self.execute(step)
        return steps

    def execute(self, step: DistributionStep) -> None:
        """Run a single step against the API."""
        logger.debug("Executing: %s", step.describe())
        if isinstance(step, DeleteMarkedEntries):
            self.client.delete_entries_by_note(self.access_token, step.day, step.note)
        else:
            self.client.insert_entry(
                self.access_token,
                day=step.day,
                note=step.note,
                duration_seconds=step.duration_seconds,
                project_id=step.project_id,
                task_id=step.task_id,
                tag_ids=list(step.tag_ids),
            )
