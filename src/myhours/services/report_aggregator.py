"""
Report aggregation for a day's log entries.

MyHours creates a separate entry each time work on the same thing is
resumed. Reports fold entries that share an identical note into one task,
spanning the earliest start to the latest end of all their intervals.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Iterable, Optional

from myhours.exceptions import InvariantViolationError
from myhours.models.time_entry import AggregatedTask, TimeEntry

logger = logging.getLogger(__name__)


def has_reportable_note(entry: TimeEntry) -> bool:
    """Entries without a visible note cannot be grouped or displayed."""
    return bool(entry.note and entry.note.strip())


def group_by_note(entries: Iterable[TimeEntry]) -> dict[str, list[TimeEntry]]:
    """
    Group entries by their exact, untrimmed note.

    Groups keep the order in which their first member appeared, and members
    keep their original relative order.
    """
    groups: dict[str, list[TimeEntry]] = {}
    for entry in entries:
        if not has_reportable_note(entry):
            continue
        groups.setdefault(entry.note or "", []).append(entry)
    return groups


def _span(members: list[TimeEntry]) -> tuple[Optional[_dt.datetime], Optional[_dt.datetime]]:
    """Earliest interval start and latest interval end across ``members``."""
    starts: list[_dt.datetime] = []
    ends: list[_dt.datetime] = []
    for entry in members:
        for interval in entry.times:
            if interval.start_time is not None:
                starts.append(interval.start_time)
            # A running interval has no end yet; it reaches at least its start
            end = interval.end_time or interval.start_time
            if end is not None:
                ends.append(end)
    if not starts:
        return None, None
    return min(starts), max(ends)


def build_task(note: str, members: list[TimeEntry]) -> AggregatedTask:
    """
    Fold one note group into an ``AggregatedTask``.

    The total is the sum of each member's own ``duration`` rather than a
    figure derived from intervals. Tags come from the first member only.

    Raises
    ------
    InvariantViolationError
        If the group is empty or its note is blank.
    """
    if not members or not note.strip():
        raise InvariantViolationError(
            "Aggregated group has no members or an empty note",
            context={"note": note, "ids": [m.id for m in members]},
        )

    start, end = _span(members)
    return AggregatedTask(
        ids=[entry.id for entry in members],
        start=start,
        end=end,
        total_duration_seconds=sum(entry.duration for entry in members),
        note=note.strip(),
        tags=sorted(members[0].tags, key=lambda tag: tag.id),
    )


def _start_sort_key(task: AggregatedTask) -> tuple[int, _dt.datetime]:
    if task.start is None:
        return (1, _dt.datetime.min.replace(tzinfo=_dt.timezone.utc))
    return (0, task.start)


def aggregate(entries: Iterable[TimeEntry]) -> list[AggregatedTask]:
    """
    Group raw entries into report tasks ordered by start time.

    Parameters
    ----------
    entries : Iterable[TimeEntry]
        Entries as returned by the logs endpoint, in API order.

    Returns
    -------
    list[AggregatedTask]
        One task per distinct note, sorted ascending by ``start``. Ties keep
        the order in which notes first appeared; tasks without any interval
        sort last.

    Examples
    --------
    >>> tasks = aggregate(client.list_entries(token, date.today()))
    >>> [task.note for task in tasks]
    ['Standup', 'Code review']
    """
    groups = group_by_note(entries)
    tasks = [build_task(note, members) for note, members in groups.items()]
    tasks.sort(key=_start_sort_key)
    logger.debug("Aggregated %d note groups", len(tasks))
    return tasks
