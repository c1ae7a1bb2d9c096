"""
Text rendering for reports and entry listings.

All functions return plain strings so they can be tested without a console.
"""

from __future__ import annotations

import datetime as _dt
import math
from typing import Optional, Sequence

from myhours.cli.constants import (
    STANDUP_EARLIER_HEADING,
    STANDUP_TODAY_FOOTER,
    STANDUP_YESTERDAY_HEADING,
    TIME_FORMAT,
)
from myhours.models.time_entry import AggregatedTask, TimeEntry
from myhours.utils.dates import is_day_before


def format_duration(seconds: int) -> str:
    """
    Format seconds as hours and minutes, rounded to the nearest minute.

    Examples
    --------
    >>> format_duration(4500)
    '1 hr, 15 min'
    >>> format_duration(1200)
    '20 min'
    """
    minutes_total = math.floor(max(seconds, 0) / 60 + 0.5)
    hours, minutes = divmod(minutes_total, 60)
    if hours and minutes:
        return f"{hours} hr, {minutes} min"
    if hours:
        return f"{hours} hr"
    return f"{minutes} min"


def format_clock(moment: Optional[_dt.datetime]) -> str:
    """Local ``HH:MM`` for ``moment``, or a placeholder when unknown."""
    if moment is None:
        return "--:--"
    return moment.astimezone().strftime(TIME_FORMAT)


def format_task_line(task: AggregatedTask) -> str:
    tags = ",".join(f"#{tag.name}" for tag in task.tags)
    line = (
        f"📋 {format_clock(task.start)} - {format_clock(task.end)} "
        f"{format_duration(task.total_duration_seconds)} - {task.note}"
    )
    return f"{line} {tags}" if tags else line


def format_standup_line(task: AggregatedTask) -> str:
    prefix = f"**{task.tags[0].name}**: " if task.tags else ""
    return f"  - {prefix}{task.note}"


def render_report(
    tasks: Sequence[AggregatedTask],
    standup: bool,
    checked_day: _dt.date,
    today: _dt.date,
) -> list[str]:
    """
    Render aggregated tasks for display.

    Normal mode gives one line per task with its time span, duration, note
    and tags. Standup mode gives a bullet per task showing only the first
    tag and the note, framed by a heading and a "Today" footer. An empty
    list renders as nothing; callers print their own empty-state message.
    """
    if not tasks:
        return []
    if not standup:
        return [format_task_line(task) for task in tasks]

    heading = (
        STANDUP_YESTERDAY_HEADING
        if is_day_before(checked_day, today)
        else STANDUP_EARLIER_HEADING
    )
    return [heading, *(format_standup_line(task) for task in tasks), STANDUP_TODAY_FOOTER]


def format_running_entry(entry: TimeEntry) -> str:
    if entry.note and entry.note.strip():
        return f" 📋 {entry.id} - {entry.note}"
    return f" 📋 {entry.id}"
