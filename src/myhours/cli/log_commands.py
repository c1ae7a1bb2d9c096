"""
Time entry CLI commands for myhours.

Start and stop entries, list running ones, and report the work logged on a
day, either as a timeline or as standup bullets.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Optional

import typer
from rich.console import Console

from myhours.cli.constants import NO_RUNNING_TASKS_MESSAGE, NO_TASKS_MESSAGE
from myhours.cli.errors import handle_cli_errors
from myhours.cli.formatting import format_running_entry, render_report
from myhours.container import container
from myhours.services.report_aggregator import aggregate
from myhours.services.tag_resolver import split_tag_names
from myhours.utils.dates import last_work_day, parse_day_month, parse_iso_datetime

logger = logging.getLogger(__name__)

console = Console()


def _today() -> _dt.date:
    return _dt.date.today()


def _access_token() -> str:
    return container.session_manager.ensure_authenticated().access_token


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        console.print(line, markup=False, highlight=False, soft_wrap=True)


def _print_report(day: _dt.date, standup: bool) -> None:
    token = _access_token()
    tasks = aggregate(container.client.list_entries(token, day))
    lines = render_report(tasks, standup=standup, checked_day=day, today=_today())
    if not lines:
        console.print(NO_TASKS_MESSAGE)
        return
    _print_lines(lines)


@handle_cli_errors
def start(
    note: str = typer.Argument(..., help="Task description"),
    tags: Optional[str] = typer.Option(
        None, "--tags", "-t", help="Comma separated list of tags to apply"
    ),
    start_time: Optional[str] = typer.Option(
        None,
        "--start-time",
        "-s",
        help="When the task started (ISO-8601 timestamp or HH:MM today)",
    ),
) -> None:
    """Track a new task."""
    started_at = parse_iso_datetime(start_time) if start_time else None
    tag_names = split_tag_names(tags)

    token = _access_token()
    tag_defs = (
        container.create_tag_resolver(token).resolve(tag_names) if tag_names else None
    )
    entry_id = container.client.start_entry(
        token, note, tags=tag_defs, start_time=started_at
    )
    console.print(f"Started new log: [bold]{entry_id}[/bold]")


@handle_cli_errors
def running() -> None:
    """Get running tasks."""
    token = _access_token()
    entries = [e for e in container.client.list_entries(token, _today()) if e.running]
    if not entries:
        console.print(NO_TASKS_MESSAGE)
        return
    _print_lines([format_running_entry(entry) for entry in entries])


@handle_cli_errors
def stop(
    entry_id: Optional[int] = typer.Argument(
        None, help="Task ID. If omitted, will stop all running tasks."
    ),
) -> None:
    """Stop a task."""
    token = _access_token()
    if entry_id is not None:
        entry_ids = [entry_id]
    else:
        entry_ids = [
            e.id for e in container.client.list_entries(token, _today()) if e.running
        ]

    if not entry_ids:
        console.print(NO_RUNNING_TASKS_MESSAGE)
        return

    for running_id in entry_ids:
        container.client.stop_entry(token, running_id)
    logger.info("Stopped %d entries", len(entry_ids))
    console.print("Stopped running task(s)")


@handle_cli_errors
def today(
    standup: bool = typer.Option(
        False, "--standup", "-s", help="Print standup bullets"
    ),
) -> None:
    """Get tasks for today."""
    _print_report(_today(), standup)


@handle_cli_errors
def previous(
    standup: bool = typer.Option(
        False, "--standup", "-s", help="Print standup bullets"
    ),
    date: Optional[str] = typer.Option(
        None, "--date", "-d", help="Day to report as DD-MM (default: last work day)"
    ),
) -> None:
    """Get tasks from the previous work day."""
    day = parse_day_month(date, _today()) if date else last_work_day(_today())
    _print_report(day, standup)
