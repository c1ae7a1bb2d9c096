"""
Weekly hour distribution CLI command for myhours.

``myhours fudge`` books the same hours on every weekday of a week against
one or more projects, replacing whatever an earlier run booked.
"""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from myhours.cli.errors import handle_cli_errors
from myhours.container import container
from myhours.models.distribution import Allocation, CreateEntry, DistributionStep
from myhours.services.hour_distributor import plan_week
from myhours.services.tag_resolver import split_tag_names
from myhours.utils.dates import parse_iso_date

console = Console()


def _plan_table(steps: List[DistributionStep]) -> Table:
    table = Table(title="Planned changes")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Action", style="cyan")
    for index, step in enumerate(steps, start=1):
        table.add_row(str(index), escape(step.describe()))
    return table


@handle_cli_errors
def fudge(
    week: str = typer.Option(
        ..., "--week", "-w", help="First day of the week to rewrite (YYYY-MM-DD)"
    ),
    allocation: List[str] = typer.Option(
        ...,
        "--allocation",
        "-a",
        help="Hours per weekday as HOURS:PROJECT[:TASK]. Repeat for each project.",
    ),
    tags: Optional[str] = typer.Option(
        None, "--tags", "-t", help="Comma separated list of tags to apply"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show the planned changes without applying them"
    ),
) -> None:
    """
    Backfill a week with evenly split hours.

    Entries booked by an earlier run for the same week are deleted first,
    so rerunning with different allocations replaces them.

    Examples:
        myhours fudge --week 2024-03-04 -a 6:1201 -a 2:1202:77
        myhours fudge --week 2024-03-04 -a 8:1201 --tags client --dry-run
    """
    week_start = parse_iso_date(week, field_name="week")
    allocations = [Allocation.parse(text) for text in allocation]
    tag_names = split_tag_names(tags)
    marker = container.settings.fudge_marker_note

    if dry_run:
        steps = plan_week(week_start, allocations, marker)
        console.print(_plan_table(steps))
        if tag_names:
            console.print(f"Tags to apply: {', '.join(tag_names)}", markup=False)
        console.print("[yellow]Dry run: nothing was changed.[/yellow]")
        return

    token = container.session_manager.ensure_authenticated().access_token
    distributor = container.create_hour_distributor(token)
    steps = distributor.distribute(week_start, allocations, tag_names or None)

    created = sum(1 for step in steps if isinstance(step, CreateEntry))
    console.print(
        Panel(
            f"[green]✅ Week of {week_start} rewritten[/green]\n"
            f"Entries created: {created}\n"
            f"Marker note: {escape(marker)}",
            title="Fudge Complete",
            border_style="green",
        )
    )
