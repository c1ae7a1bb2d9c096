"""
Main CLI entry point for myhours.
"""

from __future__ import annotations

import logging
import sys

import typer
from rich.console import Console
from rich.panel import Panel

from myhours import __version__
from myhours.cli import fudge_commands, log_commands
from myhours.cli.auth_commands import auth_app
from myhours.cli.errors import handle_cli_errors
from myhours.container import container

console = Console()

app = typer.Typer(
    name="myhours",
    help="Command-line client for MyHours time tracking",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Add subcommands
app.add_typer(auth_app, name="auth", help="Authentication commands")

app.command(name="start")(log_commands.start)
app.command(name="running")(log_commands.running)
app.command(name="stop")(log_commands.stop)
app.command(name="today")(log_commands.today)
app.command(name="previous")(log_commands.previous)
app.command(name="fudge")(fudge_commands.fudge)


def configure_logging(verbose: bool) -> None:
    """
    Send ``myhours`` log records to standard error.

    ``--verbose`` forces DEBUG; otherwise the configured log level applies.
    """
    level = logging.DEBUG if verbose else getattr(logging, container.settings.log_level)

    root_logger = logging.getLogger("myhours")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]myhours[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
@handle_cli_errors
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Log debug output to standard error"
    ),
) -> None:
    """
    myhours - Command-line client for MyHours time tracking.

    Start and stop tasks, review what you logged, and backfill a week of
    hours across projects.
    """
    if version:
        console.print(f"myhours v{__version__}")
        raise typer.Exit(code=0)

    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'myhours --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
