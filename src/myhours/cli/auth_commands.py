"""
Authentication CLI commands for myhours.
"""

from __future__ import annotations

import datetime as _dt

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from myhours.cli.errors import handle_cli_errors
from myhours.container import container

console = Console()

auth_app = typer.Typer(
    name="auth",
    help="Authentication commands",
    no_args_is_help=True,
)


def _format_expiry(expires_at_ms: int) -> str:
    expires = _dt.datetime.fromtimestamp(expires_at_ms / 1000).astimezone()
    return expires.strftime("%Y-%m-%d %H:%M:%S %Z")


@auth_app.command()
@handle_cli_errors
def login(
    force: bool = typer.Option(
        False, "--force", "-f", help="Log in again even if a session is cached"
    ),
) -> None:
    """Login to your MyHours account."""
    manager = container.session_manager
    existing = manager.status()
    if existing is not None and not force:
        console.print(
            Panel(
                f"[green]✅ Already authenticated as {escape(existing.email)}[/green]\n"
                "Use [bold]myhours auth status[/bold] to see details.\n"
                "Use [bold]myhours auth logout[/bold] to sign out.",
                title="Authentication Status",
                border_style="green",
            )
        )
        return

    session = manager.login()
    console.print(
        Panel(
            "[green]✅ Authentication successful![/green]\n"
            f"Signed in as: {escape(session.email)}\n"
            f"Access token expires: {_format_expiry(session.expires_at)}",
            title="Login Complete",
            border_style="green",
        )
    )


@auth_app.command()
@handle_cli_errors
def logout(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Logout and clear stored credentials."""
    manager = container.session_manager
    if not yes:
        confirm = typer.confirm(
            "Are you sure you want to logout and delete stored credentials?"
        )
        if not confirm:
            console.print("[yellow]Logout cancelled.[/yellow]")
            return

    if not manager.logout():
        console.print(
            Panel(
                "[yellow]ℹ️ Not currently authenticated[/yellow]\n"
                "Use [bold]myhours auth login[/bold] to sign in.",
                title="Logout",
                border_style="yellow",
            )
        )
        return

    console.print(
        Panel(
            "[green]✅ Successfully logged out![/green]\n"
            "Stored credentials have been removed.",
            title="Logout Complete",
            border_style="green",
        )
    )


@auth_app.command()
@handle_cli_errors
def status() -> None:
    """Check authentication status."""
    manager = container.session_manager
    session = manager.status()
    if session is None:
        console.print(
            Panel(
                "[red]❌ Not authenticated[/red]\n"
                "Use [bold]myhours auth login[/bold] to sign in.",
                title="Authentication Status",
                border_style="red",
            )
        )
        return

    expired = manager.is_expired(session)
    table = Table(title="Authentication Details")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Email", escape(session.email))
    table.add_row("Status", "⚠️ Token Expired" if expired else "✅ Authenticated")
    table.add_row("Expires At", _format_expiry(session.expires_at))
    table.add_row("Credential File", escape(str(container.settings.credentials_path)))
    console.print(table)

    if expired:
        console.print(
            "[yellow]The token will be refreshed on the next command, "
            "or run [bold]myhours auth refresh[/bold] now.[/yellow]"
        )


@auth_app.command()
@handle_cli_errors
def refresh() -> None:
    """Refresh authentication tokens."""
    console.print("[blue]🔄 Refreshing authentication tokens...[/blue]")
    session = container.session_manager.refresh()
    console.print(
        Panel(
            "[green]✅ Tokens refreshed successfully![/green]\n"
            f"Access token expires: {_format_expiry(session.expires_at)}",
            title="Refresh Complete",
            border_style="green",
        )
    )
