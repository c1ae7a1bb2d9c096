"""
Standardized error handling for CLI commands.

Provides:
- Error display formatters with a consistent format
- Rich panel wrappers for error display on standard error
- A decorator mapping domain exceptions to exit status 1

Error Format:
    Category -> Problem -> Hint (optional)

Examples:
    >>> format_error("Authentication", "ApiError Invalid credentials")
    'Error: Authentication: ApiError Invalid credentials'
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, TypeVar, cast

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from myhours.cli.constants import EXIT_FAILURE
from myhours.exceptions import (
    AuthError,
    CredentialStoreError,
    MyHoursError,
    RemoteError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Module-level console for CLI error display
err_console = Console(stderr=True)

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# Error Categories
# =============================================================================


class ErrorCategory:
    """
    Standard error categories for CLI commands.

    - AUTH: Login or token refresh was rejected
    - REMOTE: A MyHours API call failed
    - VALIDATION: Local input could not be parsed
    - STORAGE: The credential file could not be read or written
    - INTERNAL: A logic fault inside myhours
    """

    AUTH = "Authentication"
    REMOTE = "Remote API"
    VALIDATION = "Validation"
    STORAGE = "Storage"
    INTERNAL = "Internal"


_HINTS = {
    ErrorCategory.AUTH: "Run 'myhours auth logout' and then 'myhours auth login' to sign in again.",
    ErrorCategory.STORAGE: "Check the credential file or remove it with 'myhours auth logout'.",
}


def categorize(error: MyHoursError) -> str:
    """Map an exception to its display category."""
    if isinstance(error, AuthError):
        return ErrorCategory.AUTH
    if isinstance(error, RemoteError):
        return ErrorCategory.REMOTE
    if isinstance(error, ValidationError):
        return ErrorCategory.VALIDATION
    if isinstance(error, CredentialStoreError):
        return ErrorCategory.STORAGE
    return ErrorCategory.INTERNAL


# =============================================================================
# Formatting and Display
# =============================================================================


def format_error(category: str, message: str, hint: Optional[str] = None) -> str:
    """
    Format error message.

    Parameters
    ----------
    category : str
        Error category, one of the ``ErrorCategory`` constants.
    message : str
        Human-readable error description.
    hint : Optional[str]
        Actionable suggestion for resolving the error.

    Returns
    -------
    str
        Formatted error message string.
    """
    lines = [f"Error: {category}: {message}"]
    if hint is not None:
        lines.append(f"   Hint: {hint}")
    return "\n".join(lines)


def display_error_panel(
    category: str,
    message: str,
    hint: Optional[str] = None,
    title: str = "Error",
) -> None:
    """Display a formatted error in a red Rich panel on standard error."""
    formatted = format_error(category, message, hint)
    err_console.print(
        Panel(
            f"[red]{escape(formatted)}[/red]",
            title=title,
            border_style="red",
        )
    )


def handle_cli_errors(func: F) -> F:
    """
    Report ``MyHoursError`` failures and exit with status 1.

    Any other exception propagates unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except MyHoursError as e:
            category = categorize(e)
            logger.debug("Command %s failed", func.__name__, exc_info=True)
            display_error_panel(category, e.message, hint=_HINTS.get(category))
            raise typer.Exit(code=EXIT_FAILURE) from e

    return cast(F, wrapper)
