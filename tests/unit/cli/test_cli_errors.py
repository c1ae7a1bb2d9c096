"""
Tests for CLI error formatting and the error handling decorator.
"""

from __future__ import annotations

import pytest
import typer

from myhours.cli.errors import (
    ErrorCategory,
    categorize,
    format_error,
    handle_cli_errors,
)
from myhours.exceptions import (
    AuthError,
    CredentialStoreError,
    InvariantViolationError,
    MyHoursError,
    RemoteError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error", "category"),
    [
        (AuthError("x"), ErrorCategory.AUTH),
        (RemoteError("x"), ErrorCategory.REMOTE),
        (ValidationError("x"), ErrorCategory.VALIDATION),
        (CredentialStoreError("x"), ErrorCategory.STORAGE),
        (InvariantViolationError("x"), ErrorCategory.INTERNAL),
        (MyHoursError("x"), ErrorCategory.INTERNAL),
    ],
)
def test_categorize(error, category):
    assert categorize(error) == category


def test_format_error_without_hint():
    assert format_error("Remote API", "ApiError boom") == "Error: Remote API: ApiError boom"


def test_format_error_with_hint():
    assert format_error("Storage", "bad file", hint="delete it") == (
        "Error: Storage: bad file\n   Hint: delete it"
    )


class TestHandleCliErrors:
    def test_passes_through_return_value(self):
        @handle_cli_errors
        def command() -> str:
            return "ok"

        assert command() == "ok"

    def test_domain_error_exits_with_one(self, capsys):
        @handle_cli_errors
        def command() -> None:
            raise RemoteError("ApiError [bold]nope[/bold]", status_code=500)

        with pytest.raises(typer.Exit) as exc_info:
            command()

        assert exc_info.value.exit_code == 1
        captured = capsys.readouterr()
        # Markup in messages is shown literally
        assert "[bold]nope[/bold]" in captured.err

    def test_other_errors_propagate(self):
        @handle_cli_errors
        def command() -> None:
            raise KeyError("bug")

        with pytest.raises(KeyError):
            command()

    def test_preserves_metadata(self):
        @handle_cli_errors
        def command() -> None:
            """Docstring."""

        assert command.__name__ == "command"
        assert command.__doc__ == "Docstring."
