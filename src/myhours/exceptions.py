"""
Custom exceptions for the myhours application.

This module defines domain-specific exceptions for error handling
throughout the application, including authentication failures, remote API
errors, local input validation and credential storage problems.
"""

from __future__ import annotations

from typing import Any


class MyHoursError(Exception):
    """Base exception for all myhours errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize MyHoursError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class AuthError(MyHoursError):
    """
    Exception raised for authentication-related failures.

    Raised when the remote service rejects a password login or a refresh
    token exchange, or when interactive credential entry produced an email
    address that does not validate. Always fatal for the current invocation.

    Attributes
    ----------
    message : str
        Human-readable error message.
    status_code : int | None
        HTTP status code returned by the token endpoint, if any.

    Examples
    --------
    >>> try:
    ...     session = session_manager.ensure_authenticated()
    ... except AuthError as e:
    ...     print(f"Login failed: {e.message}")
    ...     raise typer.Exit(1)
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        status_code: int | None = None,
    ) -> None:
        """
        Initialize AuthError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Authentication failed").
        status_code : int | None, optional
            HTTP status code returned by the token endpoint (default: None).
        """
        self.status_code: int | None = status_code
        super().__init__(message)


class RemoteError(MyHoursError):
    """
    Exception raised when a MyHours data call does not succeed.

    Wraps any non-success HTTP status from the logs or tags endpoints as
    well as transport failures (connection refused, timeouts). These are
    never retried.

    Attributes
    ----------
    message : str
        Human-readable error message.
    status_code : int | None
        HTTP status code, or None for transport failures.
    validation_errors : list[str]
        Field-level messages reported by the service.

    Examples
    --------
    >>> try:
    ...     client.list_entries(token, date(2024, 3, 4))
    ... except RemoteError as e:
    ...     if e.status_code == 401:
    ...         print("Token rejected")
    """

    def __init__(
        self,
        message: str = "MyHours API request failed",
        status_code: int | None = None,
        validation_errors: list[str] | None = None,
    ) -> None:
        """
        Initialize RemoteError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "MyHours API request failed").
        status_code : int | None, optional
            HTTP status code returned by the API (default: None).
        validation_errors : list[str] | None, optional
            Field-level validation messages from the API (default: None).
        """
        self.status_code: int | None = status_code
        self.validation_errors: list[str] = validation_errors or []
        super().__init__(message)


class ValidationError(MyHoursError):
    """
    Exception raised for malformed local input.

    Raised for unparsable dates, allocations or email addresses before any
    network call is made.

    Attributes
    ----------
    message : str
        Human-readable error message.
    field_name : str | None
        The name of the field that failed validation.
    invalid_value : object
        The value that failed validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_name: str | None = None,
        invalid_value: object = None,
    ) -> None:
        """
        Initialize ValidationError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Validation failed").
        field_name : str | None, optional
            The name of the field that failed validation (default: None).
        invalid_value : object, optional
            The value that failed validation (default: None).
        """
        self.field_name: str | None = field_name
        self.invalid_value: object = invalid_value
        super().__init__(message)


class CredentialStoreError(MyHoursError):
    """
    Exception raised when the cached session cannot be read or written.

    Attributes
    ----------
    message : str
        Human-readable error message.
    path : str | None
        Location of the credential file involved.
    original_error : Exception | None
        The underlying I/O or decoding error.
    """

    def __init__(
        self,
        message: str = "Could not access credential storage",
        path: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize CredentialStoreError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message.
        path : str | None, optional
            Location of the credential file (default: None).
        original_error : Exception | None, optional
            The underlying exception (default: None).
        """
        self.path: str | None = path
        self.original_error: Exception | None = original_error
        super().__init__(message)


class InvariantViolationError(MyHoursError):
    """
    Exception raised when internal logic produces an impossible state.

    Signals a programming error rather than a user-facing condition.

    Attributes
    ----------
    message : str
        Human-readable error message.
    context : dict[str, Any]
        Values that describe the offending state.
    """

    def __init__(
        self,
        message: str = "Internal invariant violated",
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize InvariantViolationError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message.
        context : dict[str, Any] | None, optional
            Values describing the offending state (default: None).
        """
        self.context: dict[str, Any] = context or {}
        super().__init__(message)
