"""
HTTP client for the MyHours REST API.

Wraps the token, logs and tags endpoints used by the CLI. The client holds
no authentication state: token endpoints take credentials, every data call
takes the bearer token explicitly. Calls are synchronous and never retried;
any unexpected status is raised immediately.

Classes
-------
MyHoursClient
    Thin typed wrapper over an ``httpx.Client``.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from myhours import __version__
from myhours.exceptions import AuthError, MyHoursError, RemoteError
from myhours.models.session import TokenGrant
from myhours.models.time_entry import Tag, TimeEntry

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "https://api2.myhours.com/api"
_LOGS_PAGE_SIZE = 1000

T = TypeVar("T")


def _iso_utc(moment: _dt.datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC timestamp with a ``Z`` suffix."""
    return moment.astimezone(_dt.timezone.utc).isoformat().replace("+00:00", "Z")


class MyHoursClient:
    """
    Client for the MyHours API.

    Parameters
    ----------
    base_url : str
        API root, e.g. ``https://api2.myhours.com/api``.
    api_version : str
        Value of the ``api-version`` header.
    timeout : float
        Per-request timeout in seconds.
    http_client : httpx.Client | None
        Pre-built client, mainly for tests using ``httpx.MockTransport``.

    Examples
    --------
    >>> with MyHoursClient() as client:
    ...     grant = client.login("me@example.com", "secret")
    ...     entries = client.list_entries(grant.access_token, date.today())
    """

    def __init__(
        self,
        base_url: str = _DEFAULT_BASE_URL,
        api_version: str = "1.0",
        timeout: float = 5.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self._http = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> MyHoursClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Token endpoints
    # -------------------------------------------------------------------------

    def login(self, email: str, password: str) -> TokenGrant:
        """
        Exchange an email and password for a token pair.

        Raises
        ------
        AuthError
            If the service rejects the credentials.
        """
        response = self._request(
            "POST",
            "/tokens/login",
            expected=(200,),
            json={
                "grantType": "password",
                "clientId": "api",
                "email": email,
                "password": password,
            },
            error_cls=AuthError,
        )
        grant = self._parse(
            response, "/tokens/login", TokenGrant.model_validate, error_cls=AuthError
        )
        logger.info("Logged in as %s", email)
        return grant

    def refresh(self, refresh_token: str) -> TokenGrant:
        """
        Exchange a refresh token for a new token pair.

        Raises
        ------
        AuthError
            If the service rejects the refresh token.
        """
        response = self._request(
            "POST",
            "/tokens/refresh",
            expected=(200,),
            json={"grantType": "refresh_token", "refreshToken": refresh_token},
            error_cls=AuthError,
        )
        grant = self._parse(
            response, "/tokens/refresh", TokenGrant.model_validate, error_cls=AuthError
        )
        logger.info("Access token refreshed")
        return grant

    # -------------------------------------------------------------------------
    # Logs
    # -------------------------------------------------------------------------

    def list_entries(self, access_token: str, day: _dt.date) -> list[TimeEntry]:
        """Return every log entry recorded on ``day``."""
        response = self._request(
            "GET",
            "/logs",
            expected=(200,),
            access_token=access_token,
            params={
                "date": day.isoformat(),
                "startIndex": 0,
                "step": _LOGS_PAGE_SIZE,
            },
        )
        entries = self._parse(
            response,
            "/logs",
            lambda body: [TimeEntry.model_validate(item) for item in body],
        )
        logger.debug("Fetched %d entries for %s", len(entries), day)
        return entries

    def start_entry(
        self,
        access_token: str,
        note: str,
        tags: Optional[Iterable[Tag]] = None,
        start_time: Optional[_dt.datetime] = None,
        project_id: Optional[int] = None,
        task_id: Optional[int] = None,
        day: Optional[_dt.date] = None,
    ) -> int:
        """
        Start a new running entry and return its id.

        ``day`` defaults to today; ``start_time`` defaults to the moment the
        service receives the request.
        """
        payload = {
            "projectId": project_id,
            "taskId": task_id,
            "date": (day or _dt.date.today()).isoformat(),
            "start": _iso_utc(start_time) if start_time else None,
            "tagIds": [tag.id for tag in tags] if tags is not None else None,
            "note": note,
            "billable": False,
        }
        response = self._request(
            "POST",
            "/logs/startNewLog",
            expected=(201,),
            access_token=access_token,
            json=payload,
        )
        entry_id = self._parse(response, "/logs/startNewLog", _entry_id)
        logger.info("Started entry %s", entry_id)
        return entry_id

    def stop_entry(
        self,
        access_token: str,
        entry_id: int,
        at: Optional[_dt.datetime] = None,
    ) -> dict[str, Any]:
        """Stop the running timer of ``entry_id`` at ``at`` (default now)."""
        moment = at or _dt.datetime.now(_dt.timezone.utc)
        response = self._request(
            "POST",
            "/logs/stopTimer",
            expected=(200,),
            access_token=access_token,
            json={"logId": entry_id, "time": _iso_utc(moment)},
        )
        logger.info("Stopped entry %s", entry_id)
        if not response.content:
            return {}
        return self._parse(response, "/logs/stopTimer", _json_object)

    def insert_entry(
        self,
        access_token: str,
        day: _dt.date,
        note: str,
        duration_seconds: int,
        project_id: Optional[int] = None,
        task_id: Optional[int] = None,
        tag_ids: Optional[list[int]] = None,
    ) -> int:
        """Insert a completed entry with an explicit duration and date."""
        payload = {
            "projectId": project_id,
            "taskId": task_id,
            "date": day.isoformat(),
            "duration": duration_seconds,
            "tagIds": tag_ids or [],
            "note": note,
            "billable": False,
        }
        response = self._request(
            "POST",
            "/logs/insertlog",
            expected=(201,),
            access_token=access_token,
            json=payload,
        )
        entry_id = self._parse(response, "/logs/insertlog", _entry_id)
        logger.debug(
            "Inserted entry %s on %s (%ds, project %s)",
            entry_id,
            day,
            duration_seconds,
            project_id,
        )
        return entry_id

    def delete_entry(self, access_token: str, entry_id: int) -> None:
        """Delete a single entry."""
        self._request(
            "DELETE",
            f"/logs/{entry_id}",
            expected=(200, 202, 204),
            access_token=access_token,
        )

    def delete_entries_by_note(
        self, access_token: str, day: _dt.date, note: str
    ) -> list[int]:
        """
        Delete every entry on ``day`` whose note equals ``note`` exactly.

        Returns
        -------
        list[int]
            Ids of the deleted entries, possibly empty.
        """
        doomed = [
            entry.id for entry in self.list_entries(access_token, day) if entry.note == note
        ]
        for entry_id in doomed:
            self.delete_entry(access_token, entry_id)
        if doomed:
            logger.info("Deleted %d entries noted %r on %s", len(doomed), note, day)
        return doomed

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def list_tags(self, access_token: str) -> list[Tag]:
        """Return all non-archived tags."""
        response = self._request(
            "GET",
            "/tags",
            expected=(200,),
            access_token=access_token,
            params={"hideArchived": "true"},
        )
        tags = self._parse(
            response,
            "/tags",
            lambda body: [Tag.model_validate(item) for item in body["data"]],
        )
        return [tag for tag in tags if not tag.archived]

    def create_tag(self, access_token: str, name: str, hex_color: str) -> Tag:
        """Create a tag called ``name``."""
        response = self._request(
            "POST",
            "/tags",
            expected=(201,),
            access_token=access_token,
            json={"name": name, "hexColor": hex_color},
        )
        tag = self._parse(response, "/tags", Tag.model_validate)
        logger.info("Created tag %r (id %s)", tag.name, tag.id)
        return tag

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _headers(self, access_token: Optional[str]) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "api-version": self.api_version,
            "User-Agent": f"myhours-cli/{__version__}",
        }
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        expected: tuple[int, ...],
        access_token: Optional[str] = None,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        error_cls: type[MyHoursError] = RemoteError,
    ) -> httpx.Response:
        """
        Send a request and check its status.

        Raises
        ------
        AuthError | RemoteError
            ``error_cls`` for an unexpected status; ``RemoteError`` for
            transport failures.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._http.request(
                method,
                url,
                headers=self._headers(access_token),
                json=json,
                params=params,
            )
        except httpx.HTTPError as e:
            raise RemoteError(
                f"{method} {path} failed: {type(e).__name__}: {e}"
            ) from e

        if response.status_code in expected:
            return response

        message, validation_errors = _error_details(response)
        logger.warning(
            "%s %s returned HTTP %d: %s", method, path, response.status_code, message
        )
        text = f"ApiError {message}"
        if validation_errors:
            text += "\n  " + "\n  ".join(validation_errors)
        if error_cls is AuthError:
            raise AuthError(text, status_code=response.status_code)
        raise RemoteError(
            text,
            status_code=response.status_code,
            validation_errors=validation_errors,
        )

    def _parse(
        self,
        response: httpx.Response,
        path: str,
        parse: Callable[[Any], T],
        error_cls: type[MyHoursError] = RemoteError,
    ) -> T:
        """
        Decode a success body with ``parse``.

        Raises
        ------
        AuthError | RemoteError
            ``error_cls`` when the body is not JSON or does not have the
            expected shape.
        """
        try:
            return parse(response.json())
        except (ValueError, KeyError, TypeError, PydanticValidationError) as e:
            reason = _describe_parse_error(e)
            logger.warning("Unexpected response body from %s: %s", path, reason)
            message = f"Unexpected response from {path}: {reason}"
            if error_cls is AuthError:
                raise AuthError(message, status_code=response.status_code) from e
            raise RemoteError(message, status_code=response.status_code) from e


def _describe_parse_error(error: Exception) -> str:
    # Pydantic messages echo input values, which may hold tokens
    if isinstance(error, PydanticValidationError):
        fields = sorted(
            {".".join(str(part) for part in err["loc"]) or "body" for err in error.errors()}
        )
        return f"invalid fields: {', '.join(fields)}"
    return f"{type(error).__name__}: {error}"


def _entry_id(body: Any) -> int:
    return int(body["id"])


def _json_object(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise TypeError(f"expected a JSON object, got {type(body).__name__}")
    return body


def _error_details(response: httpx.Response) -> tuple[str, list[str]]:
    """Pull ``message`` and ``validationErrors`` out of an error body."""
    fallback = f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return (response.text[:200] or fallback), []
    if not isinstance(body, dict):
        return fallback, []
    message = body.get("message") or fallback
    errors = body.get("validationErrors") or []
    return str(message), [str(error) for error in errors]
