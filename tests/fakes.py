"""
Test doubles shared across the myhours test suite.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx

from myhours.auth.credential_store import CredentialStore
from myhours.models.session import Session

# 2024-03-04 12:00:00 UTC, a Monday
NOW_MS = 1_709_553_600_000

API_BASE = "https://api.test/api"


class InMemoryCredentialStore(CredentialStore):
    """Credential store that keeps the session in memory."""

    def __init__(self, session: Optional[Session] = None) -> None:
        self.session = session
        self.saved: list[Session] = []

    def load(self) -> Optional[Session]:
        return self.session

    def save(self, session: Session) -> None:
        self.session = session
        self.saved.append(session)

    def clear(self) -> None:
        self.session = None


class RecordingTransport:
    """
    ``httpx.MockTransport`` handler returning canned responses.

    Routes are keyed by ``(method, path)``; unmatched requests get a 404.
    Every request is recorded for later assertions.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
    ) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(
            status_code, json=json_body
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(
                404, json={"message": "Not found", "validationErrors": []}
            )
        return route(request)

    def bodies(self, method: str, path: str) -> list[dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path == path
        ]
