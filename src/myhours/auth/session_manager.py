"""
MyHours session lifecycle.

Owns the authentication state machine: prompt-and-login when nothing is
cached, reuse a cached token while it is valid, and silently refresh it once
it expires. Every transition that obtains new tokens persists the full
session before returning.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from myhours.auth.credential_store import CredentialStore
from myhours.exceptions import AuthError, CredentialStoreError
from myhours.models.session import LoginCredentials, Session
from myhours.services.myhours_client import MyHoursClient

logger = logging.getLogger(__name__)

CredentialPrompt = Callable[[], tuple[str, str]]
Clock = Callable[[], int]


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class SessionManager:
    """
    Authentication state machine for the single local user.

    Parameters
    ----------
    store : CredentialStore
        Where the session is cached between invocations.
    client : MyHoursClient
        Client used for the login and refresh calls.
    prompt : CredentialPrompt
        Called with no arguments to obtain ``(email, password)`` when no
        session is cached.
    clock : Clock, optional
        Returns the current time in epoch milliseconds (default: wall clock).
    """

    def __init__(
        self,
        store: CredentialStore,
        client: MyHoursClient,
        prompt: CredentialPrompt,
        clock: Clock = epoch_millis,
    ) -> None:
        self.store = store
        self.client = client
        self.prompt = prompt
        self.clock = clock

    def ensure_authenticated(self) -> Session:
        """
        Return a session whose access token is usable right now.

        Returns
        -------
        Session
            The cached session, a refreshed one, or a brand new one.

        Raises
        ------
        AuthError
            If the prompted email is invalid, or the service rejects the
            password or refresh token.
        CredentialStoreError
            If the cached session cannot be read or written.
        """
        session = self.store.load()
        if session is None:
            return self.login()

        if session.is_expired(self.clock()):
            return self._refresh(session)

        return session

    def login(self) -> Session:
        """
        Prompt for credentials, log in and cache the new session.

        Raises
        ------
        AuthError
            If the email does not validate or the service rejects the login.
        """
        email, password = self.prompt()
        try:
            credentials = LoginCredentials(email=email, password=password)
        except PydanticValidationError as e:
            raise AuthError(f"Invalid login details: {_first_error(e)}") from e

        issued_at = self.clock()
        grant = self.client.login(credentials.email, credentials.password)
        session = Session.from_grant(credentials.email, grant, issued_at)
        self.store.save(session)
        logger.info("Stored new session for %s", session.email)
        return session

    def refresh(self) -> Session:
        """
        Refresh the cached session regardless of its expiry.

        Raises
        ------
        AuthError
            If nothing is cached or the refresh token is rejected.
        """
        session = self.store.load()
        if session is None:
            raise AuthError("Not authenticated. Run 'myhours auth login' first.")
        return self._refresh(session)

    def status(self) -> Optional[Session]:
        """Return the cached session without touching the network."""
        return self.store.load()

    def is_expired(self, session: Session) -> bool:
        return session.is_expired(self.clock())

    def logout(self) -> bool:
        """Forget the cached session. Returns whether one existed."""
        try:
            existed = self.store.load() is not None
        except CredentialStoreError:
            existed = True
        self.store.clear()
        return existed

    def _refresh(self, session: Session) -> Session:
        logger.debug("Refreshing token for %s", session.email)
        issued_at = self.clock()
        grant = self.client.refresh(session.refresh_token)
        refreshed = Session.from_grant(session.email, grant, issued_at)
        self.store.save(refreshed)
        return refreshed


def _first_error(error: PydanticValidationError) -> str:
    """Readable message for the first failing field."""
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first.get('msg', 'invalid value')}"
