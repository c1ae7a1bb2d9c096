"""
Dependency Injection Container for myhours.

This module provides a centralized container for the objects the CLI
commands need. It implements a lightweight dependency injection pattern that:

- Manages singleton instances (settings, HTTP client, credential store,
  session manager) via cached properties
- Provides factory methods for token-bound services (transient)
- Enables easy mock injection for testing

Usage
-----
    >>> from myhours.container import container
    >>> session = container.session_manager.ensure_authenticated()
    >>> resolver = container.create_tag_resolver(session.access_token)

Design Principles
-----------------
- Singletons are cached via @cached_property (lazy initialization)
- Token-bound services are created per call
- Container can be reset for testing isolation
"""

from __future__ import annotations

from functools import cached_property
from typing import Optional

import typer

from myhours.auth.credential_store import CredentialStore, JsonFileCredentialStore
from myhours.auth.session_manager import SessionManager
from myhours.config.settings import Settings, get_settings
from myhours.services.hour_distributor import HourDistributor
from myhours.services.myhours_client import MyHoursClient
from myhours.services.tag_resolver import TagResolver


def prompt_for_credentials() -> tuple[str, str]:
    """Ask for the MyHours email and password on the terminal."""
    email = typer.prompt("What is your MyHours email address?")
    password = typer.prompt("What is your MyHours password?", hide_input=True)
    return email, password


class Container:
    """
    Dependency injection container for myhours.

    Parameters
    ----------
    settings : Settings | None
        Settings to use instead of loading them from the environment.

    Examples
    --------
    Overriding dependencies in tests:

        >>> c = Container(settings=Settings(config_dir=tmp_path))
        >>> c.client = MyHoursClient(http_client=mock_http)
        >>> c.session_manager.ensure_authenticated()
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        if settings is not None:
            self.__dict__["settings"] = settings

    # -------------------------------------------------------------------------
    # Singletons (cached on first access)
    # -------------------------------------------------------------------------

    @cached_property
    def settings(self) -> Settings:
        return get_settings()

    @cached_property
    def client(self) -> MyHoursClient:
        return MyHoursClient(
            base_url=self.settings.api_base_url,
            api_version=self.settings.api_version,
            timeout=self.settings.request_timeout,
        )

    @cached_property
    def credential_store(self) -> CredentialStore:
        return JsonFileCredentialStore(self.settings.credentials_path)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            store=self.credential_store,
            client=self.client,
            prompt=prompt_for_credentials,
        )

    # -------------------------------------------------------------------------
    # Token-bound factories (transient)
    # -------------------------------------------------------------------------

    def create_tag_resolver(self, access_token: str) -> TagResolver:
        return TagResolver(
            self.client, access_token, hex_color=self.settings.default_tag_color
        )

    def create_hour_distributor(self, access_token: str) -> HourDistributor:
        return HourDistributor(
            self.client,
            access_token,
            marker_note=self.settings.fudge_marker_note,
            tag_resolver=self.create_tag_resolver(access_token),
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """
        Drop every cached instance.

        The HTTP client is closed first if it was created.
        """
        client = self.__dict__.get("client")
        if client is not None:
            client.close()
        for name in ("settings", "client", "credential_store", "session_manager"):
            self.__dict__.pop(name, None)


# Global container instance
container = Container()
