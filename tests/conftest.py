"""
Pytest configuration and fixtures for myhours tests.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import httpx
import pytest

from myhours.auth.session_manager import SessionManager
from myhours.config.settings import Settings
from myhours.container import container
from myhours.models.session import Session
from myhours.services.myhours_client import MyHoursClient
from tests.fakes import API_BASE, NOW_MS, InMemoryCredentialStore, RecordingTransport


@pytest.fixture
def transport() -> RecordingTransport:
    """Recording mock transport."""
    return RecordingTransport()


@pytest.fixture
def api_client(transport: RecordingTransport) -> MyHoursClient:
    """MyHoursClient wired to the recording transport."""
    http = httpx.Client(transport=httpx.MockTransport(transport))
    return MyHoursClient(base_url=API_BASE, http_client=http)


@pytest.fixture
def memory_store() -> InMemoryCredentialStore:
    """Empty in-memory credential store."""
    return InMemoryCredentialStore()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the environment and the user's home."""
    return Settings(
        _env_file=None,
        config_dir=tmp_path,
        api_base_url=API_BASE,
        fudge_marker_note="Fudged hours",
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock MyHours API client."""
    return MagicMock(spec=MyHoursClient)


@pytest.fixture
def cli_container(test_settings, mock_client, memory_store):
    """
    Global container wired with test doubles for CLI tests.

    The credential store starts with a valid session so commands do not
    prompt.
    """
    container.reset()
    memory_store.session = Session(
        email="ada@example.com",
        access_token="valid-token",
        refresh_token="refresh-token",
        expires_at=NOW_MS + 3_600_000,
    )
    container.settings = test_settings
    container.client = mock_client
    container.credential_store = memory_store
    container.session_manager = SessionManager(
        store=memory_store,
        client=mock_client,
        prompt=lambda: ("ada@example.com", "secret"),
        clock=lambda: NOW_MS,
    )
    yield container
    container.reset()


@pytest.fixture(autouse=True)
def reset_myhours_logger():
    """Drop handlers installed by ``configure_logging`` during a test."""
    yield
    logger = logging.getLogger("myhours")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
