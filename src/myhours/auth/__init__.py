"""
Authentication module for myhours.

Handles the MyHours password login, token caching and silent token refresh.
"""

from __future__ import annotations

from myhours.auth.credential_store import CredentialStore, JsonFileCredentialStore
from myhours.auth.session_manager import SessionManager, epoch_millis

__all__: list[str] = [
    "CredentialStore",
    "JsonFileCredentialStore",
    "SessionManager",
    "epoch_millis",
]
