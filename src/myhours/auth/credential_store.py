"""
Persistence for the cached MyHours session.

Defines the store contract the session manager depends on, and the JSON
file implementation used by the CLI. Tests substitute an in-memory store.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from myhours.exceptions import CredentialStoreError
from myhours.models.session import Session

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """
    Abstract storage for the single cached session record.

    Examples
    --------
    >>> class MemoryStore(CredentialStore):
    ...     def __init__(self):
    ...         self.session = None
    ...     def load(self):
    ...         return self.session
    ...     def save(self, session):
    ...         self.session = session
    ...     def clear(self):
    ...         self.session = None
    """

    @abstractmethod
    def load(self) -> Optional[Session]:
        """
        Return the cached session, or None when nobody has logged in.

        Raises
        ------
        CredentialStoreError
            If a record exists but cannot be read.
        """

    @abstractmethod
    def save(self, session: Session) -> None:
        """Replace the cached session with ``session``."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the cached session if there is one."""


class JsonFileCredentialStore(CredentialStore):
    """
    Credential store backed by a single JSON file.

    The record is written as ``{email, accessToken, refreshToken, expiresAt}``
    with owner-only permissions. A missing file means "not yet
    authenticated". No locking is done; one process at a time is assumed.

    Parameters
    ----------
    path : Path
        Location of the credential file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[Session]:
        if not self.path.exists():
            logger.debug("No credential file at %s", self.path)
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return Session.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise CredentialStoreError(
                f"Could not open storage for reading: {self.path}: {e}",
                path=str(self.path),
                original_error=e,
            ) from e

    def save(self, session: Session) -> None:
        # Written beside the target and renamed so a failed write keeps the old record
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(session.model_dump(by_alias=True), f, indent=2)

            # Set restrictive permissions on token file
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise CredentialStoreError(
                f"Could not write storage: {self.path}: {e}",
                path=str(self.path),
                original_error=e,
            ) from e
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.debug("Session for %s saved to %s", session.email, self.path)

    def clear(self) -> None:
        if not self.path.exists():
            return
        try:
            self.path.unlink()
        except OSError as e:
            raise CredentialStoreError(
                f"Could not remove storage: {self.path}: {e}",
                path=str(self.path),
                original_error=e,
            ) from e
        logger.info("Removed credential file %s", self.path)
