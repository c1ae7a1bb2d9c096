"""
Resolve tag names given on the command line to MyHours tags.
"""

from __future__ import annotations

import logging
from typing import Iterable

from myhours.models.time_entry import Tag
from myhours.services.myhours_client import MyHoursClient

logger = logging.getLogger(__name__)


def split_tag_names(raw: str | None) -> list[str]:
    """Split a comma separated ``--tags`` value, dropping blanks."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


class TagResolver:
    """
    Look up tags by exact, case-sensitive name and create the missing ones.

    Two processes creating the same new tag at once can both succeed and
    leave duplicates behind; the API offers no conditional create.
    """

    def __init__(
        self, client: MyHoursClient, access_token: str, hex_color: str = "#007bff"
    ) -> None:
        self.client = client
        self.access_token = access_token
        self.hex_color = hex_color

    def resolve(self, names: Iterable[str]) -> list[Tag]:
        """
        Return tags for ``names``, creating any that do not exist yet.

        Existing tags come first in the order they were requested, followed
        by newly created tags in the order they were created. A name given
        more than once is resolved once.
        """
        requested = list(dict.fromkeys(names))
        if not requested:
            return []

        existing: dict[str, Tag] = {}
        for tag in self.client.list_tags(self.access_token):
            existing.setdefault(tag.name, tag)

        matched = [existing[name] for name in requested if name in existing]
        created = [
            self.client.create_tag(self.access_token, name, self.hex_color)
            for name in requested
            if name not in existing
        ]
        logger.debug(
            "Resolved tags: %d existing, %d created", len(matched), len(created)
        )
        return matched + created
