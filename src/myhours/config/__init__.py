"""
Configuration management module for myhours.

Handles application settings, environment variables and the location of the
cached credential file.
"""

from __future__ import annotations

__all__: list[str] = []
