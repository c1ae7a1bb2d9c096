"""
CLI interface module for myhours.

Provides the Typer-based command-line interface: authentication, starting
and stopping entries, daily reports and weekly hour distribution.
"""

from __future__ import annotations

__all__: list[str] = []
