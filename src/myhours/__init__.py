"""
myhours - Personal command-line client for the MyHours time-tracking service.

Start and stop timed work entries, report the work logged on a day, and
backfill a week of hours across projects from the terminal.
"""

from __future__ import annotations

__version__ = "0.4.0"
__author__ = "myhours-cli"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
