"""
CLI constants for myhours.

This module provides shared constants for CLI commands including:
- Exit codes
- Report headings and empty-state messages

NOTE: Domain constants should remain in their domain modules.
This module is for CLI-wide shared values only.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Exit Codes
# =============================================================================
# Success is the default exit status 0. Every handled failure exits 1 and the
# error category is shown in the message instead.

EXIT_FAILURE: Final[int] = 1
"""
Any error: rejected credentials, failed API call, invalid input.
"""

# =============================================================================
# Report Text
# =============================================================================

NO_TASKS_MESSAGE: Final[str] = "There are no tasks"
NO_RUNNING_TASKS_MESSAGE: Final[str] = "There are no running tasks"

STANDUP_YESTERDAY_HEADING: Final[str] = "Yesterday:"
STANDUP_EARLIER_HEADING: Final[str] = "Last week:"
STANDUP_TODAY_FOOTER: Final[str] = "\nToday:\n  - Something"

TIME_FORMAT: Final[str] = "%H:%M"
"""Clock format for report start/end times (local time)."""
