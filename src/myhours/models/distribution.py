"""
Hour distribution models.

Defines the weekly hour allocation entered on the command line and the
ordered steps the hour distributor executes against the remote service.
"""

from __future__ import annotations

import datetime as _dt
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from myhours.exceptions import ValidationError


class Allocation(BaseModel):
    """Hours to book on every weekday against a project and optional task."""

    hours: float = Field(..., gt=0, le=24, description="Hours per weekday")
    project_id: int = Field(..., description="MyHours project id")
    task_id: Optional[int] = Field(default=None, description="MyHours task id")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> Allocation:
        """
        Parse an allocation written as ``HOURS:PROJECT[:TASK]``.

        Parameters
        ----------
        text : str
            Allocation text, e.g. ``"2.5:1234"`` or ``"4:1234:987"``.

        Returns
        -------
        Allocation
            The parsed allocation.

        Raises
        ------
        ValidationError
            If the text is not in the expected format or a value is out of
            range.
        """
        parts = [part.strip() for part in text.split(":")]
        if len(parts) not in (2, 3) or not all(parts):
            raise ValidationError(
                f"Allocation must look like HOURS:PROJECT[:TASK], got {text!r}",
                field_name="allocation",
                invalid_value=text,
            )
        try:
            hours = float(parts[0])
            project_id = int(parts[1])
            task_id = int(parts[2]) if len(parts) == 3 else None
        except ValueError as e:
            raise ValidationError(
                f"Allocation contains a non-numeric value: {text!r}",
                field_name="allocation",
                invalid_value=text,
            ) from e
        if not 0 < hours <= 24:
            raise ValidationError(
                f"Allocation hours must be between 0 and 24, got {hours}",
                field_name="allocation",
                invalid_value=text,
            )
        return cls(hours=hours, project_id=project_id, task_id=task_id)


class DeleteMarkedEntries(BaseModel):
    """Remove every entry on ``day`` whose note equals ``note``."""

    kind: Literal["delete"] = "delete"
    day: _dt.date
    note: str

    model_config = ConfigDict(frozen=True)

    def describe(self) -> str:
        return f"{self.day:%a %Y-%m-%d}: delete entries noted {self.note!r}"


class CreateEntry(BaseModel):
    """Insert one entry of ``duration_seconds`` on ``day``."""

    kind: Literal["create"] = "create"
    day: _dt.date
    note: str
    duration_seconds: int = Field(..., ge=0)
    project_id: int
    task_id: Optional[int] = None
    tag_ids: List[int] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def describe(self) -> str:
        target = f"project {self.project_id}"
        if self.task_id is not None:
            target += f" / task {self.task_id}"
        hours = self.duration_seconds / 3600
        return f"{self.day:%a %Y-%m-%d}: create {hours:g}h on {target}"


DistributionStep = Union[DeleteMarkedEntries, CreateEntry]
