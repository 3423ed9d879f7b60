"""Domain entity — hours booked against a project."""

import datetime
from dataclasses import dataclass

from boatrecords.domain.entities.base import Entity

MAX_HOURS_PER_ENTRY = 24


@dataclass(kw_only=True)
class TimesheetEntry(Entity):
    """A time booking.

    ``billing_rate`` is only meaningful when ``billable`` is True; the
    timesheet repository clears it otherwise.
    """

    user_id: str
    user_name: str  # snapshot for display
    date: datetime.date
    hours: float
    project_id: str
    created_by: str
    billable: bool = False
    billing_rate: float | None = None
    task_id: str | None = None
    note: str | None = None
    updated_by: str | None = None


def is_valid_hours(hours: float) -> bool:
    """Hours are booked in quarter-hour increments, at most a full day."""
    if hours <= 0 or hours > MAX_HOURS_PER_ENTRY:
        return False
    return (hours * 4) % 1 == 0
