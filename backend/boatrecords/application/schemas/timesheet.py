"""Pydantic DTOs for timesheet entries."""

import datetime

from pydantic import BaseModel, Field, field_validator

from boatrecords.domain.entities import is_valid_hours


def _check_hours(value: float | None) -> float | None:
    if value is not None and not is_valid_hours(value):
        raise ValueError("hours must be in 0.25 increments, greater than 0 and at most 24")
    return value


class TimesheetEntryCreate(BaseModel):
    date: datetime.date
    hours: float
    project_id: str = Field(..., min_length=1)
    task_id: str | None = None
    billable: bool
    billing_rate: float | None = Field(None, ge=0)
    note: str | None = None

    @field_validator("hours")
    @classmethod
    def validate_hours(cls, value: float) -> float:
        return _check_hours(value)


class TimesheetEntryUpdate(BaseModel):
    date: datetime.date | None = None
    hours: float | None = None
    project_id: str | None = None
    task_id: str | None = None
    billable: bool | None = None
    billing_rate: float | None = Field(None, ge=0)
    note: str | None = None

    @field_validator("hours")
    @classmethod
    def validate_hours(cls, value: float | None) -> float | None:
        return _check_hours(value)
