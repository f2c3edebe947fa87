"""Pydantic schemas for work schedules, their times, locations and assignments."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")

WorkArrangement = Literal["WFO", "WFA", "Hybrid"]

DEFAULT_RADIUS_METERS = 100


def _check_time(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not _HHMM_RE.match(v):
        raise ValueError("Time must be HH:MM")
    return v


# ── Read models ─────────────────────────────────────────────────────
class WorkScheduleTime(BaseModel):
    id: str
    work_schedule_id: str
    day_of_week: int = Field(ge=0, le=6)
    clock_in_time: str | None = None
    clock_out_time: str | None = None
    break_start_time: str | None = None
    break_end_time: str | None = None
    is_off_day: bool = False
    location_type: WorkArrangement | None = None


class WorkScheduleLocation(BaseModel):
    id: str
    work_schedule_id: str
    location_name: str
    latitude: float
    longitude: float
    radius_meters: int = DEFAULT_RADIUS_METERS


class WorkSchedule(BaseModel):
    id: str
    company_id: str | None = None
    name: str
    type: WorkArrangement
    grace_period_minutes: int = 0
    description: str | None = None
    times: list[WorkScheduleTime] = Field(default_factory=list)
    locations: list[WorkScheduleLocation] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployeeScheduleAssignment(BaseModel):
    id: str
    employee_id: str
    work_schedule_id: str
    work_schedule_name: str | None = None
    start_date: date
    end_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ── Create / update ─────────────────────────────────────────────────
class WorkScheduleCreate(BaseModel):
    name: str
    type: WorkArrangement = "WFO"
    grace_period_minutes: int = Field(default=0, ge=0)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Schedule name is required")
        return v


class WorkScheduleUpdate(BaseModel):
    name: str | None = None
    type: WorkArrangement | None = None
    grace_period_minutes: int | None = Field(default=None, ge=0)
    description: str | None = None


class WorkScheduleTimeCreate(BaseModel):
    work_schedule_id: str
    day_of_week: int = Field(ge=0, le=6)
    clock_in_time: str | None = None
    clock_out_time: str | None = None
    break_start_time: str | None = None
    break_end_time: str | None = None
    is_off_day: bool = False
    location_type: WorkArrangement | None = None

    @field_validator("clock_in_time", "clock_out_time", "break_start_time", "break_end_time")
    @classmethod
    def _time(cls, v: str | None) -> str | None:
        return _check_time(v)

    @model_validator(mode="after")
    def _working_day_has_times(self) -> WorkScheduleTimeCreate:
        if not self.is_off_day and not (self.clock_in_time and self.clock_out_time):
            raise ValueError("Clock-in and clock-out times are required on working days")
        return self


class WorkScheduleTimeUpdate(BaseModel):
    clock_in_time: str | None = None
    clock_out_time: str | None = None
    break_start_time: str | None = None
    break_end_time: str | None = None
    is_off_day: bool | None = None
    location_type: WorkArrangement | None = None

    @field_validator("clock_in_time", "clock_out_time", "break_start_time", "break_end_time")
    @classmethod
    def _time(cls, v: str | None) -> str | None:
        return _check_time(v)


class WorkScheduleLocationCreate(BaseModel):
    work_schedule_id: str | None = None
    location_name: str
    latitude: float = Field(default=0, ge=-90, le=90)
    longitude: float = Field(default=0, ge=-180, le=180)
    radius_meters: int = Field(default=DEFAULT_RADIUS_METERS, gt=0)

    @field_validator("location_name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Location name is required")
        return v


class ScheduleAssignmentCreate(BaseModel):
    start_date: date
    end_date: date | None = None

    @model_validator(mode="after")
    def _range(self) -> ScheduleAssignmentCreate:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("End date must not be before the effective date")
        return self


class EmployeeScheduleCreate(ScheduleAssignmentCreate):
    employee_id: str
    work_schedule_id: str
