"""Pydantic schemas for Attendance and clock events."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    WAITING_APPROVAL = "waiting_approval"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"


STATUS_LABELS: dict[AttendanceStatus, str] = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.WAITING_APPROVAL: "Waiting Approval",
    AttendanceStatus.ON_LEAVE: "On Leave",
    AttendanceStatus.HOLIDAY: "Holiday",
}

ClockKind = Literal["clock_in", "clock_out"]


# ── Attendance ──────────────────────────────────────────────────────
class Attendance(BaseModel):
    id: str
    employee_id: str
    employee_name: str | None = None
    employee_code: str | None = None
    work_schedule_id: str | None = None
    date: dt.date
    clock_in_time: dt.datetime | None = None
    clock_out_time: dt.datetime | None = None
    clock_in_latitude: float | None = None
    clock_in_longitude: float | None = None
    clock_out_latitude: float | None = None
    clock_out_longitude: float | None = None
    clock_in_proof_url: str | None = None
    clock_out_proof_url: str | None = None
    status: AttendanceStatus
    working_hours: float | None = None
    late_minutes: int = 0
    early_leave_minutes: int = 0
    notes: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, self.status.value)


class AttendanceUpdate(BaseModel):
    clock_in_time: dt.datetime | None = None
    clock_out_time: dt.datetime | None = None
    status: AttendanceStatus | None = None
    notes: str | None = None


class AttendanceFilter(BaseModel):
    employee_id: str | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    status: AttendanceStatus | None = None
    page: int | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None


# ── Clock in / out ──────────────────────────────────────────────────
class Coordinates(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: float | None = None


class ClockRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    notes: str | None = None

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > 500:
            raise ValueError("Notes must not exceed 500 characters")
        return v or None
