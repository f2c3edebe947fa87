"""Pydantic schemas for leave types, quotas and requests."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator

MIN_REASON_LENGTH = 10


class DurationType(str, Enum):
    FULL_DAY = "full_day"
    HALF_DAY_MORNING = "half_day_morning"
    HALF_DAY_AFTERNOON = "half_day_afternoon"

    @property
    def is_half_day(self) -> bool:
        return self is not DurationType.FULL_DAY


class LeaveStatus(str, Enum):
    WAITING_APPROVAL = "waiting_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


# ── Leave type ──────────────────────────────────────────────────────
class LeaveType(BaseModel):
    id: str
    company_id: str | None = None
    code: str
    name: str
    description: str | None = None
    color: str | None = None
    default_quota: float = 0
    is_active: bool = True
    requires_approval: bool = True
    has_quota: bool = True
    quota_calculation_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LeaveTypeCreate(BaseModel):
    code: str
    name: str
    description: str | None = None
    color: str | None = None
    default_quota: float = 0
    is_active: bool = True
    requires_approval: bool = True
    has_quota: bool = True
    quota_calculation_type: Literal["fixed", "accrual"] | None = None

    @field_validator("code", "name")
    @classmethod
    def _required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name and code are required")
        return v

    @model_validator(mode="after")
    def _quota(self) -> LeaveTypeCreate:
        if self.has_quota and self.default_quota < 0:
            raise ValueError("Default quota must not be negative")
        return self


# ── Quota ───────────────────────────────────────────────────────────
class LeaveQuota(BaseModel):
    id: str
    employee_id: str
    leave_type_id: str
    leave_type_name: str | None = None
    year: int
    opening_balance: float = 0
    earned_quota: float = 0
    adjustment_quota: float = 0
    used_quota: float = 0
    pending_quota: float = 0
    available_quota: float = 0

    @property
    def expected_available(self) -> float:
        """Balance implied by the components; the server value stays authoritative."""
        return (
            self.opening_balance
            + self.earned_quota
            + self.adjustment_quota
            - self.used_quota
            - self.pending_quota
        )


class QuotaAdjustment(BaseModel):
    employee_id: str
    leave_type_id: str
    adjustment: float
    reason: str

    @field_validator("reason")
    @classmethod
    def _reason(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please provide a reason for the adjustment")
        return v


# ── Requests ────────────────────────────────────────────────────────
class LeaveRequest(BaseModel):
    id: str
    employee_id: str
    employee_name: str | None = None
    leave_type_id: str
    leave_type_name: str | None = None
    start_date: date
    end_date: date
    duration_type: DurationType = DurationType.FULL_DAY
    total_days: float = 0
    reason: str | None = None
    status: LeaveStatus
    attachment_url: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LeaveRequestCreate(BaseModel):
    leave_type_id: str
    start_date: date
    end_date: date
    duration_type: DurationType = DurationType.FULL_DAY
    reason: str

    @field_validator("reason")
    @classmethod
    def _reason(cls, v: str) -> str:
        if len(v) < MIN_REASON_LENGTH:
            raise ValueError(f"Reason must be at least {MIN_REASON_LENGTH} characters")
        return v

    @model_validator(mode="after")
    def _range(self) -> LeaveRequestCreate:
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class LeaveRejection(BaseModel):
    rejection_reason: str
