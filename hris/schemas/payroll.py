"""Pydantic schemas for payroll settings, components and records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PAID = "paid"


# ── Settings ────────────────────────────────────────────────────────
class PayrollSettings(BaseModel):
    id: str | None = None
    company_id: str | None = None
    pay_period: str = "monthly"
    pay_day: int = 25
    currency: str = "IDR"
    late_deduction_per_minute: float = 0
    early_leave_deduction_per_minute: float = 0
    overtime_rate_per_hour: float = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PayrollSettingsUpdate(BaseModel):
    pay_period: Literal["monthly", "biweekly", "weekly"] | None = None
    pay_day: int | None = Field(default=None, ge=1, le=31)
    currency: str | None = None
    late_deduction_per_minute: float | None = Field(default=None, ge=0)
    early_leave_deduction_per_minute: float | None = Field(default=None, ge=0)
    overtime_rate_per_hour: float | None = Field(default=None, ge=0)


# ── Components ──────────────────────────────────────────────────────
class PayrollComponent(BaseModel):
    id: str
    company_id: str | None = None
    name: str
    type: Literal["allowance", "deduction"]
    amount: float | None = None
    is_percentage: bool = False
    is_taxable: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PayrollComponentCreate(BaseModel):
    name: str
    type: Literal["allowance", "deduction"]
    amount: float | None = Field(default=None, ge=0)
    is_percentage: bool = False
    is_taxable: bool = False

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Component name is required")
        return v


class EmployeeComponentAssign(BaseModel):
    component_id: str
    amount: float | None = Field(default=None, ge=0)


# ── Records ─────────────────────────────────────────────────────────
class PayrollRecord(BaseModel):
    id: str
    employee_id: str
    employee_name: str | None = None
    employee_code: str | None = None
    period_month: int = Field(ge=1, le=12)
    period_year: int
    base_salary: float = 0
    allowances: dict[str, float] = Field(default_factory=dict)
    deductions: dict[str, float] = Field(default_factory=dict)
    total_allowances: float = 0
    total_deductions: float = 0
    overtime_minutes: int = 0
    overtime_amount: float = 0
    late_minutes: int = 0
    late_deduction_amount: float = 0
    early_leave_minutes: int = 0
    early_leave_deduction_amount: float = 0
    gross_salary: float = 0
    net_salary: float = 0
    status: PayrollStatus = PayrollStatus.DRAFT
    paid_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_final(self) -> bool:
        return self.status is PayrollStatus.PAID


class PayrollPeriod(BaseModel):
    period_month: int = Field(ge=1, le=12)
    period_year: int = Field(ge=2000, le=9999)


class PayrollGenerate(PayrollPeriod):
    employee_ids: list[str] | None = None


class PayrollRecordFilter(BaseModel):
    period_month: int | None = None
    period_year: int | None = None
    status: PayrollStatus | None = None
    employee_id: str | None = None
    page: int | None = None
    limit: int | None = None


class PayrollRecordUpdate(BaseModel):
    base_salary: float | None = Field(default=None, ge=0)
    allowances: dict[str, float] | None = None
    deductions: dict[str, float] | None = None

    @model_validator(mode="after")
    def _non_negative_items(self) -> PayrollRecordUpdate:
        for items in (self.allowances or {}, self.deductions or {}):
            if any(v < 0 for v in items.values()):
                raise ValueError("Itemised amounts must not be negative")
        return self


class PayrollSummary(BaseModel):
    total_employees: int = 0
    total_gross_salary: float = 0
    total_net_salary: float = 0
    total_paid: int = 0
    total_draft: int = 0
