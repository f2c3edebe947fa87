"""Pydantic schemas for Company / Employee / Invitation."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, field_validator

_USERNAME_RE = re.compile(r"^[a-z0-9][a-z0-9_-]{2,49}$")

Gender = Literal["Male", "Female"]
EmploymentType = Literal["permanent", "probation", "contract", "internship", "freelance"]
EmploymentStatus = Literal["active", "inactive"]


# ── Company ─────────────────────────────────────────────────────────
class Company(BaseModel):
    id: str
    name: str
    username: str
    address: str | None = None
    logo_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompanyCreate(BaseModel):
    company_name: str
    company_username: str
    company_address: str | None = None

    @field_validator("company_name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name must not be empty")
        return v

    @field_validator("company_username")
    @classmethod
    def _username(cls, v: str) -> str:
        v = v.strip().lower()
        if not _USERNAME_RE.match(v):
            raise ValueError(
                "Username must be 3-50 lowercase letters, digits, '-' or '_'"
            )
        return v


class CompanyUpdate(BaseModel):
    name: str | None = None
    address: str | None = None
    logo_url: str | None = None


# ── Employee ────────────────────────────────────────────────────────
class Employee(BaseModel):
    id: str
    user_id: str | None = None
    company_id: str | None = None
    work_schedule_id: str | None = None
    position_id: str | None = None
    grade_id: str | None = None
    branch_id: str | None = None
    employee_code: str
    full_name: str
    nik: str | None = None
    gender: Gender | None = None
    phone_number: str | None = None
    address: str | None = None
    place_of_birth: str | None = None
    dob: date | None = None
    avatar_url: str | None = None
    education: str | None = None
    hire_date: date | None = None
    resignation_date: date | None = None
    employment_type: EmploymentType | None = None
    employment_status: EmploymentStatus = "active"
    warning_letter: str | None = None
    bank_name: str | None = None
    bank_account_holder_name: str | None = None
    bank_account_number: str | None = None
    base_salary: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # joined by the list endpoint
    position_name: str | None = None
    grade_name: str | None = None
    branch_name: str | None = None
    work_schedule_name: str | None = None
    invitation_status: str | None = None


# Always sent, even when blank, so the backend reports the missing value
EMPLOYEE_REQUIRED_FIELDS = (
    "work_schedule_id",
    "position_id",
    "grade_id",
    "employee_code",
    "full_name",
    "email",
    "gender",
    "phone_number",
    "hire_date",
    "employment_type",
)


class EmployeeCreate(BaseModel):
    work_schedule_id: str
    position_id: str
    grade_id: str
    branch_id: str | None = None
    employee_code: str
    full_name: str
    email: str
    role: Literal["employee", "manager"] = "employee"
    nik: str | None = None
    gender: Gender
    phone_number: str
    address: str | None = None
    place_of_birth: str | None = None
    dob: date | None = None
    education: str | None = None
    hire_date: date
    employment_type: EmploymentType
    warning_letter: str | None = None
    bank_name: str | None = None
    bank_account_holder_name: str | None = None
    bank_account_number: str | None = None
    base_salary: float | None = None

    @field_validator("full_name", "employee_code")
    @classmethod
    def _required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be empty")
        if len(v) > 200:
            raise ValueError("Field must not exceed 200 characters")
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v

    def to_payload(self) -> dict:
        """JSON body with blank optional fields removed."""
        data = self.model_dump(mode="json")
        return {
            key: value
            for key, value in data.items()
            if key in EMPLOYEE_REQUIRED_FIELDS or value not in ("", None)
        }


class EmployeeUpdate(BaseModel):
    work_schedule_id: str | None = None
    position_id: str | None = None
    grade_id: str | None = None
    branch_id: str | None = None
    employee_code: str | None = None
    full_name: str | None = None
    nik: str | None = None
    gender: Gender | None = None
    phone_number: str | None = None
    address: str | None = None
    place_of_birth: str | None = None
    dob: date | None = None
    education: str | None = None
    hire_date: date | None = None
    employment_type: EmploymentType | None = None
    warning_letter: str | None = None
    bank_name: str | None = None
    bank_account_holder_name: str | None = None
    bank_account_number: str | None = None
    base_salary: float | None = None


class EmployeeFilter(BaseModel):
    search: str | None = None
    position_id: str | None = None
    branch_id: str | None = None
    grade_id: str | None = None
    employment_status: EmploymentStatus | None = None
    employment_type: EmploymentType | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None
    page: int | None = None
    limit: int | None = None


# ── Invitation ──────────────────────────────────────────────────────
class Invitation(BaseModel):
    id: str
    company_id: str
    company_name: str | None = None
    employee_id: str
    email: str
    token: str
    role: Literal["employee", "manager"] | None = None
    status: Literal["pending", "accepted", "revoked", "expired"]
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
