"""Pydantic schemas for dashboard statistics and notifications."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


# ── Dashboard ───────────────────────────────────────────────────────
class DashboardData(BaseModel):
    total_employees: int = 0
    active_employees: int = 0
    attendance_today: int = 0
    pending_leave_requests: int = 0


class EmployeeCount(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0


class EmployeeStatusStats(BaseModel):
    permanent: int = 0
    probation: int = 0
    contract: int = 0
    internship: int = 0


class DailyAttendanceStats(BaseModel):
    on_time: int = 0
    late: int = 0
    absent: int = 0
    sick: int = 0


class MonthlyAttendancePoint(BaseModel):
    date: str
    count: int


# ── Notifications ───────────────────────────────────────────────────
class Notification(BaseModel):
    id: str
    type: str
    title: str
    message: str = ""
    is_read: bool = False
    data: dict | None = None
    created_at: datetime | None = None


class NotificationPreference(BaseModel):
    notification_type: str
    email_enabled: bool = True
    push_enabled: bool = True
