"""Tests for the endpoint groups: paths, payload shapes and response parsing."""

import json
from datetime import date

import pytest

from hris.api.v1.api import HrisApi
from hris.capture.uploads import UploadFile
from hris.core.exceptions import ApiError
from hris.schemas.attendance import AttendanceFilter, AttendanceStatus
from hris.schemas.auth import LoginRequest
from hris.schemas.employee import CompanyCreate, EmployeeCreate, EmployeeFilter
from hris.schemas.leave import LeaveRequestCreate, LeaveStatus
from hris.schemas.master import BranchCreate, EntityKind, GradeCreate
from hris.schemas.payroll import PayrollPeriod
from hris.schemas.schedule import ScheduleAssignmentCreate
from hris.schemas.subscription import ChangeSeatsRequest

PNG = UploadFile("avatar.png", b"\x89PNG fake", "image/png")


def _employee_body(**overrides) -> EmployeeCreate:
    fields = {
        "work_schedule_id": "s1",
        "position_id": "p1",
        "grade_id": "g1",
        "employee_code": "EMP010",
        "full_name": "Dana Green",
        "email": "Dana@Example.com",
        "gender": "Female",
        "phone_number": "08123456789",
        "hire_date": "2026-10-01",
        "employment_type": "probation",
        "nik": "",
        "address": "",
    }
    fields.update(overrides)
    return EmployeeCreate.model_validate(fields)


# ── Auth ────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_login_stores_tokens(api: HrisApi, backend):
    api.session.clear()
    tokens = await api.auth.login(LoginRequest(email=" Admin@Example.com ", password="secret123"))
    assert backend.bodies[("POST", "/auth/login")]["email"] == "admin@example.com"
    assert backend.calls_to("POST", "/auth/login")[0].authorization is None
    assert api.session.access_token == tokens.access_token
    assert tokens.access_token in backend.tokens
    assert api.session.refresh_token == "refresh-token"
    assert not api.session.is_access_token_expired()


@pytest.mark.asyncio
async def test_login_failure_keeps_session_empty(api: HrisApi):
    api.session.clear()
    with pytest.raises(ApiError) as excinfo:
        await api.auth.login(LoginRequest(email="admin@example.com", password="wrong"))
    assert excinfo.value.code == "INVALID_CREDENTIALS"
    assert api.session.access_token is None


@pytest.mark.asyncio
async def test_logout_clears_session(api: HrisApi, backend):
    token = api.session.access_token
    await api.auth.logout()
    assert backend.calls_to("POST", "/auth/logout")[0].authorization == f"Bearer {token}"
    assert not api.session.is_authenticated


@pytest.mark.asyncio
async def test_google_login_url(api: HrisApi):
    assert api.auth.google_login_url() == "http://test/api/v1/auth/login/oauth/google"


# ── Company ─────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_company_create_is_multipart(api: HrisApi, backend):
    body = CompanyCreate(company_name="Acme", company_username="Acme-HQ")
    company = await api.company.create(body, UploadFile("logo.png", b"png", "image/png"))
    assert company.username == "acme-hq"
    form = backend.forms[("POST", "/company")]
    assert json.loads(form["data"]) == {"company_name": "Acme", "company_username": "acme-hq"}
    assert form["attachment"]["filename"] == "logo.png"


# ── Employees ───────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_employee_list_reads_keyed_page(api: HrisApi, backend):
    page = await api.employees.list(EmployeeFilter(page=1, limit=2))
    assert [e.full_name for e in page.items] == ["Alice Smith", "Bob Jones"]
    assert page.total_items == 3
    assert page.total_pages == 2
    assert backend.calls_to("GET", "/employees")[0].query == {"page": "1", "limit": "2"}


@pytest.mark.asyncio
async def test_employee_list_search(api: HrisApi):
    page = await api.employees.list(EmployeeFilter(search="carol"))
    assert [e.employee_code for e in page.items] == ["EMP003"]


@pytest.mark.asyncio
async def test_employee_create_drops_blank_optional_fields(api: HrisApi, backend):
    employee = await api.employees.create(_employee_body())
    assert employee.full_name == "Dana Green"
    sent = backend.bodies[("POST", "/employees")]
    assert "nik" not in sent
    assert "address" not in sent
    assert sent["email"] == "dana@example.com"
    assert sent["hire_date"] == "2026-10-01"


@pytest.mark.asyncio
async def test_employee_create_with_avatar_is_multipart(api: HrisApi, backend):
    await api.employees.create(_employee_body(), PNG)
    form = backend.forms[("POST", "/employees")]
    assert json.loads(form["data"])["employee_code"] == "EMP010"
    assert form["avatar"] == {"filename": "avatar.png", "content_type": "image/png", "size": len(PNG.content)}


@pytest.mark.asyncio
async def test_employee_inactivate_sends_resignation_date(api: HrisApi, backend):
    await api.employees.inactivate("e2", date(2026, 12, 31))
    assert backend.bodies[("POST", "/employees/e2/inactivate")] == {"resignation_date": "2026-12-31"}
    assert backend.employees["e2"]["employment_status"] == "inactive"


# ── Leave ───────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_leave_requests_bare_list_becomes_page(api: HrisApi):
    page = await api.leave.list_requests(status=LeaveStatus.WAITING_APPROVAL)
    assert [r.id for r in page.items] == ["lr1", "lr2"]
    assert page.total_pages == 1
    assert page.total_items == 2


@pytest.mark.asyncio
async def test_leave_request_with_attachment_is_multipart(api: HrisApi, backend):
    body = LeaveRequestCreate(
        leave_type_id="lt1",
        start_date=date(2026, 11, 2),
        end_date=date(2026, 11, 2),
        duration_type="half_day_morning",
        reason="Doctor appointment in the morning",
    )
    created = await api.leave.create_request(body, UploadFile("note.pdf", b"%PDF", "application/pdf"))
    assert created.status is LeaveStatus.WAITING_APPROVAL
    form = backend.forms[("POST", "/leave/requests")]
    assert form["start_date"] == "2026-11-02"
    assert form["duration_type"] == "half_day_morning"
    assert form["attachment"]["content_type"] == "application/pdf"


@pytest.mark.asyncio
async def test_reject_request_sends_reason(api: HrisApi, backend):
    rejected = await api.leave.reject_request("lr1", "Team is short-staffed")
    assert rejected.status is LeaveStatus.REJECTED
    assert backend.bodies[("POST", "/leave/requests/lr1/reject")] == {
        "rejection_reason": "Team is short-staffed"
    }


# ── Attendance ──────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_my_attendance_reads_attendances_key(api: HrisApi, backend):
    page = await api.attendance.my_attendance(
        AttendanceFilter(start_date=date(2026, 10, 1), end_date=date(2026, 10, 31))
    )
    assert [a.status for a in page.items] == [AttendanceStatus.PRESENT, AttendanceStatus.LATE]
    assert page.items[1].status_label == "Late"
    assert backend.calls_to("GET", "/attendance/my")[0].query == {
        "start_date": "2026-10-01",
        "end_date": "2026-10-31",
    }


# ── Master data ─────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_master_create_uses_kind_path(api: HrisApi, backend):
    branch = await api.master.create(EntityKind.BRANCH, BranchCreate(name=" Jakarta "))
    assert branch.name == "Jakarta"
    assert backend.bodies[("POST", "/master/branches")] == {"name": "Jakarta"}


@pytest.mark.asyncio
async def test_master_create_rejects_wrong_model(api: HrisApi, backend):
    with pytest.raises(TypeError):
        await api.master.create(EntityKind.BRANCH, GradeCreate(name="Senior"))
    assert backend.count("POST", "/master/branches") == 0


# ── Schedules ───────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_active_schedule_is_none_without_assignment(api: HrisApi):
    assert await api.employee_schedules.active("e1") is None
    await api.schedule.assign_to_employee(
        "s1", "e1", ScheduleAssignmentCreate(start_date=date(2026, 11, 1))
    )
    active = await api.employee_schedules.active("e1")
    assert active is not None
    assert active.work_schedule_id == "s1"
    assert active.end_date is None


# ── Payroll ─────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_payroll_summary_sends_period(api: HrisApi, backend):
    summary = await api.payroll.summary(PayrollPeriod(period_month=10, period_year=2026))
    assert summary.total_employees == 2
    assert summary.total_net_salary == 16_500_000
    assert backend.calls_to("GET", "/payroll/summary")[0].query == {
        "period_month": "10",
        "period_year": "2026",
    }


@pytest.mark.asyncio
async def test_payroll_records_page(api: HrisApi):
    page = await api.payroll.list_records()
    assert {r.id for r in page.items} == {"pr1", "pr2"}
    assert not any(r.is_final for r in page.items)


# ── Subscription ────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_change_seats_upsell_returns_invoice(api: HrisApi):
    response = await api.subscription.change_seats(ChangeSeatsRequest(seat_count=8))
    assert response.invoice is not None
    assert response.invoice.payment_url == "https://pay.example/inv3"
    assert response.message == "Invoice created for additional seats"


@pytest.mark.asyncio
async def test_change_seats_downsell_has_no_invoice(api: HrisApi):
    response = await api.subscription.change_seats(ChangeSeatsRequest(seat_count=4))
    assert response.invoice is None
    assert response.message == "Seat change will apply at the next billing period"


@pytest.mark.asyncio
async def test_subscription_none_when_not_subscribed(api: HrisApi, backend):
    backend.subscription = None
    assert await api.subscription.mine() is None


# ── Notifications and dashboard ─────────────────────────────────────
@pytest.mark.asyncio
async def test_notifications_keep_unread_count(api: HrisApi, backend):
    page = await api.notifications.list(page=1, limit=2)
    assert len(page.items) == 2
    assert page.total_items == 3
    assert page.total_pages == 2
    assert page.extra == {"unread_count": 2}
    assert "unread_only" not in backend.calls_to("GET", "/notifications")[0].query


@pytest.mark.asyncio
async def test_notifications_unread_only(api: HrisApi, backend):
    page = await api.notifications.list(unread_only=True)
    assert {n.id for n in page.items} == {"n1", "n2"}
    assert backend.calls_to("GET", "/notifications")[0].query["unread_only"] == "true"


@pytest.mark.asyncio
async def test_monthly_attendance(api: HrisApi, backend):
    points = await api.dashboard.monthly_attendance(month=10, year=2026)
    assert [p.date for p in points] == ["2026-10-01", "2026-10-02", "2026-10-03"]
    assert backend.calls_to("GET", "/dashboard/monthly-attendance")[0].query == {
        "month": "10",
        "year": "2026",
    }
