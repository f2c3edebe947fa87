"""Tests for the leave request form, its dialog and the quota overview."""

from datetime import date

import pytest

from hris.capture.uploads import UploadFile
from hris.core.exceptions import ClientValidationError
from hris.schemas.leave import DurationType, LeaveQuota, LeaveType
from hris.views.leave import (LeaveQuotaView, LeaveRequestDialog,
                              LeaveRequestForm, requested_days)

ANNUAL = LeaveType(id="lt1", code="ANN", name="Annual Leave")
SICK = LeaveType(id="lt2", code="SICK", name="Sick Leave", has_quota=False)
RETIRED = LeaveType(id="lt3", code="OLD", name="Retired", is_active=False)


def _quota(available: float, leave_type_id: str = "lt1") -> LeaveQuota:
    return LeaveQuota(
        id="q1", employee_id="e1", leave_type_id=leave_type_id, year=2026,
        available_quota=available,
    )


def _filled_form(quota: float = 10, **fields) -> LeaveRequestForm:
    form = LeaveRequestForm([ANNUAL, SICK, RETIRED], [_quota(quota)])
    form.leave_type_id = "lt1"
    form.start_date = date(2026, 11, 2)
    form.end_date = date(2026, 11, 4)
    form.reason = "Visiting family abroad"
    for key, value in fields.items():
        setattr(form, key, value)
    return form


# ── Requested days ──────────────────────────────────────────────────
@pytest.mark.parametrize(
    "start, end, duration, expected",
    [
        (date(2026, 11, 2), date(2026, 11, 2), DurationType.FULL_DAY, 1),
        (date(2026, 11, 2), date(2026, 11, 4), DurationType.FULL_DAY, 3),
        (date(2026, 11, 2), date(2026, 11, 2), DurationType.HALF_DAY_MORNING, 0.5),
        (date(2026, 11, 2), date(2026, 11, 4), DurationType.HALF_DAY_AFTERNOON, 1.5),
        (date(2026, 12, 31), date(2027, 1, 1), DurationType.FULL_DAY, 2),
        (None, date(2026, 11, 4), DurationType.FULL_DAY, 0),
        (date(2026, 11, 2), None, DurationType.FULL_DAY, 0),
    ],
)
def test_requested_days(start, end, duration, expected):
    assert requested_days(start, end, duration) == expected


def test_weekends_are_not_excluded():
    # Friday to Monday
    assert requested_days(date(2026, 10, 30), date(2026, 11, 2)) == 4


# ── Form ────────────────────────────────────────────────────────────
def test_inactive_types_are_hidden():
    form = LeaveRequestForm([ANNUAL, SICK, RETIRED])
    assert [t.id for t in form.leave_types] == ["lt1", "lt2"]


def test_end_date_picker_disables_days_before_start():
    form = _filled_form()
    assert form.end_date_disabled(date(2026, 11, 1))
    assert not form.end_date_disabled(date(2026, 11, 2))
    form.start_date = None
    assert not form.end_date_disabled(date(2000, 1, 1))


def test_quota_exactly_enough_is_sufficient():
    form = _filled_form(quota=3)
    assert form.requested_days == 3
    assert form.is_quota_sufficient
    assert form.quota_warning is None
    assert form.is_valid


def test_insufficient_quota_blocks_submission():
    form = _filled_form(quota=2.5)
    assert not form.is_quota_sufficient
    assert form.quota_warning == "Insufficient quota. You have 2.5 days available."
    assert form.errors() == ["Insufficient quota. You have 2.5 days available."]
    with pytest.raises(ClientValidationError):
        form.to_request()


def test_type_without_quota_record_is_unlimited():
    form = _filled_form(quota=0, leave_type_id="lt2")
    assert form.selected_quota is None
    assert form.is_quota_sufficient


def test_half_day_fits_half_a_day_of_quota():
    form = _filled_form(
        quota=0.5,
        end_date=date(2026, 11, 2),
        duration_type=DurationType.HALF_DAY_MORNING,
    )
    assert form.requested_days == 0.5
    assert form.is_valid


def test_reason_minimum_length():
    form = _filled_form(reason="Too short")
    assert len(form.reason) == 9
    assert form.errors() == ["Reason must be at least 10 characters"]
    form.reason = "Long enough"
    assert form.is_valid


def test_errors_are_reported_in_order():
    form = LeaveRequestForm([ANNUAL])
    assert form.errors() == [
        "Please select a leave type",
        "Please select start and end dates",
        "Reason must be at least 10 characters",
    ]
    form = _filled_form(end_date=date(2026, 11, 1))
    assert form.errors()[0] == "End date must not be before start date"


def test_to_request_builds_body():
    body = _filled_form(duration_type=DurationType.HALF_DAY_AFTERNOON).to_request()
    assert body.leave_type_id == "lt1"
    assert body.duration_type is DurationType.HALF_DAY_AFTERNOON
    assert body.end_date == date(2026, 11, 4)


def test_attachment_checks():
    form = _filled_form()
    form.set_attachment(UploadFile("note.pdf", b"%PDF", "application/pdf"))
    assert form.attachment is not None
    with pytest.raises(ClientValidationError):
        form.set_attachment(UploadFile("note.txt", b"hi", "text/plain"))
    form.set_attachment(None)
    assert form.attachment is None


# ── Dialog ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_dialog_loads_active_types(api, notifier):
    dialog = LeaveRequestDialog(api, notifier)
    await dialog.open()
    assert [t.id for t in dialog.form.leave_types] == ["lt1", "lt2"]


@pytest.mark.asyncio
async def test_invalid_form_sends_nothing(api, backend, notifier):
    dialog = LeaveRequestDialog(api, notifier, quotas=[_quota(1)])
    await dialog.open()
    dialog.form.leave_type_id = "lt1"
    dialog.form.start_date = date(2026, 11, 2)
    dialog.form.end_date = date(2026, 11, 4)
    dialog.form.reason = "Visiting family abroad"

    assert await dialog.submit() is None
    assert backend.count("POST", "/leave/requests") == 0
    assert notifier.last.title == "Validation Error"
    assert notifier.last.variant == "destructive"
    assert notifier.last.description == "Insufficient quota. You have 1 days available."


@pytest.mark.asyncio
async def test_valid_form_submits_and_calls_back(api, backend, notifier):
    refreshed = []

    async def on_success():
        refreshed.append(True)

    dialog = LeaveRequestDialog(api, notifier, quotas=[_quota(10)], on_success=on_success)
    await dialog.open()
    dialog.form.leave_type_id = "lt1"
    dialog.form.start_date = date(2026, 11, 2)
    dialog.form.end_date = date(2026, 11, 3)
    dialog.form.reason = "Visiting family abroad"

    created = await dialog.submit()
    assert created is not None
    assert backend.bodies[("POST", "/leave/requests")] == {
        "leave_type_id": "lt1",
        "start_date": "2026-11-02",
        "end_date": "2026-11-03",
        "duration_type": "full_day",
        "reason": "Visiting family abroad",
    }
    assert notifier.last.description == "Leave request submitted"
    assert refreshed == [True]
    assert not dialog.submitting


@pytest.mark.asyncio
async def test_server_error_is_toasted(api, backend, notifier):
    backend.failures[("POST", "/leave/requests")] = (400, "QUOTA_EXCEEDED", "Leave quota exceeded")
    dialog = LeaveRequestDialog(api, notifier)
    dialog.form.leave_types = [ANNUAL]
    dialog.form.leave_type_id = "lt1"
    dialog.form.start_date = dialog.form.end_date = date(2026, 11, 2)
    dialog.form.reason = "Visiting family abroad"

    assert await dialog.submit() is None
    assert notifier.last.description == "Leave quota exceeded"
    assert not dialog.submitting


@pytest.mark.asyncio
async def test_bad_attachment_is_refused(api, notifier):
    dialog = LeaveRequestDialog(api, notifier)
    big = UploadFile("scan.pdf", b"x" * (5 * 1024 * 1024 + 1), "application/pdf")
    assert not dialog.choose_attachment(big)
    assert dialog.form.attachment is None
    assert notifier.last.title == "Invalid file"
    assert notifier.last.description == "File size must be less than 5MB"


# ── Quota overview ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_quota_view_groups_by_employee(api, notifier):
    view = LeaveQuotaView(api, notifier)
    assert await view.refresh()
    names = [g.employee_name for g in view.rows]
    assert names == ["Alice Smith", "Bob Jones", "Unknown Employee"]
    assert [t.id for t in view.quota_types] == ["lt1", "lt3"]

    view.set_query("bob")
    assert [g.employee_id for g in view.visible()] == ["e2"]


@pytest.mark.asyncio
async def test_quota_adjustment(api, backend, notifier):
    view = LeaveQuotaView(api, notifier)
    await view.refresh()

    assert await view.adjust("e2", "lt1", 2, "  ") is None
    assert notifier.last.description == "Please provide a reason for the adjustment"
    assert backend.count("POST", "/leave/quota/adjust") == 0

    quota = await view.adjust("e2", "lt1", 2, "Carry-over from last year")
    assert quota.available_quota == 5
    assert notifier.last.description == "Leave quota adjusted successfully"
    bob = next(g for g in view.rows if g.employee_id == "e2")
    assert bob.quotas[0].available_quota == 5
