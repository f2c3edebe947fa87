"""
Leave screens: the request form/dialog, the request list with approve /
reject / cancel actions, and the admin quota overview.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date

from pydantic import ValidationError

from hris.api.v1.api import HrisApi
from hris.capture.uploads import UploadFile, validate_upload
from hris.core.config import settings
from hris.core.exceptions import (ClientValidationError, notify_failure,
                                   validation_message)
from hris.core.notify import Notifier
from hris.schemas.common import Page
from hris.schemas.employee import EmployeeFilter
from hris.schemas.leave import (MIN_REASON_LENGTH, DurationType, LeaveQuota,
                                LeaveRequest, LeaveRequestCreate, LeaveStatus,
                                LeaveType, QuotaAdjustment)
from hris.views.base import ActionGuard, ListView

logger = logging.getLogger(__name__)


def requested_days(
    start: date | None,
    end: date | None,
    duration_type: DurationType = DurationType.FULL_DAY,
) -> float:
    """Calendar days between *start* and *end* inclusive, halved for half days."""
    if start is None or end is None:
        return 0
    days = (end - start).days + 1
    if DurationType(duration_type).is_half_day:
        return days * 0.5
    return days


# ── Request form ────────────────────────────────────────────────────
class LeaveRequestForm:
    def __init__(
        self,
        leave_types: list[LeaveType] | None = None,
        quotas: list[LeaveQuota] | None = None,
    ) -> None:
        self.leave_types = [t for t in leave_types or [] if t.is_active]
        self.quotas = list(quotas or [])
        self.reset()

    def reset(self) -> None:
        self.leave_type_id = ""
        self.duration_type = DurationType.FULL_DAY
        self.start_date: date | None = None
        self.end_date: date | None = None
        self.reason = ""
        self.attachment: UploadFile | None = None

    def end_date_disabled(self, day: date) -> bool:
        """Whether the end-date picker greys out *day*."""
        return self.start_date is not None and day < self.start_date

    @property
    def requested_days(self) -> float:
        return requested_days(self.start_date, self.end_date, self.duration_type)

    @property
    def selected_type(self) -> LeaveType | None:
        return next((t for t in self.leave_types if t.id == self.leave_type_id), None)

    @property
    def selected_quota(self) -> LeaveQuota | None:
        return next((q for q in self.quotas if q.leave_type_id == self.leave_type_id), None)

    @property
    def is_quota_sufficient(self) -> bool:
        quota = self.selected_quota
        return quota is None or quota.available_quota >= self.requested_days

    @property
    def quota_warning(self) -> str | None:
        if self.is_quota_sufficient:
            return None
        available = self.selected_quota.available_quota  # type: ignore[union-attr]
        return f"Insufficient quota. You have {available:g} days available."

    def set_attachment(self, file: UploadFile | None) -> None:
        """Attach *file* after checking size and type; raises on rejection."""
        if file is not None:
            validate_upload(
                file,
                max_bytes=settings.MAX_IMAGE_BYTES,
                allowed_types=settings.ALLOWED_ATTACHMENT_TYPES,
                field="attachment",
            )
        self.attachment = file

    def errors(self) -> list[str]:
        problems: list[str] = []
        if not self.leave_type_id:
            problems.append("Please select a leave type")
        if self.start_date is None or self.end_date is None:
            problems.append("Please select start and end dates")
        elif self.end_date < self.start_date:
            problems.append("End date must not be before start date")
        if len(self.reason) < MIN_REASON_LENGTH:
            problems.append(f"Reason must be at least {MIN_REASON_LENGTH} characters")
        if not self.is_quota_sufficient:
            problems.append(self.quota_warning or "Insufficient quota")
        return problems

    @property
    def is_valid(self) -> bool:
        return not self.errors()

    def to_request(self) -> LeaveRequestCreate:
        problems = self.errors()
        if problems:
            raise ClientValidationError(problems[0])
        return LeaveRequestCreate(
            leave_type_id=self.leave_type_id,
            start_date=self.start_date,  # type: ignore[arg-type]
            end_date=self.end_date,  # type: ignore[arg-type]
            duration_type=self.duration_type,
            reason=self.reason,
        )


class LeaveRequestDialog:
    """Loads active leave types, then submits a :class:`LeaveRequestForm`."""

    def __init__(
        self,
        api: HrisApi,
        notifier: Notifier,
        quotas: list[LeaveQuota] | None = None,
        on_success: Callable[[], Awaitable[object]] | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.form = LeaveRequestForm(quotas=quotas)
        self.submitting = False
        self._on_success = on_success

    async def open(self) -> None:
        self.form.reset()
        try:
            types = await self.api.leave.list_types()
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to load leave types")
            return
        self.form.leave_types = [t for t in types if t.is_active]

    def choose_attachment(self, file: UploadFile) -> bool:
        try:
            self.form.set_attachment(file)
        except ClientValidationError as exc:
            notify_failure(self.notifier, exc, title="Invalid file", fallback=exc.message)
            return False
        return True

    async def submit(self) -> LeaveRequest | None:
        if self.submitting:
            return None
        try:
            body = self.form.to_request()
        except (ClientValidationError, ValidationError) as exc:
            message = exc.message if isinstance(exc, ClientValidationError) else validation_message(exc)
            self.notifier.error(message, title="Validation Error")
            return None

        self.submitting = True
        try:
            created = await self.api.leave.create_request(body, self.form.attachment)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to submit leave request")
            return None
        finally:
            self.submitting = False

        self.notifier.success("Leave request submitted")
        logger.info("Leave request %s submitted", created.id)
        if self._on_success is not None:
            await self._on_success()
        return created


# ── Request list ────────────────────────────────────────────────────
class LeaveRequestsView(ListView[LeaveRequest]):
    search_fields = ("employee_name", "leave_type_name", "reason")
    load_error = "Failed to load leave requests"

    def __init__(
        self,
        api: HrisApi,
        notifier: Notifier,
        *,
        mine: bool = False,
        page_size: int | None = None,
    ) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.mine = mine
        self.status: LeaveStatus | None = None
        self.guard = ActionGuard(notifier, self.refresh)

    async def fetch(self) -> list[LeaveRequest] | Page[LeaveRequest]:
        if self.mine:
            return await self.api.leave.my_requests(self.status)
        return await self.api.leave.list_requests(
            status=self.status, page=self.page, limit=self.page_size
        )

    async def set_status(self, status: LeaveStatus | None) -> None:
        self.status = status
        self.page = 1
        await self.refresh()

    async def approve(self, request_id: str) -> LeaveRequest | None:
        return await self.guard.run(
            request_id,
            lambda: self.api.leave.approve_request(request_id),
            success="Leave request approved",
            failure="Failed to approve leave request",
        )

    async def reject(self, request_id: str, reason: str) -> LeaveRequest | None:
        if not reason.strip():
            self.notifier.error("Please provide a rejection reason", title="Validation Error")
            return None
        return await self.guard.run(
            request_id,
            lambda: self.api.leave.reject_request(request_id, reason.strip()),
            success="Leave request rejected",
            failure="Failed to reject leave request",
        )

    async def cancel(self, request_id: str) -> LeaveRequest | None:
        return await self.guard.run(
            request_id,
            lambda: self.api.leave.cancel_request(request_id),
            success="Leave request cancelled",
            failure="Failed to cancel leave request",
        )


# ── Quota overview ──────────────────────────────────────────────────
@dataclass
class QuotaGroup:
    employee_id: str
    employee_name: str
    employee_code: str
    quotas: list[LeaveQuota] = field(default_factory=list)


class LeaveQuotaView(ListView[QuotaGroup]):
    search_fields = ("employee_name", "employee_code")
    load_error = "Failed to load quota data"

    def __init__(self, api: HrisApi, notifier: Notifier, *, page_size: int | None = None) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.leave_types: list[LeaveType] = []
        self.leave_type_filter: str | None = None
        self.submitting = False

    async def fetch(self) -> list[QuotaGroup]:
        quotas, types, employees = await asyncio.gather(
            self.api.leave.list_quota(),
            self.api.leave.list_types(),
            self.api.employees.list(EmployeeFilter()),
        )
        self.leave_types = types
        names = {e.id: (e.full_name, e.employee_code) for e in employees.items}

        groups: dict[str, QuotaGroup] = {}
        for quota in quotas:
            group = groups.get(quota.employee_id)
            if group is None:
                name, code = names.get(quota.employee_id, ("Unknown Employee", ""))
                group = groups[quota.employee_id] = QuotaGroup(quota.employee_id, name, code)
            group.quotas.append(quota)
        return list(groups.values())

    @property
    def quota_types(self) -> list[LeaveType]:
        return [t for t in self.leave_types if t.has_quota]

    def include(self, row: QuotaGroup) -> bool:
        if not self.leave_type_filter:
            return True
        return any(q.leave_type_id == self.leave_type_filter for q in row.quotas)

    async def adjust(
        self,
        employee_id: str,
        leave_type_id: str,
        adjustment: float,
        reason: str,
    ) -> LeaveQuota | None:
        if not employee_id or not leave_type_id:
            self.notifier.error("Please select an employee and leave type", title="Validation Error")
            return None
        if not reason.strip():
            self.notifier.error("Please provide a reason for the adjustment", title="Validation Error")
            return None

        self.submitting = True
        try:
            quota = await self.api.leave.adjust_quota(
                QuotaAdjustment(
                    employee_id=employee_id,
                    leave_type_id=leave_type_id,
                    adjustment=adjustment,
                    reason=reason,
                )
            )
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to adjust leave quota")
            return None
        finally:
            self.submitting = False

        self.notifier.success("Leave quota adjusted successfully")
        await self.refresh()
        return quota
