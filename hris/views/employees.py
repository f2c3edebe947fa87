"""Employee list with debounced server-side search, plus create / edit / offboard."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from hris.api.v1.api import HrisApi
from hris.capture.uploads import UploadFile, validate_upload
from hris.core.config import settings
from hris.core.exceptions import ClientValidationError, notify_failure
from hris.core.notify import Notifier
from hris.schemas.common import Page
from hris.schemas.employee import (Employee, EmployeeCreate, EmployeeFilter,
                                   EmployeeUpdate, EmploymentStatus)
from hris.views.base import ActionGuard, Debouncer, ListView, parse_form

logger = logging.getLogger(__name__)


def check_image(file: UploadFile, field: str = "avatar") -> UploadFile:
    return validate_upload(
        file,
        max_bytes=settings.MAX_IMAGE_BYTES,
        allowed_types=settings.ALLOWED_IMAGE_TYPES,
        field=field,
    )


class EmployeesView(ListView[Employee]):
    load_error = "Failed to load employees"

    def __init__(self, api: HrisApi, notifier: Notifier, *, page_size: int | None = None) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.status: EmploymentStatus | None = None
        self.avatar: UploadFile | None = None
        self.submitting = False
        self.debouncer = Debouncer()
        self.guard = ActionGuard(notifier, self.refresh)

    async def fetch(self) -> Page[Employee]:
        return await self.api.employees.list(
            EmployeeFilter(
                search=self.query.strip() or None,
                employment_status=self.status,
                page=self.page,
                limit=self.page_size,
            )
        )

    def matches(self, row: Employee) -> bool:
        # search runs server-side
        return True

    def search(self, query: str) -> None:
        """Debounced: only the last query typed within the delay is fetched."""
        self.set_query(query)
        self.debouncer.call(self.refresh)

    # ── Create / edit ───────────────────────────────────────────────
    def choose_avatar(self, file: UploadFile | None) -> bool:
        if file is None:
            self.avatar = None
            return True
        try:
            self.avatar = check_image(file)
        except ClientValidationError as exc:
            notify_failure(self.notifier, exc, title="Invalid file", fallback=exc.message)
            return False
        return True

    async def create(self, fields: dict[str, Any]) -> Employee | None:
        body = parse_form(self.notifier, EmployeeCreate, fields)
        if body is None:
            return None

        self.submitting = True
        try:
            employee = await self.api.employees.create(body, self.avatar)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to create employee")
            return None
        finally:
            self.submitting = False

        self.avatar = None
        self.notifier.success("Employee created successfully. An invitation has been sent.")
        logger.info("Employee %s created", employee.employee_code)
        await self.refresh()
        return employee

    async def update(self, employee_id: str, fields: dict[str, Any]) -> Employee | None:
        body = parse_form(self.notifier, EmployeeUpdate, fields)
        if body is None:
            return None
        return await self.guard.run(
            employee_id,
            lambda: self.api.employees.update(employee_id, body),
            success="Employee updated successfully",
            failure="Failed to update employee",
        )

    async def delete(self, employee_id: str) -> None:
        await self.guard.run(
            employee_id,
            lambda: self.api.employees.delete(employee_id),
            success="Employee deleted successfully",
            failure="Failed to delete employee",
        )

    async def inactivate(self, employee_id: str, resignation_date: date) -> None:
        await self.guard.run(
            employee_id,
            lambda: self.api.employees.inactivate(employee_id, resignation_date),
            success="Employee inactivated",
            failure="Failed to inactivate employee",
        )

    async def upload_avatar(self, employee_id: str, file: UploadFile) -> str | None:
        try:
            check_image(file)
        except ClientValidationError as exc:
            notify_failure(self.notifier, exc, title="Invalid file", fallback=exc.message)
            return None
        return await self.guard.run(
            employee_id,
            lambda: self.api.employees.upload_avatar(employee_id, file),
            success="Avatar updated",
            failure="Failed to upload avatar",
        )

    async def resend_invitation(self, employee_id: str) -> None:
        await self.guard.run(
            employee_id,
            lambda: self.api.employees.resend_invitation(employee_id),
            success="Invitation sent",
            failure="Failed to resend invitation",
        )

    async def revoke_invitation(self, employee_id: str) -> None:
        await self.guard.run(
            employee_id,
            lambda: self.api.employees.revoke_invitation(employee_id),
            success="Invitation revoked",
            failure="Failed to revoke invitation",
        )
