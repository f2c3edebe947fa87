"""
Attendance screens.

:class:`ClockForm` gathers the two pieces of proof a clock event needs, a
location fix and a photo, and refuses to submit without both. The review
and personal history screens are plain :class:`ListView` subclasses.
"""

from __future__ import annotations

import calendar
import logging
from collections import Counter
from collections.abc import Awaitable, Callable
from datetime import date

from hris.api.v1.api import HrisApi
from hris.capture.camera import CAMERA_MESSAGES, CameraCapture
from hris.capture.location import CaptureKind, LocationProvider
from hris.capture.uploads import UploadFile, validate_upload
from hris.core.config import settings
from hris.core.exceptions import ClientValidationError, notify_failure
from hris.core.notify import Notifier
from hris.schemas.attendance import (Attendance, AttendanceFilter,
                                     AttendanceStatus, ClockKind,
                                     ClockRequest, Coordinates)
from hris.schemas.common import Page
from hris.views.base import ActionGuard, ListView

logger = logging.getLogger(__name__)

_CLOCK_LABELS: dict[str, tuple[str, str]] = {
    "clock_in": ("clock in", "clocked in"),
    "clock_out": ("clock out", "clocked out"),
}


# ── Clock in / out ──────────────────────────────────────────────────
class ClockForm:
    def __init__(
        self,
        api: HrisApi,
        notifier: Notifier,
        location: LocationProvider,
        camera: CameraCapture | None = None,
        on_success: Callable[[], Awaitable[object]] | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.location = location
        self.camera = camera
        self.coordinates: Coordinates | None = None
        self.location_error: str | None = None
        self.photo: UploadFile | None = None
        self.photo_error: str | None = None
        self.notes = ""
        self.locating = False
        self.submitting = False
        self._on_success = on_success

    async def open(self) -> None:
        await self.refresh_location()

    # ── Location ────────────────────────────────────────────────────
    async def refresh_location(self) -> bool:
        """One capture attempt; a failure leaves a message and no coordinates."""
        self.locating = True
        try:
            result = await self.location.current_position()
        finally:
            self.locating = False

        if result.ok:
            self.coordinates = result.coordinates
            self.location_error = None
            return True
        self.coordinates = None
        self.location_error = result.message
        logger.info("Location capture failed: %s", result.kind.value)
        return False

    # ── Photo ───────────────────────────────────────────────────────
    async def take_photo(self) -> bool:
        if self.camera is None:
            self.photo_error = CAMERA_MESSAGES[CaptureKind.UNAVAILABLE]
            return False
        try:
            result = await self.camera.capture()
        finally:
            self.camera.release()

        if not result.ok:
            self.photo_error = result.message
            logger.info("Camera capture failed: %s", result.kind.value)
            return False
        return self.use_photo(result.photo)  # type: ignore[arg-type]

    def use_photo(self, file: UploadFile) -> bool:
        """Accept a captured or uploaded photo after the size / type checks."""
        try:
            validate_upload(
                file,
                max_bytes=settings.MAX_ATTENDANCE_PHOTO_BYTES,
                allowed_types=settings.ALLOWED_IMAGE_TYPES,
                field="photo",
            )
        except ClientValidationError as exc:
            self.photo_error = exc.message
            notify_failure(self.notifier, exc, title="Invalid photo", fallback=exc.message)
            return False
        self.photo = file
        self.photo_error = None
        return True

    def clear_photo(self) -> None:
        self.photo = None

    @property
    def can_submit(self) -> bool:
        return self.coordinates is not None and self.photo is not None and not self.submitting

    async def submit(self, kind: ClockKind) -> Attendance | None:
        if self.coordinates is None:
            self.notifier.error(
                self.location_error or "Please allow location access before submitting",
                title="Location required",
            )
            return None
        if self.photo is None:
            self.notifier.error("Please take or upload a photo as proof", title="Photo required")
            return None
        if self.submitting:
            return None

        label, done = _CLOCK_LABELS[kind]
        self.submitting = True
        try:
            body = ClockRequest(
                latitude=self.coordinates.latitude,
                longitude=self.coordinates.longitude,
                notes=self.notes or None,
            )
            record = await self.api.attendance.clock(kind, body, self.photo)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback=f"Failed to {label}")
            return None
        finally:
            self.submitting = False

        self.notifier.success(f"Successfully {done}")
        self.photo = None
        self.notes = ""
        if self._on_success is not None:
            await self._on_success()
        return record

    def close(self) -> None:
        if self.camera is not None:
            self.camera.release()


# ── Admin review ────────────────────────────────────────────────────
class AttendanceReviewView(ListView[Attendance]):
    search_fields = ("employee_name", "employee_code")
    load_error = "Failed to load attendance data"

    def __init__(self, api: HrisApi, notifier: Notifier, *, page_size: int | None = None) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.status: AttendanceStatus | None = None
        self.employee_id: str | None = None
        self.start_date: date | None = None
        self.end_date: date | None = None
        self.guard = ActionGuard(notifier, self.refresh)

    async def fetch(self) -> Page[Attendance]:
        return await self.api.attendance.list(
            AttendanceFilter(
                employee_id=self.employee_id,
                start_date=self.start_date,
                end_date=self.end_date,
                status=self.status,
                page=self.page,
                limit=self.page_size,
                sort_by="date",
                sort_order="desc",
            )
        )

    async def approve(self, attendance_id: str) -> Attendance | None:
        return await self.guard.run(
            attendance_id,
            lambda: self.api.attendance.approve(attendance_id),
            success="Attendance approved",
            failure="Failed to approve attendance",
        )

    async def reject(self, attendance_id: str) -> Attendance | None:
        return await self.guard.run(
            attendance_id,
            lambda: self.api.attendance.reject(attendance_id),
            success="Attendance rejected",
            failure="Failed to reject attendance",
        )

    async def delete(self, attendance_id: str) -> None:
        await self.guard.run(
            attendance_id,
            lambda: self.api.attendance.delete(attendance_id),
            success="Attendance record deleted",
            failure="Failed to delete attendance record",
        )


# ── Personal history ────────────────────────────────────────────────
def _shift_month(first: date, months: int) -> date:
    index = first.year * 12 + first.month - 1 + months
    return date(index // 12, index % 12 + 1, 1)


class MyAttendanceView(ListView[Attendance]):
    load_error = "Failed to load attendance data"

    def __init__(
        self,
        api: HrisApi,
        notifier: Notifier,
        *,
        month: date | None = None,
        page_size: int | None = None,
    ) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.month = (month or date.today()).replace(day=1)
        self.status: AttendanceStatus | None = None

    @property
    def month_range(self) -> tuple[date, date]:
        last = calendar.monthrange(self.month.year, self.month.month)[1]
        return self.month, self.month.replace(day=last)

    async def fetch(self) -> Page[Attendance]:
        start, end = self.month_range
        return await self.api.attendance.my_attendance(
            AttendanceFilter(
                start_date=start,
                end_date=end,
                status=self.status,
                page=self.page,
                limit=self.page_size,
                sort_by="date",
                sort_order="desc",
            )
        )

    async def previous_month(self) -> None:
        self.month = _shift_month(self.month, -1)
        self.page = 1
        await self.refresh()

    async def next_month(self) -> None:
        self.month = _shift_month(self.month, 1)
        self.page = 1
        await self.refresh()

    async def set_status(self, status: AttendanceStatus | None) -> None:
        self.status = status
        self.page = 1
        await self.refresh()

    def summary(self) -> dict[str, int]:
        counts = Counter(row.status for row in self.rows)
        result = {"total": len(self.rows)}
        result.update({status.value: counts.get(status, 0) for status in AttendanceStatus})
        return result
