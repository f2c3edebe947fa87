"""
Attendance endpoints.

Clock-in and clock-out are multipart posts carrying ``latitude``,
``longitude``, optional ``notes`` and the ``photo`` proof.
"""

from __future__ import annotations

from hris.api.v1.endpoints.base import EndpointGroup
from hris.capture.uploads import UploadFile
from hris.schemas.attendance import (Attendance, AttendanceFilter,
                                     AttendanceUpdate, ClockKind,
                                     ClockRequest)
from hris.schemas.common import Page


class AttendanceEndpoints(EndpointGroup):
    async def list(self, filter: AttendanceFilter | None = None) -> Page[Attendance]:
        envelope = await self._client.get("/attendance", params=filter)
        return self._page(Attendance, envelope, key="attendances")

    async def get(self, attendance_id: str) -> Attendance:
        return self._one(Attendance, await self._client.get(f"/attendance/{attendance_id}"))

    async def my_attendance(self, filter: AttendanceFilter | None = None) -> Page[Attendance]:
        envelope = await self._client.get("/attendance/my", params=filter)
        return self._page(Attendance, envelope, key="attendances")

    async def clock(self, kind: ClockKind, body: ClockRequest, photo: UploadFile) -> Attendance:
        path = "/attendance/clock-in" if kind == "clock_in" else "/attendance/clock-out"
        fields = {"latitude": str(body.latitude), "longitude": str(body.longitude)}
        if body.notes:
            fields["notes"] = body.notes
        envelope = await self._client.post(
            path, data=fields, files={"photo": photo.as_form_file()}
        )
        return self._one(Attendance, envelope)

    async def clock_in(self, body: ClockRequest, photo: UploadFile) -> Attendance:
        return await self.clock("clock_in", body, photo)

    async def clock_out(self, body: ClockRequest, photo: UploadFile) -> Attendance:
        return await self.clock("clock_out", body, photo)

    async def update(self, attendance_id: str, body: AttendanceUpdate) -> Attendance:
        envelope = await self._client.put(f"/attendance/{attendance_id}", json=body)
        return self._one(Attendance, envelope)

    async def delete(self, attendance_id: str) -> None:
        await self._client.delete(f"/attendance/{attendance_id}")

    async def approve(self, attendance_id: str) -> Attendance:
        envelope = await self._client.post(f"/attendance/{attendance_id}/approve")
        return self._one(Attendance, envelope)

    async def reject(self, attendance_id: str) -> Attendance:
        envelope = await self._client.post(f"/attendance/{attendance_id}/reject")
        return self._one(Attendance, envelope)
