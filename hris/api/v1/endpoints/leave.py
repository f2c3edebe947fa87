"""
Leave endpoints: leave types, quotas and requests.

Quotas are computed server-side; an adjustment is sent as a signed delta
and the server recomputes ``available_quota``.
"""

from __future__ import annotations

from typing import Any

from hris.api.v1.endpoints.base import EndpointGroup
from hris.capture.uploads import UploadFile
from hris.schemas.common import Page
from hris.schemas.leave import (LeaveQuota, LeaveRejection, LeaveRequest,
                                LeaveRequestCreate, LeaveStatus, LeaveType,
                                LeaveTypeCreate, QuotaAdjustment)


class LeaveEndpoints(EndpointGroup):
    # ── Types ───────────────────────────────────────────────────────
    async def list_types(self) -> list[LeaveType]:
        return self._many(LeaveType, await self._client.get("/leave/types"))

    async def create_type(self, body: LeaveTypeCreate) -> LeaveType:
        return self._one(LeaveType, await self._client.post("/leave/types", json=body))

    async def update_type(self, type_id: str, body: LeaveTypeCreate) -> LeaveType:
        envelope = await self._client.put(f"/leave/types/{type_id}", json=body)
        return self._one(LeaveType, envelope)

    async def delete_type(self, type_id: str) -> None:
        await self._client.delete(f"/leave/types/{type_id}")

    # ── Quotas ──────────────────────────────────────────────────────
    async def list_quota(
        self, employee_id: str | None = None, year: int | None = None
    ) -> list[LeaveQuota]:
        envelope = await self._client.get(
            "/leave/quota", params={"employee_id": employee_id, "year": year}
        )
        return self._many(LeaveQuota, envelope)

    async def get_quota(self, quota_id: str) -> LeaveQuota:
        return self._one(LeaveQuota, await self._client.get(f"/leave/quota/{quota_id}"))

    async def my_quota(self, year: int | None = None) -> list[LeaveQuota]:
        envelope = await self._client.get("/leave/quota/my", params={"year": year})
        return self._many(LeaveQuota, envelope)

    async def adjust_quota(self, body: QuotaAdjustment) -> LeaveQuota:
        envelope = await self._client.post("/leave/quota/adjust", json=body)
        return self._one(LeaveQuota, envelope)

    # ── Requests ────────────────────────────────────────────────────
    async def list_requests(
        self,
        *,
        status: LeaveStatus | None = None,
        employee_id: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[LeaveRequest]:
        params = {"status": status.value if status else None, "employee_id": employee_id,
                  "page": page, "limit": limit}
        envelope = await self._client.get("/leave/requests", params=params)
        return self._page(LeaveRequest, envelope, key="requests")

    async def get_request(self, request_id: str) -> LeaveRequest:
        return self._one(LeaveRequest, await self._client.get(f"/leave/requests/{request_id}"))

    async def my_requests(self, status: LeaveStatus | None = None) -> list[LeaveRequest]:
        envelope = await self._client.get(
            "/leave/requests/my", params={"status": status.value if status else None}
        )
        return self._many(LeaveRequest, envelope)

    async def create_request(
        self, body: LeaveRequestCreate, attachment: UploadFile | None = None
    ) -> LeaveRequest:
        if attachment is None:
            envelope = await self._client.post("/leave/requests", json=body)
        else:
            fields: dict[str, Any] = {
                key: str(value)
                for key, value in body.model_dump(mode="json", exclude_none=True).items()
            }
            envelope = await self._client.post(
                "/leave/requests",
                data=fields,
                files={"attachment": attachment.as_form_file()},
            )
        return self._one(LeaveRequest, envelope)

    async def approve_request(self, request_id: str) -> LeaveRequest:
        envelope = await self._client.post(f"/leave/requests/{request_id}/approve")
        return self._one(LeaveRequest, envelope)

    async def reject_request(self, request_id: str, reason: str) -> LeaveRequest:
        envelope = await self._client.post(
            f"/leave/requests/{request_id}/reject",
            json=LeaveRejection(rejection_reason=reason),
        )
        return self._one(LeaveRequest, envelope)

    async def cancel_request(self, request_id: str) -> LeaveRequest:
        envelope = await self._client.post(f"/leave/requests/{request_id}/cancel")
        return self._one(LeaveRequest, envelope)
