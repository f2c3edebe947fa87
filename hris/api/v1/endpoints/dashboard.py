"""Dashboard statistics and user notifications."""

from __future__ import annotations

from hris.api.v1.endpoints.base import EndpointGroup
from hris.schemas.common import Page
from hris.schemas.dashboard import (DailyAttendanceStats, DashboardData,
                                    EmployeeCount, EmployeeStatusStats,
                                    MonthlyAttendancePoint, Notification,
                                    NotificationPreference)


class DashboardEndpoints(EndpointGroup):
    async def overview(self) -> DashboardData:
        return self._one(DashboardData, await self._client.get("/dashboard"))

    async def employee_current_number(self) -> EmployeeCount:
        envelope = await self._client.get("/dashboard/employee-current-number")
        return self._one(EmployeeCount, envelope)

    async def employee_status_stats(self) -> EmployeeStatusStats:
        envelope = await self._client.get("/dashboard/employee-status-stats")
        return self._one(EmployeeStatusStats, envelope)

    async def monthly_attendance(self, month: int, year: int) -> list[MonthlyAttendancePoint]:
        envelope = await self._client.get(
            "/dashboard/monthly-attendance", params={"month": month, "year": year}
        )
        return self._many(MonthlyAttendancePoint, envelope)

    async def daily_attendance_stats(self) -> DailyAttendanceStats:
        envelope = await self._client.get("/dashboard/daily-attendance-stats")
        return self._one(DailyAttendanceStats, envelope)


class NotificationEndpoints(EndpointGroup):
    async def list(
        self, page: int = 1, limit: int = 20, unread_only: bool = False
    ) -> Page[Notification]:
        envelope = await self._client.get(
            "/notifications",
            params={"page": page, "limit": limit, "unread_only": unread_only or None},
        )
        return self._page(Notification, envelope, key="notifications")

    async def mark_as_read(self, ids: list[str]) -> None:
        await self._client.put("/notifications/mark-read", json={"notification_ids": ids})

    async def mark_all_as_read(self) -> None:
        await self._client.put("/notifications/mark-all-read")

    async def delete(self, notification_id: str) -> None:
        await self._client.delete(f"/notifications/{notification_id}")

    async def preferences(self) -> list[NotificationPreference]:
        envelope = await self._client.get("/notifications/preferences")
        return self._many(NotificationPreference, envelope)

    async def update_preference(self, preference: NotificationPreference) -> NotificationPreference:
        envelope = await self._client.put("/notifications/preferences", json=preference)
        return self._one(NotificationPreference, envelope)
