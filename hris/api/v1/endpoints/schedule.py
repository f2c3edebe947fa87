"""Work schedules, their per-day times and geofenced locations, and assignments."""

from __future__ import annotations

from hris.api.v1.endpoints.base import EndpointGroup
from hris.schemas.schedule import (EmployeeScheduleAssignment,
                                   EmployeeScheduleCreate,
                                   ScheduleAssignmentCreate, WorkSchedule,
                                   WorkScheduleCreate, WorkScheduleLocation,
                                   WorkScheduleLocationCreate, WorkScheduleTime,
                                   WorkScheduleTimeCreate,
                                   WorkScheduleTimeUpdate, WorkScheduleUpdate)


class ScheduleEndpoints(EndpointGroup):
    # ── Schedules ───────────────────────────────────────────────────
    async def list(self) -> list[WorkSchedule]:
        return self._many(WorkSchedule, await self._client.get("/schedule"))

    async def get(self, schedule_id: str) -> WorkSchedule:
        return self._one(WorkSchedule, await self._client.get(f"/schedule/{schedule_id}"))

    async def create(self, body: WorkScheduleCreate) -> WorkSchedule:
        return self._one(WorkSchedule, await self._client.post("/schedule", json=body))

    async def update(self, schedule_id: str, body: WorkScheduleUpdate) -> WorkSchedule:
        envelope = await self._client.put(f"/schedule/{schedule_id}", json=body)
        return self._one(WorkSchedule, envelope)

    async def delete(self, schedule_id: str) -> None:
        await self._client.delete(f"/schedule/{schedule_id}")

    # ── Assignment ──────────────────────────────────────────────────
    async def assign_to_employee(
        self, schedule_id: str, employee_id: str, body: ScheduleAssignmentCreate
    ) -> EmployeeScheduleAssignment:
        envelope = await self._client.post(
            f"/schedule/{schedule_id}/employee/{employee_id}", json=body
        )
        return self._one(EmployeeScheduleAssignment, envelope)

    async def employee_timeline(self, employee_id: str) -> list[EmployeeScheduleAssignment]:
        envelope = await self._client.get(f"/schedule/employee/{employee_id}")
        return self._many(EmployeeScheduleAssignment, envelope)

    # ── Times ───────────────────────────────────────────────────────
    async def get_time(self, time_id: str) -> WorkScheduleTime:
        return self._one(WorkScheduleTime, await self._client.get(f"/schedule/times/{time_id}"))

    async def create_time(self, body: WorkScheduleTimeCreate) -> WorkScheduleTime:
        return self._one(WorkScheduleTime, await self._client.post("/schedule/times", json=body))

    async def update_time(self, time_id: str, body: WorkScheduleTimeUpdate) -> WorkScheduleTime:
        envelope = await self._client.put(f"/schedule/times/{time_id}", json=body)
        return self._one(WorkScheduleTime, envelope)

    async def delete_time(self, time_id: str) -> None:
        await self._client.delete(f"/schedule/times/{time_id}")

    # ── Locations ───────────────────────────────────────────────────
    async def get_location(self, location_id: str) -> WorkScheduleLocation:
        envelope = await self._client.get(f"/schedule/locations/{location_id}")
        return self._one(WorkScheduleLocation, envelope)

    async def create_location(self, body: WorkScheduleLocationCreate) -> WorkScheduleLocation:
        envelope = await self._client.post("/schedule/locations", json=body)
        return self._one(WorkScheduleLocation, envelope)

    async def update_location(
        self, location_id: str, body: WorkScheduleLocationCreate
    ) -> WorkScheduleLocation:
        envelope = await self._client.put(f"/schedule/locations/{location_id}", json=body)
        return self._one(WorkScheduleLocation, envelope)

    async def delete_location(self, location_id: str) -> None:
        await self._client.delete(f"/schedule/locations/{location_id}")


class EmployeeScheduleEndpoints(EndpointGroup):
    async def list(self, employee_id: str | None = None) -> list[EmployeeScheduleAssignment]:
        envelope = await self._client.get(
            "/employee-schedules", params={"employee_id": employee_id}
        )
        return self._many(EmployeeScheduleAssignment, envelope)

    async def get(self, assignment_id: str) -> EmployeeScheduleAssignment:
        envelope = await self._client.get(f"/employee-schedules/{assignment_id}")
        return self._one(EmployeeScheduleAssignment, envelope)

    async def active(self, employee_id: str) -> EmployeeScheduleAssignment | None:
        envelope = await self._client.get(f"/employee-schedules/employee/{employee_id}/active")
        if envelope.data is None:
            return None
        return self._one(EmployeeScheduleAssignment, envelope)

    async def create(self, body: EmployeeScheduleCreate) -> EmployeeScheduleAssignment:
        envelope = await self._client.post("/employee-schedules", json=body)
        return self._one(EmployeeScheduleAssignment, envelope)

    async def update(
        self, assignment_id: str, body: ScheduleAssignmentCreate
    ) -> EmployeeScheduleAssignment:
        envelope = await self._client.put(f"/employee-schedules/{assignment_id}", json=body)
        return self._one(EmployeeScheduleAssignment, envelope)

    async def delete(self, assignment_id: str) -> None:
        await self._client.delete(f"/employee-schedules/{assignment_id}")
