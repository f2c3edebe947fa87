"""
Work schedule screen: schedule CRUD, per-day times, geofenced locations and
bulk assignment to employees.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

from hris.api.v1.api import HrisApi
from hris.capture.location import LocationProvider
from hris.core.exceptions import notify_failure
from hris.core.notify import Notifier
from hris.schemas.attendance import Coordinates
from hris.schemas.schedule import (EmployeeScheduleAssignment,
                                   ScheduleAssignmentCreate, WorkSchedule,
                                   WorkScheduleCreate, WorkScheduleLocation,
                                   WorkScheduleLocationCreate, WorkScheduleTime,
                                   WorkScheduleTimeCreate,
                                   WorkScheduleTimeUpdate, WorkScheduleUpdate)
from hris.views.base import ListView, parse_form

logger = logging.getLogger(__name__)


class SchedulesView(ListView[WorkSchedule]):
    search_fields = ("name", "type")
    load_error = "Failed to load schedules"

    def __init__(self, api: HrisApi, notifier: Notifier, *, page_size: int | None = None) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.submitting = False

    async def fetch(self) -> list[WorkSchedule]:
        return await self.api.schedule.list()

    async def _mutate(self, action: Any, *, success: str, failure: str) -> Any:
        self.submitting = True
        try:
            result = await action
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback=failure)
            return None
        finally:
            self.submitting = False
        self.notifier.success(success)
        await self.refresh()
        return result

    # ── Schedules ───────────────────────────────────────────────────
    async def save_schedule(
        self, fields: dict[str, Any], schedule_id: str | None = None
    ) -> WorkSchedule | None:
        if schedule_id:
            update = parse_form(self.notifier, WorkScheduleUpdate, fields)
            if update is None:
                return None
            return await self._mutate(
                self.api.schedule.update(schedule_id, update),
                success="Schedule updated successfully",
                failure="Failed to update schedule",
            )
        body = parse_form(self.notifier, WorkScheduleCreate, fields)
        if body is None:
            return None
        return await self._mutate(
            self.api.schedule.create(body),
            success="Schedule created successfully",
            failure="Failed to create schedule",
        )

    async def delete_schedule(self, schedule_id: str) -> None:
        await self._mutate(
            self.api.schedule.delete(schedule_id),
            success="Schedule deleted successfully",
            failure="Failed to delete schedule",
        )

    # ── Times ───────────────────────────────────────────────────────
    async def save_time(
        self, schedule_id: str, fields: dict[str, Any], time_id: str | None = None
    ) -> WorkScheduleTime | None:
        if time_id:
            update = parse_form(self.notifier, WorkScheduleTimeUpdate, fields)
            if update is None:
                return None
            return await self._mutate(
                self.api.schedule.update_time(time_id, update),
                success="Schedule time updated",
                failure="Failed to save schedule time",
            )
        body = parse_form(
            self.notifier, WorkScheduleTimeCreate, {**fields, "work_schedule_id": schedule_id}
        )
        if body is None:
            return None
        return await self._mutate(
            self.api.schedule.create_time(body),
            success="Schedule time added",
            failure="Failed to save schedule time",
        )

    async def delete_time(self, time_id: str) -> None:
        await self._mutate(
            self.api.schedule.delete_time(time_id),
            success="Schedule time deleted",
            failure="Failed to delete schedule time",
        )

    # ── Locations ───────────────────────────────────────────────────
    async def locate(self, provider: LocationProvider) -> Coordinates | None:
        """Fill a location form from the device position."""
        result = await provider.current_position()
        if not result.ok:
            self.notifier.error(result.message or "Failed to get current location")
            return None
        return result.coordinates

    async def save_location(
        self, schedule_id: str, fields: dict[str, Any], location_id: str | None = None
    ) -> WorkScheduleLocation | None:
        body = parse_form(
            self.notifier,
            WorkScheduleLocationCreate,
            {**fields, "work_schedule_id": schedule_id},
        )
        if body is None:
            return None
        if location_id:
            return await self._mutate(
                self.api.schedule.update_location(location_id, body),
                success="Location updated",
                failure="Failed to save location",
            )
        return await self._mutate(
            self.api.schedule.create_location(body),
            success="Location added",
            failure="Failed to save location",
        )

    async def delete_location(self, location_id: str) -> None:
        await self._mutate(
            self.api.schedule.delete_location(location_id),
            success="Location deleted",
            failure="Failed to delete location",
        )

    # ── Assignment ──────────────────────────────────────────────────
    async def assign(
        self,
        schedule_id: str,
        employee_ids: list[str],
        start_date: date,
        end_date: date | None = None,
        *,
        permanent: bool = True,
    ) -> list[EmployeeScheduleAssignment] | None:
        """Assign one schedule to many employees; any failure fails the batch."""
        if not employee_ids:
            self.notifier.error("Please select at least one employee")
            return None
        body = parse_form(
            self.notifier,
            ScheduleAssignmentCreate,
            {"start_date": start_date, "end_date": None if permanent else end_date},
        )
        if body is None:
            return None

        self.submitting = True
        try:
            results = await asyncio.gather(
                *(
                    self.api.schedule.assign_to_employee(schedule_id, employee_id, body)
                    for employee_id in employee_ids
                ),
                return_exceptions=True,
            )
            failed = next((r for r in results if isinstance(r, BaseException)), None)
            if failed is not None:
                raise failed
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to assign schedule")
            return None
        finally:
            self.submitting = False

        self.notifier.success(f"Schedule assigned to {len(employee_ids)} employee(s)")
        logger.info("Schedule %s assigned to %d employee(s)", schedule_id, len(employee_ids))
        await self.refresh()
        return list(results)  # type: ignore[arg-type]
