"""
Employee CRUD, avatar upload and invitation management.

Creating an employee with an avatar goes out as multipart (``data`` JSON +
``avatar`` file); without one it is a plain JSON body. Blank optional
fields are dropped either way.
"""

from __future__ import annotations

import json
from datetime import date

from hris.api.v1.endpoints.base import EndpointGroup
from hris.capture.uploads import UploadFile
from hris.schemas.common import Page
from hris.schemas.employee import (Employee, EmployeeCreate, EmployeeFilter,
                                   EmployeeUpdate)


class EmployeeEndpoints(EndpointGroup):
    async def list(self, filter: EmployeeFilter | None = None) -> Page[Employee]:
        envelope = await self._client.get("/employees", params=filter)
        return self._page(Employee, envelope, key="employees")

    async def get(self, employee_id: str) -> Employee:
        return self._one(Employee, await self._client.get(f"/employees/{employee_id}"))

    async def search(self, query: str) -> list[Employee]:
        envelope = await self._client.get("/employees/search", params={"q": query})
        return self._many(Employee, envelope)

    async def create(self, body: EmployeeCreate, avatar: UploadFile | None = None) -> Employee:
        payload = body.to_payload()
        if avatar is not None:
            envelope = await self._client.post(
                "/employees",
                data={"data": json.dumps(payload)},
                files={"avatar": avatar.as_form_file()},
            )
        else:
            envelope = await self._client.post("/employees", json=payload)
        return self._one(Employee, envelope)

    async def update(self, employee_id: str, body: EmployeeUpdate) -> Employee:
        envelope = await self._client.put(f"/employees/{employee_id}", json=body)
        return self._one(Employee, envelope)

    async def delete(self, employee_id: str) -> None:
        await self._client.delete(f"/employees/{employee_id}")

    async def inactivate(self, employee_id: str, resignation_date: date) -> None:
        await self._client.post(
            f"/employees/{employee_id}/inactivate",
            json={"resignation_date": resignation_date.isoformat()},
        )

    async def upload_avatar(self, employee_id: str, avatar: UploadFile) -> str:
        envelope = await self._client.post(
            f"/employees/{employee_id}/avatar",
            files={"avatar": avatar.as_form_file()},
        )
        return (envelope.data or {}).get("avatar_url", "")

    async def resend_invitation(self, employee_id: str) -> None:
        await self._client.post(f"/employees/{employee_id}/invitation/resend")

    async def revoke_invitation(self, employee_id: str) -> None:
        await self._client.post(f"/employees/{employee_id}/invitation/revoke")
