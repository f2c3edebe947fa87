"""
Payroll endpoints: settings, components, generation and records.

Gross, net and every deduction are computed by the server. Finalizing a
period (or marking a single record paid) moves records from ``DRAFT`` to
``PAID`` and cannot be undone.
"""

from __future__ import annotations

from hris.api.v1.endpoints.base import EndpointGroup
from hris.schemas.common import Page
from hris.schemas.payroll import (EmployeeComponentAssign, PayrollComponent,
                                  PayrollComponentCreate, PayrollGenerate,
                                  PayrollPeriod, PayrollRecord,
                                  PayrollRecordFilter, PayrollRecordUpdate,
                                  PayrollSettings, PayrollSettingsUpdate,
                                  PayrollSummary)


class PayrollEndpoints(EndpointGroup):
    # ── Settings ────────────────────────────────────────────────────
    async def get_settings(self) -> PayrollSettings:
        return self._one(PayrollSettings, await self._client.get("/payroll/settings"))

    async def update_settings(self, body: PayrollSettingsUpdate) -> PayrollSettings:
        return self._one(PayrollSettings, await self._client.put("/payroll/settings", json=body))

    # ── Components ──────────────────────────────────────────────────
    async def list_components(self) -> list[PayrollComponent]:
        return self._many(PayrollComponent, await self._client.get("/payroll/components"))

    async def get_component(self, component_id: str) -> PayrollComponent:
        envelope = await self._client.get(f"/payroll/components/{component_id}")
        return self._one(PayrollComponent, envelope)

    async def create_component(self, body: PayrollComponentCreate) -> PayrollComponent:
        envelope = await self._client.post("/payroll/components", json=body)
        return self._one(PayrollComponent, envelope)

    async def update_component(
        self, component_id: str, body: PayrollComponentCreate
    ) -> PayrollComponent:
        envelope = await self._client.put(f"/payroll/components/{component_id}", json=body)
        return self._one(PayrollComponent, envelope)

    async def delete_component(self, component_id: str) -> None:
        await self._client.delete(f"/payroll/components/{component_id}")

    # ── Employee components ─────────────────────────────────────────
    async def assign_component(self, employee_id: str, body: EmployeeComponentAssign) -> None:
        await self._client.post(f"/payroll/employees/{employee_id}/components", json=body)

    async def employee_components(self, employee_id: str) -> list[PayrollComponent]:
        envelope = await self._client.get(f"/payroll/employees/{employee_id}/components")
        return self._many(PayrollComponent, envelope)

    async def update_employee_component(self, assignment_id: str, amount: float) -> None:
        await self._client.put(
            f"/payroll/employee-components/{assignment_id}", json={"amount": amount}
        )

    async def remove_employee_component(self, assignment_id: str) -> None:
        await self._client.delete(f"/payroll/employee-components/{assignment_id}")

    # ── Records ─────────────────────────────────────────────────────
    async def generate(self, body: PayrollGenerate) -> list[PayrollRecord]:
        return self._many(PayrollRecord, await self._client.post("/payroll/generate", json=body))

    async def list_records(self, filter: PayrollRecordFilter | None = None) -> Page[PayrollRecord]:
        envelope = await self._client.get("/payroll/records", params=filter)
        return self._page(PayrollRecord, envelope, key="records")

    async def get_record(self, record_id: str) -> PayrollRecord:
        return self._one(PayrollRecord, await self._client.get(f"/payroll/records/{record_id}"))

    async def update_record(self, record_id: str, body: PayrollRecordUpdate) -> PayrollRecord:
        envelope = await self._client.put(f"/payroll/records/{record_id}", json=body)
        return self._one(PayrollRecord, envelope)

    async def delete_record(self, record_id: str) -> None:
        await self._client.delete(f"/payroll/records/{record_id}")

    async def finalize(self, period: PayrollPeriod) -> list[PayrollRecord]:
        return self._many(PayrollRecord, await self._client.post("/payroll/finalize", json=period))

    async def mark_paid(self, record_id: str) -> PayrollRecord:
        envelope = await self._client.post(f"/payroll/records/{record_id}/pay")
        return self._one(PayrollRecord, envelope)

    async def summary(self, period: PayrollPeriod) -> PayrollSummary:
        return self._one(PayrollSummary, await self._client.get("/payroll/summary", params=period))
