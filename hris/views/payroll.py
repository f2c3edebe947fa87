"""
Payroll screen: records for one period, the period summary, generation and
the irreversible draft-to-paid transitions.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

from hris.api.v1.api import HrisApi
from hris.core.notify import Notifier
from hris.schemas.common import Page
from hris.schemas.payroll import (PayrollGenerate, PayrollPeriod,
                                  PayrollRecord, PayrollRecordFilter,
                                  PayrollRecordUpdate, PayrollStatus,
                                  PayrollSummary)
from hris.views.base import ActionGuard, ListView, parse_form

logger = logging.getLogger(__name__)


class PayrollView(ListView[PayrollRecord]):
    search_fields = ("employee_name", "employee_code")
    load_error = "Failed to load payroll records"

    def __init__(
        self,
        api: HrisApi,
        notifier: Notifier,
        *,
        period: PayrollPeriod | None = None,
        page_size: int | None = None,
    ) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        today = date.today()
        self.period = period or PayrollPeriod(period_month=today.month, period_year=today.year)
        self.status: PayrollStatus | None = None
        self.summary: PayrollSummary | None = None
        self.guard = ActionGuard(notifier, self.refresh)

    @property
    def period_key(self) -> str:
        return f"period:{self.period.period_year}-{self.period.period_month:02d}"

    async def fetch(self) -> Page[PayrollRecord]:
        records, self.summary = await asyncio.gather(
            self.api.payroll.list_records(
                PayrollRecordFilter(
                    period_month=self.period.period_month,
                    period_year=self.period.period_year,
                    status=self.status,
                    page=self.page,
                    limit=self.page_size,
                )
            ),
            self.api.payroll.summary(self.period),
        )
        return records

    async def set_period(self, month: int, year: int) -> None:
        self.period = PayrollPeriod(period_month=month, period_year=year)
        self.page = 1
        await self.refresh()

    @property
    def has_drafts(self) -> bool:
        return any(not r.is_final for r in self.rows)

    # ── Mutations ───────────────────────────────────────────────────
    async def generate(self, employee_ids: list[str] | None = None) -> list[PayrollRecord] | None:
        body = PayrollGenerate(**self.period.model_dump(), employee_ids=employee_ids or None)
        return await self.guard.run(
            self.period_key,
            lambda: self.api.payroll.generate(body),
            success="Payroll generated",
            failure="Failed to generate payroll",
        )

    async def update_record(
        self, record: PayrollRecord, fields: dict[str, Any]
    ) -> PayrollRecord | None:
        if record.is_final:
            self.notifier.error("Paid payroll records can no longer be edited")
            return None
        body = parse_form(self.notifier, PayrollRecordUpdate, fields)
        if body is None:
            return None
        return await self.guard.run(
            record.id,
            lambda: self.api.payroll.update_record(record.id, body),
            success="Payroll record updated",
            failure="Failed to update payroll record",
        )

    async def delete_record(self, record: PayrollRecord) -> None:
        await self.guard.run(
            record.id,
            lambda: self.api.payroll.delete_record(record.id),
            success="Payroll record deleted",
            failure="Failed to delete payroll record",
        )

    async def finalize(self, period: PayrollPeriod | None = None) -> list[PayrollRecord] | None:
        """Mark every draft record of *period* paid. Cannot be undone."""
        period = period or self.period
        logger.info("Finalizing payroll %s-%02d", period.period_year, period.period_month)
        return await self.guard.run(
            self.period_key,
            lambda: self.api.payroll.finalize(period),
            success="Payroll finalized",
            failure="Failed to finalize payroll",
        )

    async def mark_paid(self, record: PayrollRecord) -> PayrollRecord | None:
        if record.is_final:
            return record
        return await self.guard.run(
            record.id,
            lambda: self.api.payroll.mark_paid(record.id),
            success="Payroll record marked as paid",
            failure="Failed to mark payroll record as paid",
        )
