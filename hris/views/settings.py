"""
Settings screens: master data (branches, grades, positions), leave types
and payroll settings.

Every CRUD manager validates its form through the entity's own pydantic
create model before anything is sent, then refetches after each save.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from hris.api.v1.api import HrisApi
from hris.core.exceptions import notify_failure, validation_message
from hris.core.notify import Notifier
from hris.schemas.leave import LeaveType, LeaveTypeCreate
from hris.schemas.master import ENTITY_SPECS, EntityKind
from hris.schemas.payroll import PayrollSettings, PayrollSettingsUpdate
from hris.views.base import ListView

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class CrudManager(ListView[M]):
    label = "Item"
    search_fields = ("name",)

    def __init__(self, api: HrisApi, notifier: Notifier, *, page_size: int | None = None) -> None:
        super().__init__(notifier, page_size=page_size)
        self.api = api
        self.submitting = False

    @property
    def load_error(self) -> str:  # type: ignore[override]
        return f"Failed to load {self.label.lower()}s"

    def build(self, fields: dict[str, Any]) -> BaseModel:
        raise NotImplementedError

    async def _create(self, body: BaseModel) -> M:
        raise NotImplementedError

    async def _update(self, entity_id: str, body: BaseModel) -> M:
        raise NotImplementedError

    async def _delete(self, entity_id: str) -> None:
        raise NotImplementedError

    async def save(self, fields: dict[str, Any], entity_id: str | None = None) -> M | None:
        """Create (no *entity_id*) or update from raw form *fields*."""
        try:
            body = self.build(fields)
        except ValidationError as exc:
            self.notifier.error(validation_message(exc), title="Validation Error")
            return None

        self.submitting = True
        try:
            if entity_id:
                saved = await self._update(entity_id, body)
            else:
                saved = await self._create(body)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback=f"Failed to save {self.label.lower()}")
            return None
        finally:
            self.submitting = False

        action = "updated" if entity_id else "created"
        self.notifier.success(f"{self.label} {action} successfully")
        await self.refresh()
        return saved

    async def delete(self, entity_id: str) -> bool:
        try:
            await self._delete(entity_id)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback=f"Failed to delete {self.label.lower()}")
            return False
        self.notifier.success(f"{self.label} deleted successfully")
        await self.refresh()
        return True


# ── Master data ─────────────────────────────────────────────────────
class MasterDataManager(CrudManager[BaseModel]):
    def __init__(
        self,
        api: HrisApi,
        notifier: Notifier,
        kind: EntityKind,
        *,
        page_size: int | None = None,
    ) -> None:
        super().__init__(api, notifier, page_size=page_size)
        self.kind = EntityKind(kind)
        self.spec = ENTITY_SPECS[self.kind]
        self.label = self.spec.label

    async def fetch(self) -> list[BaseModel]:
        return await self.api.master.list(self.kind)

    def build(self, fields: dict[str, Any]) -> BaseModel:
        return self.spec.create_model.model_validate(fields)

    async def _create(self, body: BaseModel) -> BaseModel:
        return await self.api.master.create(self.kind, body)

    async def _update(self, entity_id: str, body: BaseModel) -> BaseModel:
        return await self.api.master.update(self.kind, entity_id, body)

    async def _delete(self, entity_id: str) -> None:
        await self.api.master.delete(self.kind, entity_id)


# ── Leave types ─────────────────────────────────────────────────────
class LeaveTypeManager(CrudManager[LeaveType]):
    label = "Leave type"
    search_fields = ("name", "code")

    async def fetch(self) -> list[LeaveType]:
        return await self.api.leave.list_types()

    def build(self, fields: dict[str, Any]) -> LeaveTypeCreate:
        return LeaveTypeCreate.model_validate(fields)

    async def _create(self, body: BaseModel) -> LeaveType:
        return await self.api.leave.create_type(body)  # type: ignore[arg-type]

    async def _update(self, entity_id: str, body: BaseModel) -> LeaveType:
        return await self.api.leave.update_type(entity_id, body)  # type: ignore[arg-type]

    async def _delete(self, entity_id: str) -> None:
        await self.api.leave.delete_type(entity_id)


# ── Payroll settings ────────────────────────────────────────────────
class PayrollSettingsManager:
    def __init__(self, api: HrisApi, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.settings: PayrollSettings | None = None
        self.loading = False
        self.saving = False

    async def load(self) -> PayrollSettings | None:
        self.loading = True
        try:
            self.settings = await self.api.payroll.get_settings()
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to load payroll settings")
        finally:
            self.loading = False
        return self.settings

    async def save(self, fields: dict[str, Any]) -> PayrollSettings | None:
        try:
            body = PayrollSettingsUpdate.model_validate(fields)
        except ValidationError as exc:
            self.notifier.error(validation_message(exc), title="Validation Error")
            return None

        self.saving = True
        try:
            self.settings = await self.api.payroll.update_settings(body)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to save payroll settings")
            return None
        finally:
            self.saving = False
        self.notifier.success("Payroll settings saved successfully")
        return self.settings
