"""Branch, grade and position CRUD under ``/master/<kind>``."""

from __future__ import annotations

from pydantic import BaseModel

from hris.api.v1.endpoints.base import EndpointGroup
from hris.schemas.master import ENTITY_SPECS, EntityKind


class MasterEndpoints(EndpointGroup):
    def _path(self, kind: EntityKind, entity_id: str | None = None) -> str:
        path = f"/master/{ENTITY_SPECS[kind].path}"
        return f"{path}/{entity_id}" if entity_id else path

    async def list(self, kind: EntityKind) -> list[BaseModel]:
        envelope = await self._client.get(self._path(kind))
        return self._many(ENTITY_SPECS[kind].read_model, envelope)

    async def get(self, kind: EntityKind, entity_id: str) -> BaseModel:
        envelope = await self._client.get(self._path(kind, entity_id))
        return self._one(ENTITY_SPECS[kind].read_model, envelope)

    async def create(self, kind: EntityKind, body: BaseModel) -> BaseModel:
        spec = ENTITY_SPECS[kind]
        if not isinstance(body, spec.create_model):
            raise TypeError(f"{spec.label} expects {spec.create_model.__name__}")
        envelope = await self._client.post(self._path(kind), json=body)
        return self._one(spec.read_model, envelope)

    async def update(self, kind: EntityKind, entity_id: str, body: BaseModel) -> BaseModel:
        spec = ENTITY_SPECS[kind]
        if not isinstance(body, spec.create_model):
            raise TypeError(f"{spec.label} expects {spec.create_model.__name__}")
        envelope = await self._client.put(self._path(kind, entity_id), json=body)
        return self._one(spec.read_model, envelope)

    async def delete(self, kind: EntityKind, entity_id: str) -> None:
        await self._client.delete(self._path(kind, entity_id))
