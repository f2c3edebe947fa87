"""Company profile and invitation endpoints."""

from __future__ import annotations

import json

from hris.api.v1.endpoints.base import EndpointGroup
from hris.capture.uploads import UploadFile
from hris.schemas.employee import (Company, CompanyCreate, CompanyUpdate,
                                   Invitation)


class CompanyEndpoints(EndpointGroup):
    async def create(self, body: CompanyCreate, logo: UploadFile | None = None) -> Company:
        """Multipart: ``data`` carries the JSON body, ``attachment`` the logo."""
        files = {"attachment": logo.as_form_file()} if logo else None
        envelope = await self._client.post(
            "/company",
            data={"data": json.dumps(body.model_dump(mode="json", exclude_none=True))},
            files=files,
        )
        return self._one(Company, envelope)

    async def get_mine(self) -> Company:
        return self._one(Company, await self._client.get("/company/my"))

    async def update(self, body: CompanyUpdate) -> Company:
        return self._one(Company, await self._client.put("/company/my", json=body))

    async def delete(self) -> None:
        await self._client.delete("/company/my")

    async def upload_logo(self, logo: UploadFile) -> str:
        envelope = await self._client.post("/company/my/logo", files={"logo": logo.as_form_file()})
        return (envelope.data or {}).get("logo_url", "")


class InvitationEndpoints(EndpointGroup):
    async def get_by_token(self, token: str) -> Invitation:
        return self._one(Invitation, await self._client.get(f"/invitations/view/{token}", auth=False))

    async def list_mine(self) -> list[Invitation]:
        return self._many(Invitation, await self._client.get("/invitations/my"))

    async def accept(self, token: str) -> None:
        await self._client.post(f"/invitations/{token}/accept")
