"""Subscription plans, billing actions and invoices."""

from __future__ import annotations

from hris.api.v1.endpoints.base import EndpointGroup
from hris.schemas.subscription import (CancelSubscriptionRequest,
                                       ChangeSeatsRequest, ChangeSeatsResponse,
                                       CheckoutRequest, CheckoutResponse,
                                       DowngradeRequest, Subscription,
                                       SubscriptionInvoice, SubscriptionPlan,
                                       UpgradeRequest)


class SubscriptionEndpoints(EndpointGroup):
    async def plans(self) -> list[SubscriptionPlan]:
        return self._many(SubscriptionPlan, await self._client.get("/subscription/plans"))

    async def mine(self) -> Subscription | None:
        envelope = await self._client.get("/subscription")
        if envelope.data is None:
            return None
        return self._one(Subscription, envelope)

    async def invoices(self) -> list[SubscriptionInvoice]:
        return self._many(SubscriptionInvoice, await self._client.get("/subscription/invoices"))

    async def checkout(self, body: CheckoutRequest) -> CheckoutResponse:
        envelope = await self._client.post("/subscription/checkout", json=body)
        return self._one(CheckoutResponse, envelope)

    async def upgrade(self, body: UpgradeRequest) -> CheckoutResponse:
        envelope = await self._client.post("/subscription/upgrade", json=body)
        return self._one(CheckoutResponse, envelope)

    async def downgrade(self, body: DowngradeRequest) -> str:
        envelope = await self._client.post("/subscription/downgrade", json=body)
        return envelope.message or ""

    async def change_seats(self, body: ChangeSeatsRequest) -> ChangeSeatsResponse:
        envelope = await self._client.post("/subscription/seats", json=body)
        data = envelope.data or {}
        return ChangeSeatsResponse.model_validate(
            {"message": envelope.message or "", **data}
        )

    async def cancel(self, body: CancelSubscriptionRequest) -> None:
        await self._client.post("/subscription/cancel", json=body)

    async def cancel_invoice(self, invoice_id: str) -> None:
        await self._client.post(f"/subscription/invoices/{invoice_id}/cancel")
