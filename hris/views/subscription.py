"""
Subscription screen: plans, the current subscription and its invoices.

Checkout, upgrade and seat upsells are paid on a hosted page; those actions
return the URL to redirect to instead of changing anything locally.
"""

from __future__ import annotations

import asyncio
import logging

from hris.api.v1.api import HrisApi
from hris.core.exceptions import notify_failure
from hris.core.notify import Notifier
from hris.schemas.subscription import (BillingCycle,
                                       CancelSubscriptionRequest,
                                       ChangeSeatsRequest, CheckoutRequest,
                                       DowngradeRequest, Subscription,
                                       SubscriptionInvoice, SubscriptionPlan,
                                       UpgradeRequest)

logger = logging.getLogger(__name__)


class SubscriptionView:
    def __init__(self, api: HrisApi, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.plans: list[SubscriptionPlan] = []
        self.subscription: Subscription | None = None
        self.invoices: list[SubscriptionInvoice] = []
        self.seat_count = 1
        self.loading = False
        self.busy = False

    async def refresh(self) -> bool:
        self.loading = True
        try:
            self.plans, self.subscription, self.invoices = await asyncio.gather(
                self.api.subscription.plans(),
                self.api.subscription.mine(),
                self.api.subscription.invoices(),
            )
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to load subscription data")
            return False
        finally:
            self.loading = False
        if self.subscription is not None:
            self.seat_count = self.subscription.max_seats
        return True

    @property
    def pending_invoices(self) -> list[SubscriptionInvoice]:
        return [i for i in self.invoices if i.status == "pending"]

    # ── Paid actions ────────────────────────────────────────────────
    async def checkout(
        self,
        plan: SubscriptionPlan,
        payer_email: str,
        *,
        seat_count: int | None = None,
        billing_cycle: BillingCycle = "monthly",
    ) -> str | None:
        """Start a checkout; returns the hosted payment URL."""
        self.busy = True
        try:
            response = await self.api.subscription.checkout(
                CheckoutRequest(
                    plan_id=plan.id,
                    seat_count=seat_count or self.seat_count,
                    billing_cycle=billing_cycle,
                    payer_email=payer_email,
                )
            )
        except Exception as exc:
            notify_failure(self.notifier, exc, title="Checkout Failed", fallback="Checkout failed")
            return None
        finally:
            self.busy = False
        logger.info("Checkout for plan %s -> %s", plan.id, response.payment_url)
        return response.payment_url

    async def upgrade(
        self, plan: SubscriptionPlan, payer_email: str, *, seat_count: int | None = None
    ) -> str | None:
        self.busy = True
        try:
            response = await self.api.subscription.upgrade(
                UpgradeRequest(
                    plan_id=plan.id,
                    seat_count=seat_count or self.seat_count,
                    payer_email=payer_email,
                )
            )
        except Exception as exc:
            notify_failure(self.notifier, exc, title="Upgrade Failed", fallback="Upgrade failed")
            return None
        finally:
            self.busy = False
        return response.payment_url

    async def change_seats(self, seat_count: int) -> str | None:
        """Upsells return the invoice payment URL; downsells are scheduled."""
        self.busy = True
        try:
            response = await self.api.subscription.change_seats(
                ChangeSeatsRequest(seat_count=seat_count)
            )
        except Exception as exc:
            notify_failure(
                self.notifier, exc, title="Failed to Change Seats", fallback="Failed to change seats"
            )
            return None
        finally:
            self.busy = False

        if response.invoice is not None and response.invoice.payment_url:
            return response.invoice.payment_url
        self.notifier.toast("Seat Change Scheduled", response.message)
        await self.refresh()
        return None

    # ── Scheduled / free actions ────────────────────────────────────
    async def downgrade(self, plan: SubscriptionPlan) -> bool:
        try:
            await self.api.subscription.downgrade(DowngradeRequest(plan_id=plan.id))
        except Exception as exc:
            notify_failure(self.notifier, exc, title="Downgrade Failed", fallback="Downgrade failed")
            return False
        self.notifier.toast(
            "Downgrade Scheduled", "Your plan will be changed at the end of current period."
        )
        await self.refresh()
        return True

    async def cancel(self, reason: str = "") -> bool:
        self.busy = True
        try:
            await self.api.subscription.cancel(CancelSubscriptionRequest(reason=reason))
        except Exception as exc:
            notify_failure(
                self.notifier, exc, title="Cancellation Failed", fallback="Cancellation failed"
            )
            return False
        finally:
            self.busy = False
        self.notifier.toast(
            "Subscription Cancelled",
            "Your subscription will remain active until the end of the current period.",
        )
        await self.refresh()
        return True

    async def cancel_invoice(self, invoice: SubscriptionInvoice) -> bool:
        try:
            await self.api.subscription.cancel_invoice(invoice.id)
        except Exception as exc:
            notify_failure(self.notifier, exc, title="Cancel Failed", fallback="Cancel failed")
            return False
        self.notifier.toast(
            "Invoice Cancelled", "The pending invoice has been cancelled successfully."
        )
        await self.refresh()
        return True
