"""Pydantic schemas for plans, subscriptions and invoices."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

BillingCycle = Literal["monthly", "yearly"]
SubscriptionStatus = Literal["trial", "active", "past_due", "cancelled", "expired"]
InvoiceStatus = Literal["pending", "paid", "failed", "cancelled"]


# ── Plans ───────────────────────────────────────────────────────────
class SubscriptionPlan(BaseModel):
    id: str
    name: str
    tier: str
    description: str | None = None
    price_per_seat_monthly: Decimal = Decimal("0")
    price_per_seat_yearly: Decimal = Decimal("0")
    min_seats: int = 1
    max_seats: int | None = None
    features: list[str] = Field(default_factory=list)
    is_active: bool = True

    def seat_price(self, cycle: BillingCycle) -> Decimal:
        return self.price_per_seat_yearly if cycle == "yearly" else self.price_per_seat_monthly


# ── Subscription ────────────────────────────────────────────────────
class Subscription(BaseModel):
    id: str
    company_id: str | None = None
    plan: SubscriptionPlan | None = None
    plan_id: str | None = None
    status: SubscriptionStatus
    billing_cycle: BillingCycle = "monthly"
    max_seats: int = 0
    used_seats: int = 0
    pending_seats: int | None = None
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    trial_start: datetime | None = None
    trial_end: datetime | None = None
    cancelled_at: datetime | None = None
    cancel_at_period_end: bool = False

    @property
    def available_seats(self) -> int:
        return max(self.max_seats - self.used_seats, 0)


class SubscriptionInvoice(BaseModel):
    id: str
    invoice_number: str | None = None
    amount: Decimal = Decimal("0")
    currency: str = "IDR"
    status: InvoiceStatus
    description: str | None = None
    payment_url: str | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    paid_at: datetime | None = None
    created_at: datetime | None = None


# ── Requests ────────────────────────────────────────────────────────
class _SeatCount(BaseModel):
    seat_count: int = Field(ge=1)


class CheckoutRequest(_SeatCount):
    plan_id: str
    billing_cycle: BillingCycle = "monthly"
    payer_email: str

    @field_validator("payer_email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid payer email")
        return v


class UpgradeRequest(_SeatCount):
    plan_id: str
    payer_email: str

    @field_validator("payer_email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid payer email")
        return v


class DowngradeRequest(BaseModel):
    plan_id: str


class ChangeSeatsRequest(_SeatCount):
    pass


class CancelSubscriptionRequest(BaseModel):
    reason: str = ""


# ── Responses ───────────────────────────────────────────────────────
class CheckoutResponse(BaseModel):
    payment_url: str
    invoice_id: str | None = None


class ChangeSeatsResponse(BaseModel):
    message: str = ""
    invoice: SubscriptionInvoice | None = None
