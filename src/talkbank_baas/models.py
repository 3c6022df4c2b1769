"""Request bodies with optional fields.

Fields left as ``None`` are absent from the serialized body; the server treats
a missing key and an explicit ``null`` differently, so ``None`` is never sent.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class RequestBody(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


# === Cards ===


class CardLock(RequestBody):
    reason: str | None = None


class CardActivate(RequestBody):
    type: str | None = None


class CardMoney(RequestBody):
    """Refill or withdrawal of a card."""

    amount: float
    order_id: str | None = None


# === Holds ===


class Hold(RequestBody):
    amount: int | None = None
    order_slug: str | None = None
    card_info: dict[str, Any] | None = None
    card_ref_id: str | None = None
    redirect_url: str | None = None


class HoldWithForm(RequestBody):
    redirect_url: str
    amount: int
    order_slug: str | None = None
    card_token: str | None = None


class HoldAmount(RequestBody):
    """Confirm or reverse a hold, fully when amount is absent."""

    amount: int | None = None


# === Payments ===


class PaymentFromUnregisteredCard(RequestBody):
    amount: int
    card_info: dict[str, Any]
    redirect_url: str | None = None
    order_slug: str | None = None


class PaymentWithForm(RequestBody):
    amount: int
    order_slug: str | None = None
    redirect_url: str | None = None


class PaymentToken(RequestBody):
    amount: int
    order_slug: str | None = None


class PaymentFromRegisteredCard(RequestBody):
    amount: int
    card_token: str
    order_slug: str | None = None


class PaymentToRegisteredCard(RequestBody):
    card_token: str
    amount: int
    order_slug: str | None = None


class PaymentToUnregisteredCard(RequestBody):
    card_number: str
    amount: int | None = None
    order_slug: str | None = None


class PaymentToAccount(RequestBody):
    amount: int
    account: str
    bik: str
    name: str
    inn: str | None = None
    description: str | None = None
    order_slug: str | None = None


class PaymentAuthorization(RequestBody):
    card_info: dict[str, Any] | None = None
    redirect_url: str | None = None
    order_slug: str | None = None


# === Self-employment ===


class SelfemploymentReceipt(RequestBody):
    amount: float
    service_name: str
    operation_time: str | None = None
    payer_inn: str | None = None
    payer_name: str | None = None


# === SBP ===


class SbpPayment(RequestBody):
    amount: int
    phone: str
    bank_id: str
    order_slug: str | None = None
    description: str | None = None


# === Beneficiaries ===


class Beneficiary(RequestBody):
    name: str
    account: str
    bik: str
    inn: str | None = None
    kpp: str | None = None
    description: str | None = None
