"""Conversions between domain values and JSON-safe document fields."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from pos.domain.model.cart import ProductRef
from pos.domain.model.value_objects import Money


def money_to_raw(money: Money) -> str:
    return str(money.amount)


def money_from_raw(raw: str | int | float, currency: str = "INR") -> Money:
    return Money(Decimal(str(raw)), currency)


def optional_money_to_raw(money: Money | None) -> str | None:
    return None if money is None else money_to_raw(money)


def optional_money_from_raw(raw: str | None) -> Money | None:
    return None if raw is None else money_from_raw(raw)


def dt_to_raw(moment: datetime | None) -> str | None:
    if moment is None:
        return None
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.astimezone(timezone.utc).isoformat()


def dt_from_raw(raw: str | None) -> datetime | None:
    if not raw:
        return None
    moment = datetime.fromisoformat(raw)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def product_ref_to_raw(ref: ProductRef) -> dict:
    return {
        "id": ref.id,
        "name": ref.name,
        "category": ref.category,
        "kind": ref.kind.value,
        "cost_price": optional_money_to_raw(ref.cost_price),
    }


def product_ref_from_raw(raw: dict) -> ProductRef:
    return ProductRef(
        id=raw["id"],
        name=raw["name"],
        category=raw.get("category") or "Pottery",
        kind=ProductRef.kind_for_id(raw["id"], raw.get("kind")),
        cost_price=optional_money_from_raw(raw.get("cost_price")),
    )
