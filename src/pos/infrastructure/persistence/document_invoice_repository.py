"""DocumentStore-backed implementation of InvoiceRepository.

Invoices and their line items are kept in two collections, written
separately, so listing invoices never drags the line detail along.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pos.domain.model.invoice import Invoice, InvoiceItems, InvoiceLine, InvoiceStatus
from pos.domain.model.order import PaymentStatus
from pos.domain.repository.invoice_repository import InvoiceRepository
from pos.infrastructure.persistence.codec import (
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)
from pos.infrastructure.persistence.document_repository import DocumentRepository
from pos.infrastructure.persistence.document_store import Condition, OrderBy

ITEMS_COLLECTION = "invoice_items"


class DocumentInvoiceRepository(DocumentRepository, InvoiceRepository):

    collection = "invoices"

    # --- InvoiceRepository interface ------------------------------------------

    def get_by_id(self, invoice_id: str) -> Invoice | None:
        raw = self._get(invoice_id)
        return None if raw is None else self._to_domain(raw)

    def get_by_order_number(self, order_number: str) -> Invoice | None:
        raws = self._query([Condition("order_number", "==", order_number)], limit=1)
        return self._to_domain(raws[0]) if raws else None

    def list(
        self,
        status: InvoiceStatus | None = None,
        customer_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = None,
    ) -> list[Invoice]:
        where: list[Condition] = []
        if status is not None:
            where.append(Condition("status", "==", status.value))
        if customer_id:
            where.append(Condition("customer_id", "==", customer_id))
        if start is not None:
            where.append(Condition("invoice_date", ">=", start))
        if end is not None:
            where.append(Condition("invoice_date", "<=", end))
        raws = self._query(where, OrderBy("invoice_date"), limit)
        return [self._to_domain(raw) for raw in raws]

    def save(self, invoice: Invoice) -> None:
        invoice.id = self._write(invoice.id, self._to_raw(invoice))

    def save_items(self, items: InvoiceItems) -> None:
        raw = self._items_to_raw(items)
        if items.id is None:
            items.id = self._store.create(self._owner_id, ITEMS_COLLECTION, raw)["id"]
        else:
            self._store.update(self._owner_id, ITEMS_COLLECTION, items.id, raw)

    def get_items(self, invoice_id: str) -> InvoiceItems | None:
        raws = self._store.get_all(
            self._owner_id,
            ITEMS_COLLECTION,
            [Condition("invoice_id", "==", invoice_id)],
            limit=1,
        )
        return self._items_to_domain(raws[0]) if raws else None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(invoice: Invoice) -> dict:
        return {
            "order_number": invoice.order_number,
            "customer_id": invoice.customer_id,
            "customer_name": invoice.customer_name,
            "customer_phone": invoice.customer_phone,
            "customer_email": invoice.customer_email,
            "item_count": invoice.item_count,
            "subtotal": money_to_raw(invoice.subtotal),
            "discount": money_to_raw(invoice.discount),
            "discount_percentage": str(invoice.discount_percentage),
            "total": money_to_raw(invoice.total),
            "payment_method": invoice.payment_method,
            "payment_status": invoice.payment_status.value,
            "invoice_date": dt_to_raw(invoice.invoice_date),
            "status": invoice.status.value,
            "search_terms": list(invoice.search_terms),
            "cancel_reason": invoice.cancel_reason,
            "cancelled_at": dt_to_raw(invoice.cancelled_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Invoice:
        return Invoice(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_id=raw.get("customer_id"),
            customer_name=raw.get("customer_name") or "",
            customer_phone=raw.get("customer_phone") or "",
            customer_email=raw.get("customer_email") or "",
            item_count=int(raw.get("item_count", 0)),
            subtotal=money_from_raw(raw["subtotal"]),
            discount=money_from_raw(raw.get("discount", "0")),
            discount_percentage=Decimal(raw.get("discount_percentage", "0")),
            total=money_from_raw(raw["total"]),
            payment_method=raw.get("payment_method") or "",
            payment_status=PaymentStatus(raw.get("payment_status", "paid")),
            invoice_date=dt_from_raw(raw["invoice_date"]),
            status=InvoiceStatus(raw.get("status", "active")),
            search_terms=list(raw.get("search_terms", [])),
            cancel_reason=raw.get("cancel_reason") or "",
            cancelled_at=dt_from_raw(raw.get("cancelled_at")),
            updated_at=dt_from_raw(raw.get("updated_at")),
        )

    @staticmethod
    def _items_to_raw(items: InvoiceItems) -> dict:
        return {
            "invoice_id": items.invoice_id,
            "order_number": items.order_number,
            "items": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "category": line.category,
                    "quantity": line.quantity,
                    "original_price": money_to_raw(line.original_price),
                    "current_price": money_to_raw(line.current_price),
                    "final_price": money_to_raw(line.final_price),
                    "discount": str(line.discount_percentage),
                    "subtotal": money_to_raw(line.subtotal),
                    "total": money_to_raw(line.total),
                }
                for line in items.items
            ],
        }

    @staticmethod
    def _items_to_domain(raw: dict) -> InvoiceItems:
        return InvoiceItems(
            id=raw["id"],
            invoice_id=raw["invoice_id"],
            order_number=raw["order_number"],
            items=[
                InvoiceLine(
                    product_id=i["product_id"],
                    product_name=i["product_name"],
                    category=i.get("category") or "",
                    quantity=int(i["quantity"]),
                    original_price=money_from_raw(i["original_price"]),
                    current_price=money_from_raw(i["current_price"]),
                    final_price=money_from_raw(i["final_price"]),
                    discount_percentage=Decimal(i.get("discount", "0")),
                    subtotal=money_from_raw(i["subtotal"]),
                    total=money_from_raw(i["total"]),
                )
                for i in raw["items"]
            ],
        )
