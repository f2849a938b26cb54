"""Application services: invoice status changes, lookups and analytics.

Status changes touch the invoice only.  Nothing ties an invoice's status
to its order's, so callers that change one are responsible for the other.
"""

from __future__ import annotations

from datetime import datetime

from pos.application.dto import InvoiceDTO, to_invoice_dto
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.invoice import Invoice, InvoiceStatus
from pos.domain.repository.invoice_repository import InvoiceRepository
from pos.domain.service.reporting import InvoiceAnalytics, ReportWindow, invoice_analytics

DEFAULT_LIMIT = 50


def parse_invoice_status(raw: str | None) -> InvoiceStatus | None:
    if not raw:
        return None
    try:
        return InvoiceStatus(raw.strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown invoice status '{raw}'") from exc


def _load(invoice_repo: InvoiceRepository, invoice_ref: str) -> Invoice:
    invoice = invoice_repo.get_by_id(invoice_ref) or invoice_repo.get_by_order_number(
        invoice_ref
    )
    if invoice is None:
        raise EntityNotFoundError(f"Invoice '{invoice_ref}' not found")
    return invoice


class UpdateInvoiceStatusHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(self, invoice_id: str, status: str) -> InvoiceDTO:
        new_status = parse_invoice_status(status)
        if new_status is None:
            raise ValidationError("Invoice status is required")

        invoice = _load(self._invoice_repo, invoice_id)
        invoice.set_status(new_status)
        self._invoice_repo.save(invoice)
        return to_invoice_dto(invoice)


class CancelInvoiceHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(self, invoice_id: str, reason: str = "") -> InvoiceDTO:
        invoice = _load(self._invoice_repo, invoice_id)
        invoice.cancel(reason)
        self._invoice_repo.save(invoice)
        return to_invoice_dto(invoice)


class ShowInvoiceHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(self, invoice_ref: str) -> InvoiceDTO:
        """Return an invoice with its line items, by id or order number."""
        invoice = _load(self._invoice_repo, invoice_ref)
        items = self._invoice_repo.get_items(invoice.id)  # type: ignore[arg-type]
        return to_invoice_dto(invoice, items)


class ListInvoicesHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(
        self,
        status: str | None = None,
        customer_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        search: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[InvoiceDTO]:
        """List invoices, newest first.

        ``search`` is a case-insensitive substring match against the
        invoice's search terms (order number, customer, product names).
        """
        searching = bool(search and search.strip())
        invoices = self._invoice_repo.list(
            status=parse_invoice_status(status),
            customer_id=customer_id,
            start=start,
            end=end,
            limit=None if searching else limit,
        )
        if searching:
            invoices = [inv for inv in invoices if inv.matches(search)][:limit]  # type: ignore[arg-type]
        return [to_invoice_dto(inv) for inv in invoices]


class InvoiceAnalyticsHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def handle(self, window: ReportWindow) -> InvoiceAnalytics:
        invoices = self._invoice_repo.list(
            status=InvoiceStatus.ACTIVE, start=window.start_at, end=window.end_at
        )
        return invoice_analytics(invoices)
