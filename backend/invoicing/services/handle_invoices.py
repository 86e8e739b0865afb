"""Invoice Handlers — create, get_by_id, get_all, update (header).

Invariants:
    - create builds the aggregate, adds every requested line, persists via repo.add,
      and returns ONLY the new id
    - get_by_id returns the full transfer shape or raises InvoiceNotFoundError
    - get_all returns summaries (id, number, date), newest date first
    - update applies number, date and customer fields; lines are untouched
    - Rule set runs before the repository is touched

Design Decisions:
    - today injected as a callable: the future-date rule is testable without freezing time
    - Header fields are validated here (rule set), not by the aggregate
"""

import logging
from datetime import date
from typing import Callable

from invoicing.core.domain_types import InvoiceId
from invoicing.core.enforce_invoice_rules import (
    DEFAULT_MAX_FUTURE_DAYS, check_create_invoice, check_update_invoice,
)
from invoicing.core.invoice import Invoice
from invoicing.core.repository_protocols import InvoiceRepository
from invoicing.schemas.invoice import (
    InvoiceCreate, InvoiceResponse, InvoiceSummaryResponse, InvoiceUpdate,
)
from invoicing.services.invoice_mapping import (
    to_invoice_response, to_summary_response,
)
from invoicing.services.invoice_operations import (
    domain_boundary, ensure_valid, load_invoice_or_404,
)

logger = logging.getLogger(__name__)


class InvoiceHandlers:
    """Header-level invoice use cases."""

    def __init__(
        self,
        repo: InvoiceRepository,
        max_future_days: int = DEFAULT_MAX_FUTURE_DAYS,
        today: Callable[[], date] = date.today,
    ):
        self.repo = repo
        self.max_future_days = max_future_days
        self.today = today

    async def create(self, body: InvoiceCreate) -> InvoiceId:
        """Create an invoice with its initial lines. Returns the new id."""
        ensure_valid(check_create_invoice(body.number, body.lines))

        with domain_boundary():
            invoice = Invoice(body.number, body.date)
            for line in body.lines:
                invoice.add_line(line.description, line.quantity, line.unit_price)

        await self.repo.add(invoice)
        logger.info(
            f"Invoice {invoice.number} created",
            extra={"invoice_id": invoice.id, "line_count": len(invoice.lines)},
        )
        return invoice.id

    async def get_by_id(self, invoice_id: InvoiceId) -> InvoiceResponse:
        invoice = await load_invoice_or_404(self.repo, invoice_id)
        return to_invoice_response(invoice)

    async def get_all(self) -> list[InvoiceSummaryResponse]:
        summaries = await self.repo.get_all()
        return [to_summary_response(s) for s in summaries]

    async def update(
        self, invoice_id: InvoiceId, body: InvoiceUpdate,
    ) -> InvoiceResponse:
        """Replace header fields. Customer name is required from here on."""
        ensure_valid(check_update_invoice(
            body.number,
            body.date,
            body.customer_name,
            body.customer_address,
            body.customer_vat,
            today=self.today(),
            max_future_days=self.max_future_days,
        ))
        invoice = await load_invoice_or_404(self.repo, invoice_id)

        with domain_boundary(invoice_id):
            invoice.update_number(body.number)
            invoice.update_date(body.date)
            invoice.update_customer(
                body.customer_name, body.customer_address, body.customer_vat,
            )

        await self.repo.update(invoice)
        logger.info(
            f"Invoice {invoice.number} header updated",
            extra={"invoice_id": invoice.id},
        )
        return to_invoice_response(invoice)
