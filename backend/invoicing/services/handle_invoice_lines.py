"""Invoice Line Handlers — add_line, update_line, remove_line.

Invariants:
    - All three follow: rule set -> load (404 if absent) -> one aggregate call inside
      domain_boundary -> repo.update -> full transfer shape
    - "line not found" and "cannot remove the last line" come back as 400
      (DomainRuleViolationError), never 404
    - A failed operation is never persisted

Design Decisions:
    - _apply takes the aggregate call as a callable: the three use cases differ only
      in that call and in the rule set they run first
"""

import logging
from typing import Callable
from uuid import UUID

from invoicing.core.domain_types import InvoiceId
from invoicing.core.enforce_invoice_rules import check_line_fields
from invoicing.core.invoice import Invoice
from invoicing.core.repository_protocols import InvoiceRepository
from invoicing.schemas.invoice import (
    InvoiceLineCreate, InvoiceLineUpdate, InvoiceResponse,
)
from invoicing.services.invoice_mapping import to_invoice_response
from invoicing.services.invoice_operations import (
    domain_boundary, ensure_valid, load_invoice_or_404,
)

logger = logging.getLogger(__name__)


class InvoiceLineHandlers:
    """Line-level invoice use cases."""

    def __init__(self, repo: InvoiceRepository):
        self.repo = repo

    async def add_line(
        self, invoice_id: InvoiceId, body: InvoiceLineCreate,
    ) -> InvoiceResponse:
        ensure_valid(check_line_fields(body))
        return await self._apply(
            invoice_id,
            lambda invoice: invoice.add_line(
                body.description, body.quantity, body.unit_price,
            ),
            action="line added",
        )

    async def update_line(
        self, invoice_id: InvoiceId, line_id: UUID, body: InvoiceLineUpdate,
    ) -> InvoiceResponse:
        ensure_valid(check_line_fields(body))
        return await self._apply(
            invoice_id,
            lambda invoice: invoice.update_line(
                line_id, body.description, body.quantity, body.unit_price,
            ),
            action="line updated",
            line_id=line_id,
        )

    async def remove_line(
        self, invoice_id: InvoiceId, line_id: UUID,
    ) -> InvoiceResponse:
        return await self._apply(
            invoice_id,
            lambda invoice: invoice.remove_line(line_id),
            action="line removed",
            line_id=line_id,
        )

    async def _apply(
        self,
        invoice_id: InvoiceId,
        operation: Callable[[Invoice], object],
        action: str,
        line_id: UUID | None = None,
    ) -> InvoiceResponse:
        invoice = await load_invoice_or_404(self.repo, invoice_id)

        with domain_boundary(invoice_id, line_id):
            operation(invoice)

        await self.repo.update(invoice)
        logger.info(
            f"Invoice {invoice.number}: {action}",
            extra={
                "invoice_id": invoice.id,
                "line_id": line_id,
                "line_count": len(invoice.lines),
            },
        )
        return to_invoice_response(invoice)
