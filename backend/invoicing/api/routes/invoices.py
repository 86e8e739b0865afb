"""Invoice Routes — HTTP surface for the invoice aggregate.

Invariants:
    - Every route delegates to exactly one handler method
    - Failures are raised as InvoicingError subclasses and rendered by the global handlers:
      validation/domain -> 400, missing invoice -> 404
    - POST /invoices answers 201 with the new id and a Location header

Design Decisions:
    - Path ids typed as UUID: malformed ids rejected by request validation (400)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from invoicing.api.dependencies import (
    get_invoice_handlers, get_invoice_line_handlers,
)
from invoicing.core.domain_types import InvoiceId
from invoicing.schemas.invoice import (
    InvoiceCreate, InvoiceCreatedResponse, InvoiceLineCreate,
    InvoiceLineUpdate, InvoiceResponse, InvoiceSummaryResponse, InvoiceUpdate,
)
from invoicing.services.handle_invoice_lines import InvoiceLineHandlers
from invoicing.services.handle_invoices import InvoiceHandlers

router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.post(
    "", response_model=InvoiceCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    body: InvoiceCreate,
    response: Response,
    handlers: InvoiceHandlers = Depends(get_invoice_handlers),
):
    """Create an invoice with at least one line."""
    invoice_id = await handlers.create(body)
    response.headers["Location"] = f"{router.prefix}/{invoice_id}"
    return InvoiceCreatedResponse(id=invoice_id)


@router.get("", response_model=list[InvoiceSummaryResponse])
async def list_invoices(
    handlers: InvoiceHandlers = Depends(get_invoice_handlers),
):
    """List id, number and date of every invoice, newest first."""
    return await handlers.get_all()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    handlers: InvoiceHandlers = Depends(get_invoice_handlers),
):
    return await handlers.get_by_id(InvoiceId(invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: UUID,
    body: InvoiceUpdate,
    handlers: InvoiceHandlers = Depends(get_invoice_handlers),
):
    """Replace number, date and customer fields."""
    return await handlers.update(InvoiceId(invoice_id), body)


@router.post("/{invoice_id}/lines", response_model=InvoiceResponse)
async def add_invoice_line(
    invoice_id: UUID,
    body: InvoiceLineCreate,
    handlers: InvoiceLineHandlers = Depends(get_invoice_line_handlers),
):
    return await handlers.add_line(InvoiceId(invoice_id), body)


@router.put("/{invoice_id}/lines/{line_id}", response_model=InvoiceResponse)
async def update_invoice_line(
    invoice_id: UUID,
    line_id: UUID,
    body: InvoiceLineUpdate,
    handlers: InvoiceLineHandlers = Depends(get_invoice_line_handlers),
):
    return await handlers.update_line(InvoiceId(invoice_id), line_id, body)


@router.delete("/{invoice_id}/lines/{line_id}", response_model=InvoiceResponse)
async def remove_invoice_line(
    invoice_id: UUID,
    line_id: UUID,
    handlers: InvoiceLineHandlers = Depends(get_invoice_line_handlers),
):
    """Remove a line. The last remaining line cannot be removed."""
    return await handlers.remove_line(InvoiceId(invoice_id), line_id)
