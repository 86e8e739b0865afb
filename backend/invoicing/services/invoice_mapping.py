"""Aggregate → transfer shape mapping."""

from invoicing.core.invoice import Invoice, InvoiceLine, InvoiceSummary
from invoicing.schemas.invoice import (
    InvoiceLineResponse, InvoiceResponse, InvoiceSummaryResponse,
)


def to_line_response(line: InvoiceLine) -> InvoiceLineResponse:
    return InvoiceLineResponse(
        id=line.id,
        description=line.description,
        quantity=line.quantity,
        unit_price=line.unit_price,
        line_total=line.line_total,
    )


def to_invoice_response(invoice: Invoice) -> InvoiceResponse:
    """Project the aggregate, lines in aggregate order, total computed now."""
    return InvoiceResponse(
        id=invoice.id,
        number=invoice.number,
        date=invoice.date,
        customer_name=invoice.customer_name,
        customer_address=invoice.customer_address,
        customer_vat=invoice.customer_vat,
        total=invoice.total,
        lines=[to_line_response(line) for line in invoice.lines],
    )


def to_summary_response(summary: InvoiceSummary) -> InvoiceSummaryResponse:
    return InvoiceSummaryResponse(
        id=summary.id, number=summary.number, date=summary.date,
    )
