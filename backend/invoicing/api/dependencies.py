"""Dependency Wiring — FastAPI dependencies that build handlers per request.

Invariants:
    - One AsyncSession per request (get_db), shared by repository and handlers
    - Settings read through get_settings() (cached)

Design Decisions:
    - Composition root for the invoice routes; tests override get_db only
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.config import get_settings
from invoicing.infrastructure.database import get_db
from invoicing.infrastructure.invoice_repository import SqlAlchemyInvoiceRepository
from invoicing.services.handle_invoice_lines import InvoiceLineHandlers
from invoicing.services.handle_invoices import InvoiceHandlers


def get_invoice_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlAlchemyInvoiceRepository:
    return SqlAlchemyInvoiceRepository(db)


def get_invoice_handlers(
    repo: SqlAlchemyInvoiceRepository = Depends(get_invoice_repository),
) -> InvoiceHandlers:
    return InvoiceHandlers(
        repo, max_future_days=get_settings().invoice_max_future_days,
    )


def get_invoice_line_handlers(
    repo: SqlAlchemyInvoiceRepository = Depends(get_invoice_repository),
) -> InvoiceLineHandlers:
    return InvoiceLineHandlers(repo)
