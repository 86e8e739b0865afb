"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the aggregate methods the handlers call between load and save stay synchronous
    - No optimistic concurrency token: two requests editing the same invoice race and
      the last update wins
"""

from typing import Protocol

from invoicing.core.domain_types import InvoiceId
from invoicing.core.invoice import Invoice, InvoiceSummary


class InvoiceRepository(Protocol):
    """Contract for invoice aggregate persistence — implemented by shell."""

    async def add(self, invoice: Invoice) -> None:
        """Persist a brand-new aggregate including its initial lines."""
        ...

    async def get_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        """Load one aggregate with its lines in insertion order, or None."""
        ...

    async def get_all(self) -> list[InvoiceSummary]:
        """Identifying fields of every invoice, newest date first."""
        ...

    async def update(self, invoice: Invoice) -> None:
        """Persist header fields and reconcile the current line set."""
        ...
