"""Operation Boundary — shared steps of every invoice use case.

Invariants:
    - ensure_valid raises ValidationFailedError iff the rule set returned errors
    - load_invoice_or_404 raises InvoiceNotFoundError (code invoice_not_found) for unknown ids
    - domain_boundary converts DomainError to DomainRuleViolationError, message verbatim;
      any other exception passes through untouched

Design Decisions:
    - Context manager over try/except in each handler: one conversion point for all
      seven use cases
"""

import logging
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from invoicing.core.domain_types import InvoiceId
from invoicing.core.errors import (
    DomainError, DomainRuleViolationError, ErrorContext,
    InvoiceNotFoundError, ValidationFailedError,
)
from invoicing.core.invoice import Invoice
from invoicing.core.repository_protocols import InvoiceRepository

logger = logging.getLogger(__name__)


def ensure_valid(errors: dict[str, list[str]]) -> None:
    """Raise the rule-set result as a 400 when it is not empty."""
    if errors:
        raise ValidationFailedError(errors)


async def load_invoice_or_404(
    repo: InvoiceRepository, invoice_id: InvoiceId,
) -> Invoice:
    invoice = await repo.get_by_id(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return invoice


@contextmanager
def domain_boundary(
    invoice_id: UUID | None = None, line_id: UUID | None = None,
) -> Iterator[None]:
    """Run an aggregate operation; surface invariant violations as validation failures."""
    try:
        yield
    except DomainError as e:
        logger.warning(
            f"Invoice operation rejected: {e.message}",
            extra={"invoice_id": invoice_id, "line_id": line_id},
        )
        raise DomainRuleViolationError(
            e.message,
            ErrorContext(
                invoice_id=str(invoice_id) if invoice_id else None,
                line_id=str(line_id) if line_id else None,
            ),
        ) from e
