"""InvoiceLine ORM — persists one line of an invoice.

Invariants:
    - Always belongs to an Invoice (invoice_id FK, non-nullable, cascade on delete)
    - position preserves insertion order; rewritten by the repository on every update
    - quantity and unit_price stored as NUMERIC(18, 4) and read back as Decimal
    - No line_total column: derived from quantity * unit_price

Design Decisions:
    - position column over relying on insert order: SQL gives no ordering guarantee
      without ORDER BY
"""

import uuid
from decimal import Decimal

from sqlalchemy import String, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from invoicing.db.base import Base


class InvoiceLine(Base):
    """Invoice line record — description, quantity, unit price."""
    __tablename__ = "invoice_lines"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(
        Numeric(18, 4), nullable=False,
    )
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(18, 4), nullable=False,
    )

    invoice: Mapped["Invoice"] = relationship(
        "Invoice", back_populates="lines",
    )
