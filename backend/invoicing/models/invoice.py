"""Invoice ORM — persists the header of the invoice aggregate.

Invariants:
    - id is UUID primary key, assigned by the domain aggregate (not the database)
    - number <= 50 chars, customer_name <= 200 (empty string until first header update)
    - customer_address <= 500, customer_vat <= 50, both nullable
    - No total column: totals are always derived from lines

Design Decisions:
    - cascade="all, delete-orphan": removing a line from .lines deletes its row
    - lines ordered by position and eagerly loaded (selectin): repository never lazy-loads
      in async context
"""

import datetime
import uuid

from sqlalchemy import String, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from invoicing.db.base import Base


class Invoice(Base):
    """Invoice record — header columns of the aggregate root."""
    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    number: Mapped[str] = mapped_column(String(50), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(
        String(200), nullable=False, default="",
    )
    customer_address: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )
    customer_vat: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )

    lines: Mapped[list["InvoiceLine"]] = relationship(
        "InvoiceLine", back_populates="invoice",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="InvoiceLine.position",
    )
