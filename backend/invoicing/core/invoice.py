"""Invoice Aggregate — invoice root and its owned lines, with line-management invariants.

Invariants:
    - A line always has a non-blank description, quantity > 0 and unit_price >= 0
    - line_total and total are derived on every access, never stored, and never rounded
    - Once created through the service layer an invoice holds >= 1 line;
      remove_line refuses to drop the last one
    - remove_line checks existence BEFORE the last-line guard, so an unknown id
      on a single-line invoice reports "not found"
    - Lines keep insertion order

Design Decisions:
    - Header setters (update_number/update_date/update_customer) assign unconditionally:
      required customer name, length limits and the future-date bound are enforced by
      the caller-side rule set (core/enforce_invoice_rules.py), while line invariants
      are self-enforced here. The asymmetry is kept as found.
    - Plain mutable classes, no ORM coupling: the repository maps records in and out
      through restore()
    - Line validation runs before any assignment, so a rejected update leaves the line intact
"""

import datetime
import uuid
from dataclasses import dataclass
from decimal import Decimal, localcontext

from invoicing.core.domain_types import InvoiceId, InvoiceLineId, Money, Quantity
from invoicing.core.errors import (
    DomainError, InvoiceLineNotFoundError, LastInvoiceLineError,
)


# Wide enough for the product of two NUMERIC(18, 4) values plus a sum over lines
_EXACT_PRECISION = 60


def _check_line_fields(
    description: str, quantity: Decimal, unit_price: Decimal,
) -> None:
    if not description or not description.strip():
        raise DomainError("Description is required.")
    if quantity <= 0:
        raise DomainError("Quantity must be > 0.")
    if unit_price < 0:
        raise DomainError("Unit price must be >= 0.")


class InvoiceLine:
    """A single billed item. Only created, changed and removed through its Invoice."""

    def __init__(self, description: str, quantity: Decimal, unit_price: Decimal):
        _check_line_fields(description, quantity, unit_price)
        self._id = InvoiceLineId(uuid.uuid4())
        self._description = description
        self._quantity = Quantity(Decimal(quantity))
        self._unit_price = Money(Decimal(unit_price))

    @classmethod
    def restore(
        cls,
        line_id: uuid.UUID,
        description: str,
        quantity: Decimal,
        unit_price: Decimal,
    ) -> "InvoiceLine":
        """Rehydrate a persisted line. Skips construction checks."""
        line = cls.__new__(cls)
        line._id = InvoiceLineId(line_id)
        line._description = description
        line._quantity = Quantity(quantity)
        line._unit_price = Money(unit_price)
        return line

    @property
    def id(self) -> InvoiceLineId:
        return self._id

    @property
    def description(self) -> str:
        return self._description

    @property
    def quantity(self) -> Quantity:
        return self._quantity

    @property
    def unit_price(self) -> Money:
        return self._unit_price

    @property
    def line_total(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = _EXACT_PRECISION
            return self._quantity * self._unit_price

    def update(
        self, description: str, quantity: Decimal, unit_price: Decimal,
    ) -> None:
        _check_line_fields(description, quantity, unit_price)
        self._description = description
        self._quantity = Quantity(Decimal(quantity))
        self._unit_price = Money(Decimal(unit_price))

    def __repr__(self) -> str:
        return (
            f"InvoiceLine(id={self._id}, description={self._description!r}, "
            f"quantity={self._quantity}, unit_price={self._unit_price})"
        )


class Invoice:
    """Invoice aggregate root — owns an ordered list of InvoiceLine."""

    def __init__(self, number: str, invoice_date: datetime.date):
        if not number or not number.strip():
            raise DomainError("Invoice number is required.")
        self._id = InvoiceId(uuid.uuid4())
        self._number = number
        self._date = invoice_date
        self._customer_name = ""
        self._customer_address: str | None = None
        self._customer_vat: str | None = None
        self._lines: list[InvoiceLine] = []

    @classmethod
    def restore(
        cls,
        invoice_id: uuid.UUID,
        number: str,
        invoice_date: datetime.date,
        customer_name: str,
        customer_address: str | None,
        customer_vat: str | None,
        lines: list[InvoiceLine],
    ) -> "Invoice":
        """Rehydrate a persisted aggregate. Skips construction checks."""
        invoice = cls.__new__(cls)
        invoice._id = InvoiceId(invoice_id)
        invoice._number = number
        invoice._date = invoice_date
        invoice._customer_name = customer_name
        invoice._customer_address = customer_address
        invoice._customer_vat = customer_vat
        invoice._lines = list(lines)
        return invoice

    # ─── Read side ──────────────────────────────────────────────

    @property
    def id(self) -> InvoiceId:
        return self._id

    @property
    def number(self) -> str:
        return self._number

    @property
    def date(self) -> datetime.date:
        return self._date

    @property
    def customer_name(self) -> str:
        return self._customer_name

    @property
    def customer_address(self) -> str | None:
        return self._customer_address

    @property
    def customer_vat(self) -> str | None:
        return self._customer_vat

    @property
    def lines(self) -> tuple[InvoiceLine, ...]:
        return tuple(self._lines)

    @property
    def total(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = _EXACT_PRECISION
            return sum((line.line_total for line in self._lines), Decimal(0))

    # ─── Header (caller-validated) ──────────────────────────────

    def update_number(self, number: str) -> None:
        self._number = number

    def update_date(self, invoice_date: datetime.date) -> None:
        self._date = invoice_date

    def update_customer(
        self,
        customer_name: str,
        customer_address: str | None,
        customer_vat: str | None,
    ) -> None:
        self._customer_name = customer_name
        self._customer_address = customer_address
        self._customer_vat = customer_vat

    # ─── Lines (self-enforced) ──────────────────────────────────

    def add_line(
        self, description: str, quantity: Decimal, unit_price: Decimal,
    ) -> InvoiceLine:
        line = InvoiceLine(description, quantity, unit_price)
        self._lines.append(line)
        return line

    def update_line(
        self,
        line_id: uuid.UUID,
        description: str,
        quantity: Decimal,
        unit_price: Decimal,
    ) -> None:
        line = self._find_line(line_id)
        line.update(description, quantity, unit_price)

    def remove_line(self, line_id: uuid.UUID) -> None:
        line = self._find_line(line_id)
        if len(self._lines) == 1:
            raise LastInvoiceLineError()
        self._lines.remove(line)

    def _find_line(self, line_id: uuid.UUID) -> InvoiceLine:
        for line in self._lines:
            if line.id == line_id:
                return line
        raise InvoiceLineNotFoundError(line_id)

    def __repr__(self) -> str:
        return (
            f"Invoice(id={self._id}, number={self._number!r}, "
            f"date={self._date.isoformat()}, lines={len(self._lines)})"
        )


@dataclass(frozen=True)
class InvoiceSummary:
    """Identifying fields of an invoice, as listed by the repository."""
    id: InvoiceId
    number: str
    date: datetime.date
