"""Invoice Schemas — Pydantic request bodies and read-only transfer shapes.

Invariants:
    - Wire format is camelCase (unitPrice, lineTotal, customerName); snake_case accepted on input
    - Request schemas check shape only (types, required keys); field rules and their
      messages live in core/enforce_invoice_rules.py
    - Response schemas are frozen: the transfer shape is a read-only projection
    - Amounts are Decimal in Python and exact decimal strings on the wire ("152.5");
      no binary float ever touches a quantity, price or total

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one switch for the whole contract
    - InvoiceCreate.lines defaults to []: an empty list reaches the rule set and gets the
      "At least one invoice line is required." message instead of a generic type error
"""

from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def _decimal_text(value: Decimal) -> str:
    """Exact decimal text without exponent or trailing zeros: 100.0000 -> "100"."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


Amount = Annotated[
    Decimal, PlainSerializer(_decimal_text, return_type=str, when_used="json"),
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenCamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )


# --- Requests -----------------------------------------------------------------

class InvoiceLineCreate(_CamelModel):
    """One line of a create request, or the body of POST /invoices/{id}/lines."""
    description: str
    quantity: Decimal
    unit_price: Decimal


class InvoiceLineUpdate(InvoiceLineCreate):
    """Body of PUT /invoices/{id}/lines/{lineId}."""


class InvoiceCreate(_CamelModel):
    """Body of POST /invoices."""
    number: str
    date: date
    lines: list[InvoiceLineCreate] = Field(default_factory=list)


class InvoiceUpdate(_CamelModel):
    """Body of PUT /invoices/{id} — header fields only."""
    number: str
    date: date
    customer_name: str = ""
    customer_address: str | None = None
    customer_vat: str | None = None


# --- Responses ----------------------------------------------------------------

class InvoiceLineResponse(_FrozenCamelModel):
    id: UUID
    description: str
    quantity: Amount
    unit_price: Amount
    line_total: Amount


class InvoiceResponse(_FrozenCamelModel):
    """Full invoice transfer shape."""
    id: UUID
    number: str
    date: date
    customer_name: str
    customer_address: str | None
    customer_vat: str | None
    total: Amount
    lines: list[InvoiceLineResponse]


class InvoiceSummaryResponse(_FrozenCamelModel):
    id: UUID
    number: str
    date: date


class InvoiceCreatedResponse(_FrozenCamelModel):
    id: UUID
