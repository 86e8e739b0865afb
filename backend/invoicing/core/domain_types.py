"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId, InvoiceLineId wrap UUIDs — never use bare UUID in domain logic
    - Money and Quantity are Decimal — never float

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from decimal import Decimal
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)
InvoiceLineId = NewType("InvoiceLineId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Money = NewType("Money", Decimal)         # >= 0 for unit prices
Quantity = NewType("Quantity", Decimal)   # > 0
