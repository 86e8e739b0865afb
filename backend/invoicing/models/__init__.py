"""ORM Models — SQLAlchemy declarative records for the invoice aggregate.

Invariants:
    - All models inherit from Base (db/base.py)
    - Invoice is the aggregate root; every line is scoped by invoice_id

Design Decisions:
    - One file per table for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
    - Records are persistence shapes only; the domain aggregate lives in core/invoice.py
"""

from invoicing.models.invoice import Invoice  # noqa: F401
from invoicing.models.invoice_line import InvoiceLine  # noqa: F401
