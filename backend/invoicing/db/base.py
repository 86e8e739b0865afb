"""Declarative Base for the invoice tables, with deterministic constraint names.

Invariants:
    - invoices and invoice_lines both register on Base.metadata
    - Indexes, keys and foreign keys are named by NAMING_CONVENTION, so the names
      Alembic writes match what the models produce on every backend
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
