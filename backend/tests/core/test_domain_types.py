"""Domain Types — NewType wrappers are transparent at runtime."""

from decimal import Decimal
from uuid import uuid4

from invoicing.core.domain_types import InvoiceId, InvoiceLineId, Money, Quantity


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert InvoiceId(uid) == uid
    assert InvoiceLineId(uid) == uid


def test_value_types_wrap_decimal():
    assert Money(Decimal("9.99")) == Decimal("9.99")
    assert isinstance(Quantity(Decimal("2")), Decimal)
