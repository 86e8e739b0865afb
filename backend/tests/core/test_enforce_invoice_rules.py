"""Invoice Rule Sets — tests for pure caller-side validation.

Tests cover:
    - check_create_invoice: number, at least one line, per-line keys
    - check_update_invoice: customer name, max lengths, future-date bound
    - check_line_fields: description, quantity, unit price messages
    - Empty dict == valid
"""

from datetime import date, timedelta
from decimal import Decimal
from types import SimpleNamespace

from invoicing.core.enforce_invoice_rules import (
    check_create_invoice, check_update_invoice, check_line_fields,
    NUMBER_MAX_LENGTH, DESCRIPTION_MAX_LENGTH,
    CUSTOMER_ADDRESS_MAX_LENGTH, CUSTOMER_VAT_MAX_LENGTH,
)

TODAY = date(2026, 10, 19)


def _line(description="Consulting", quantity="1", unit_price="10"):
    return SimpleNamespace(
        description=description,
        quantity=Decimal(quantity),
        unit_price=Decimal(unit_price),
    )


def _update(**overrides):
    fields = {
        "number": "INV-001",
        "invoice_date": TODAY,
        "customer_name": "ACME",
        "customer_address": None,
        "customer_vat": None,
        "today": TODAY,
    }
    fields.update(overrides)
    return check_update_invoice(**fields)


# ─── check_create_invoice ───────────────────────────────────────

def test_valid_create_has_no_errors():
    assert check_create_invoice("INV-001", [_line()]) == {}


def test_create_requires_number():
    errors = check_create_invoice("", [_line()])
    assert errors == {"number": ["Invoice number is required."]}


def test_create_rejects_long_number():
    errors = check_create_invoice("X" * (NUMBER_MAX_LENGTH + 1), [_line()])
    assert "number" in errors


def test_create_accepts_number_at_max_length():
    assert check_create_invoice("X" * NUMBER_MAX_LENGTH, [_line()]) == {}


def test_create_requires_at_least_one_line():
    errors = check_create_invoice("INV-001", [])
    assert errors == {"lines": ["At least one invoice line is required."]}


def test_create_keys_line_errors_by_index():
    errors = check_create_invoice(
        "INV-001", [_line(), _line(quantity="0", unit_price="-1")],
    )
    assert errors == {
        "lines[1].quantity": ["Quantity must be greater than 0."],
        "lines[1].unitPrice": ["Unit price must be greater than or equal to 0."],
    }


# ─── check_update_invoice ───────────────────────────────────────

def test_valid_update_has_no_errors():
    assert _update() == {}


def test_update_requires_customer_name():
    assert _update(customer_name="  ") == {
        "customerName": ["Customer name is required."],
    }


def test_update_rejects_date_beyond_future_bound():
    errors = _update(invoice_date=TODAY + timedelta(days=31))
    assert errors == {
        "date": ["Invoice date cannot be more than 30 days in the future."],
    }


def test_update_accepts_date_at_future_bound():
    assert _update(invoice_date=TODAY + timedelta(days=30)) == {}


def test_update_accepts_past_dates():
    assert _update(invoice_date=date(2001, 1, 1)) == {}


def test_update_future_bound_is_configurable():
    errors = _update(invoice_date=TODAY + timedelta(days=8), max_future_days=7)
    assert "7 days" in errors["date"][0]


def test_update_checks_optional_field_lengths():
    errors = _update(
        customer_address="A" * (CUSTOMER_ADDRESS_MAX_LENGTH + 1),
        customer_vat="V" * (CUSTOMER_VAT_MAX_LENGTH + 1),
    )
    assert set(errors) == {"customerAddress", "customerVat"}


def test_update_reports_every_failing_field():
    errors = _update(number="", customer_name="")
    assert set(errors) == {"number", "customerName"}


# ─── check_line_fields ──────────────────────────────────────────

def test_valid_line_has_no_errors():
    assert check_line_fields(_line()) == {}


def test_line_requires_description():
    assert check_line_fields(_line(description="")) == {
        "description": ["Description is required."],
    }


def test_line_rejects_long_description():
    errors = check_line_fields(_line(description="D" * (DESCRIPTION_MAX_LENGTH + 1)))
    assert "description" in errors


def test_line_rejects_zero_quantity_and_negative_price():
    errors = check_line_fields(_line(quantity="0", unit_price="-5"))
    assert errors == {
        "quantity": ["Quantity must be greater than 0."],
        "unitPrice": ["Unit price must be greater than or equal to 0."],
    }


def test_line_rejects_quantity_finer_than_four_decimals():
    errors = check_line_fields(_line(quantity="0.00001"))
    assert errors == {
        "quantity": ["Quantity cannot have more than 4 decimal places."],
    }


def test_line_accepts_four_decimals_and_trailing_zeros():
    assert check_line_fields(_line(quantity="0.0001", unit_price="1.500000")) == {}


def test_line_rejects_unit_price_finer_than_four_decimals():
    errors = check_line_fields(_line(unit_price="9.99999"))
    assert errors == {
        "unitPrice": ["Unit price cannot have more than 4 decimal places."],
    }


def test_line_rejects_more_than_fourteen_integer_digits():
    errors = check_line_fields(_line(quantity="1" + "0" * 14, unit_price="1" + "0" * 14))
    assert errors == {
        "quantity": ["Quantity cannot have more than 14 integer digits."],
        "unitPrice": ["Unit price cannot have more than 14 integer digits."],
    }


def test_line_accepts_largest_storable_amount():
    assert check_line_fields(_line(unit_price="99999999999999.9999")) == {}


def test_create_keys_precision_errors_by_index():
    errors = check_create_invoice("INV-001", [_line(), _line(unit_price="0.12345")])
    assert list(errors) == ["lines[1].unitPrice"]
