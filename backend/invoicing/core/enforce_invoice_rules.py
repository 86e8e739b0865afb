"""Invoice Rule Sets — caller-side field validation for every invoice use case.

Invariants:
    - Every check_* function is PURE: returns {field: [messages]}, empty dict == valid
    - Field keys use wire names (camelCase); line fields are keyed "lines[i].field"
    - Quantity and unit price must fit the stored precision (4 decimals, 14 integer
      digits): a value the database would round or reject never reaches the aggregate
    - Header constraints (customer name, lengths, future-date bound) live ONLY here;
      the aggregate never re-checks them
    - Messages are user-facing and stable (clients and tests match on them)

Design Decisions:
    - Rule sets separate from the aggregate: the aggregate only guards line invariants,
      header fields are trusted once these rules pass
    - today is a parameter, not date.today(): keeps the future-date rule deterministic
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Protocol, Sequence


NUMBER_MAX_LENGTH: int = 50
DESCRIPTION_MAX_LENGTH: int = 200
CUSTOMER_NAME_MAX_LENGTH: int = 200
CUSTOMER_ADDRESS_MAX_LENGTH: int = 500
CUSTOMER_VAT_MAX_LENGTH: int = 50
DEFAULT_MAX_FUTURE_DAYS: int = 30
# Amount columns are NUMERIC(18, 4)
AMOUNT_MAX_DECIMAL_PLACES: int = 4
AMOUNT_MAX_INTEGER_DIGITS: int = 14


class LineFieldsLike(Protocol):
    """Structural contract for anything carrying line fields (request schemas)."""
    description: str
    quantity: Decimal
    unit_price: Decimal


def _add(errors: dict[str, list[str]], field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _decimal_places(value: Decimal) -> int:
    """Significant decimal places; trailing zeros do not count (1.50000 -> 1)."""
    _, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int) or value == 0:
        return 0
    while exponent < 0 and digits and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    return max(0, -exponent)


# ─── Shared field rules ─────────────────────────────────────────

def _check_number(errors: dict[str, list[str]], number: str) -> None:
    if _is_blank(number):
        _add(errors, "number", "Invoice number is required.")
    elif len(number) > NUMBER_MAX_LENGTH:
        _add(
            errors, "number",
            f"Invoice number cannot exceed {NUMBER_MAX_LENGTH} characters.",
        )


def _check_amount(
    errors: dict[str, list[str]], field: str, label: str, value: Decimal,
) -> None:
    """Fit NUMERIC(18, 4): at most 4 decimal places and 14 integer digits."""
    if _decimal_places(value) > AMOUNT_MAX_DECIMAL_PLACES:
        _add(
            errors, field,
            f"{label} cannot have more than {AMOUNT_MAX_DECIMAL_PLACES} decimal places.",
        )
    if abs(value) >= Decimal(10) ** AMOUNT_MAX_INTEGER_DIGITS:
        _add(
            errors, field,
            f"{label} cannot have more than {AMOUNT_MAX_INTEGER_DIGITS} integer digits.",
        )


def _check_line(
    errors: dict[str, list[str]], line: LineFieldsLike, prefix: str = "",
) -> None:
    if _is_blank(line.description):
        _add(errors, f"{prefix}description", "Description is required.")
    elif len(line.description) > DESCRIPTION_MAX_LENGTH:
        _add(
            errors, f"{prefix}description",
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.",
        )
    if line.quantity <= 0:
        _add(errors, f"{prefix}quantity", "Quantity must be greater than 0.")
    _check_amount(errors, f"{prefix}quantity", "Quantity", line.quantity)
    if line.unit_price < 0:
        _add(
            errors, f"{prefix}unitPrice",
            "Unit price must be greater than or equal to 0.",
        )
    _check_amount(errors, f"{prefix}unitPrice", "Unit price", line.unit_price)


# ─── Use-case rule sets ─────────────────────────────────────────

def check_create_invoice(
    number: str, lines: Sequence[LineFieldsLike],
) -> dict[str, list[str]]:
    """Create: number, at least one line, every line valid."""
    errors: dict[str, list[str]] = {}
    _check_number(errors, number)
    if not lines:
        _add(errors, "lines", "At least one invoice line is required.")
    for index, line in enumerate(lines):
        _check_line(errors, line, prefix=f"lines[{index}].")
    return errors


def check_update_invoice(
    number: str,
    invoice_date: date,
    customer_name: str,
    customer_address: str | None,
    customer_vat: str | None,
    today: date,
    max_future_days: int = DEFAULT_MAX_FUTURE_DAYS,
) -> dict[str, list[str]]:
    """Header update: number, date bound, customer fields."""
    errors: dict[str, list[str]] = {}
    _check_number(errors, number)

    if invoice_date > today + timedelta(days=max_future_days):
        _add(
            errors, "date",
            f"Invoice date cannot be more than {max_future_days} days in the future.",
        )

    if _is_blank(customer_name):
        _add(errors, "customerName", "Customer name is required.")
    elif len(customer_name) > CUSTOMER_NAME_MAX_LENGTH:
        _add(
            errors, "customerName",
            f"Customer name cannot exceed {CUSTOMER_NAME_MAX_LENGTH} characters.",
        )

    # Optional fields: only length-checked when present
    if customer_address and len(customer_address) > CUSTOMER_ADDRESS_MAX_LENGTH:
        _add(
            errors, "customerAddress",
            f"Customer address cannot exceed {CUSTOMER_ADDRESS_MAX_LENGTH} characters.",
        )
    if customer_vat and len(customer_vat) > CUSTOMER_VAT_MAX_LENGTH:
        _add(
            errors, "customerVat",
            f"Customer VAT cannot exceed {CUSTOMER_VAT_MAX_LENGTH} characters.",
        )
    return errors


def check_line_fields(line: LineFieldsLike) -> dict[str, list[str]]:
    """Add line / update line: description, quantity, unit price."""
    errors: dict[str, list[str]] = {}
    _check_line(errors, line)
    return errors
