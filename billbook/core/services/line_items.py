"""
Line item validation.

Layer-pure helpers used by every path that writes invoice items. Inputs may
arrive as JSON numbers or numeric strings; anything that is not a number
is rejected with a message naming the product.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from billbook.core.entities.invoice import InvoiceItem
from billbook.core.exceptions import ValidationError


@dataclass
class RequestedLineItem:
    """One product + quantity + rate entry as supplied by the caller."""

    product_name: str
    quantity: Any
    rate: Any


def _to_number(value: Any) -> float | None:
    """Coerce a JSON-ish value to a float, or None if it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(Decimal(text))
        except InvalidOperation:
            return None
    return None


def parse_quantity(value: Any, product_name: str) -> int:
    """Quantity must be a positive whole number."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value > 0:
            return value
        number: float | None = None
    else:
        number = _to_number(value)
    if (
        number is None
        or not math.isfinite(number)
        or not number.is_integer()
        or number <= 0
    ):
        raise ValidationError(
            f"Invalid quantity for {product_name}", field="quantity", value=value
        )
    return int(number)


def parse_rate(value: Any, product_name: str) -> float:
    """Rate must be a finite, non-negative number."""
    number = _to_number(value)
    if number is None or not math.isfinite(number) or number < 0:
        raise ValidationError(
            f"Invalid rate for {product_name}", field="rate", value=value
        )
    return number


def validate_line(item: RequestedLineItem) -> tuple[int, float]:
    """Validate quantity then rate, in that order."""
    if not item.product_name or not item.product_name.strip():
        raise ValidationError("Product name is required", field="product_name")
    quantity = parse_quantity(item.quantity, item.product_name)
    rate = parse_rate(item.rate, item.product_name)
    # A finite rate can still overflow once multiplied out
    try:
        amount = quantity * rate
    except OverflowError:
        amount = math.inf
    if not math.isfinite(amount):
        raise ValidationError(
            f"Invalid rate for {item.product_name}", field="rate", value=item.rate
        )
    return quantity, rate


def checked_total(items: list[InvoiceItem]) -> float:
    """Sum of item amounts; rejects a total that does not fit in a float."""
    total = 0.0
    for item in items:
        total += item.amount
        if not math.isfinite(total):
            raise ValidationError(
                f"Invalid rate for {item.product_name}", field="rate", value=item.rate
            )
    return total


def build_items(
    requested: list[RequestedLineItem],
    product_ids: dict[str, int] | None = None,
) -> list[InvoiceItem]:
    """Validate every line and build item snapshots (no stock involved)."""
    if not requested:
        raise ValidationError("Invoice items are required", field="items")
    product_ids = product_ids or {}
    items = []
    for line in requested:
        quantity, rate = validate_line(line)
        items.append(
            InvoiceItem(
                product_id=product_ids.get(line.product_name),
                product_name=line.product_name,
                quantity=quantity,
                rate=rate,
            )
        )
    return items
