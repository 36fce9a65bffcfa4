"""Money arithmetic for carts and orders.

Amounts are persisted as floats but every calculation happens in ``Decimal``
and is rounded half-up to cents.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

TAX_RATE = Decimal("0.10")
CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal


def calculate_totals(lines: Iterable[tuple[float, int]], shipping_cost=None) -> OrderTotals:
    """Price a set of ``(unit_price, quantity)`` lines.

    Tax is a flat 10% of the subtotal; shipping is added on top untaxed and
    defaults to zero.
    """
    subtotal = sum((to_money(price) * quantity for price, quantity in lines), Decimal("0.00"))
    tax = (subtotal * TAX_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)
    shipping = to_money(shipping_cost)
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping,
        total=subtotal + tax + shipping,
    )
