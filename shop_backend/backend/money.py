# backend/money.py

"""
CURRENCY PRIMITIVES

Shared by catalog, cart and orders so no app reaches into another's
services for arithmetic.

- money(): quantize to cents, ROUND_HALF_UP
- effective_unit_price(): list price after an active sale discount
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

TWOPLACES = Decimal("0.01")
HUNDRED = Decimal("100")


def money(value) -> Decimal:
    """
    Quantize to 2dp using ROUND_HALF_UP.
    """
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def effective_unit_price(*, unit_price, discount_percent=None, on_sale: bool = False) -> Decimal:
    price = Decimal(str(unit_price))
    if price < 0:
        raise ValueError("unit_price cannot be negative")

    if not on_sale or not discount_percent:
        return price

    discount = Decimal(str(discount_percent))
    if discount < 0 or discount > HUNDRED:
        raise ValueError("discount_percent must be between 0 and 100")

    return price * (Decimal("1") - discount / HUNDRED)
