# orders/services/pricing.py

"""
PRICING CALCULATOR (PURE)

Purpose:
- Compute effective unit prices and order totals from plain values.
- No database, cache or settings access inside the arithmetic.

Rules:
- effective = price x (1 - discount/100) when on_sale and discount > 0, else price
- subtotal  = sum(effective x quantity)
- shipping  = 0 when subtotal >= free shipping threshold, else standard cost
- tax       = (subtotal + shipping) x tax rate
- total     = subtotal + shipping + tax

Values are carried at full Decimal precision. `OrderQuote.rounded()` gives the
persisted form: each part rounded half-up to cents, total summed from the
rounded parts so stored rows always add up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from django.conf import settings

from backend.money import effective_unit_price, money


def _to_decimal(value, default: Decimal) -> Decimal:
    if value is None or value == "":
        return default
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid decimal value: {value!r}") from exc


# ======================================================
# CONFIG
# ======================================================

@dataclass(frozen=True)
class PricingConfig:
    tax_rate: Decimal = Decimal("0.08")
    free_shipping_threshold: Decimal = Decimal("100")
    standard_shipping_cost: Decimal = Decimal("10")

    def __post_init__(self):
        if self.tax_rate < 0:
            raise ValueError("tax_rate cannot be negative")
        if self.free_shipping_threshold < 0:
            raise ValueError("free_shipping_threshold cannot be negative")
        if self.standard_shipping_cost < 0:
            raise ValueError("standard_shipping_cost cannot be negative")

    @classmethod
    def from_settings(cls) -> "PricingConfig":
        """
        Build from settings.PRICING (string values, env-configurable).
        Missing keys fall back to the defaults above.
        """
        raw = getattr(settings, "PRICING", None) or {}
        defaults = cls()
        return cls(
            tax_rate=_to_decimal(raw.get("TAX_RATE"), defaults.tax_rate),
            free_shipping_threshold=_to_decimal(
                raw.get("FREE_SHIPPING_THRESHOLD"), defaults.free_shipping_threshold
            ),
            standard_shipping_cost=_to_decimal(
                raw.get("STANDARD_SHIPPING_COST"), defaults.standard_shipping_cost
            ),
        )


# ======================================================
# LINE PRICING
# ======================================================

@dataclass(frozen=True)
class PriceLine:
    unit_price: Decimal
    quantity: int
    discount_percent: Optional[int] = None
    on_sale: bool = False

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be a whole integer")
        if self.quantity <= 0:
            raise ValueError("quantity must be positive")

    @property
    def effective_price(self) -> Decimal:
        return effective_unit_price(
            unit_price=self.unit_price,
            discount_percent=self.discount_percent,
            on_sale=self.on_sale,
        )

    @property
    def line_total(self) -> Decimal:
        return self.effective_price * self.quantity


@dataclass(frozen=True)
class OrderQuote:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    effective_prices: tuple = field(default_factory=tuple)

    def rounded(self) -> "OrderQuote":
        subtotal = money(self.subtotal)
        shipping = money(self.shipping)
        tax = money(self.tax)
        return OrderQuote(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
            effective_prices=tuple(money(p) for p in self.effective_prices),
        )


def calculate_order_totals(lines: Iterable[PriceLine], config: Optional[PricingConfig] = None) -> OrderQuote:
    config = config or PricingConfig()
    lines = list(lines)

    effective_prices = tuple(line.effective_price for line in lines)
    subtotal = sum(
        (price * line.quantity for price, line in zip(effective_prices, lines)),
        Decimal("0"),
    )

    if subtotal >= config.free_shipping_threshold:
        shipping = Decimal("0")
    else:
        shipping = config.standard_shipping_cost

    tax = (subtotal + shipping) * config.tax_rate

    return OrderQuote(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
        effective_prices=effective_prices,
    )
