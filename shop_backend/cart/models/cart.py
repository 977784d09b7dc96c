"""
PATH: cart/models/cart.py

CART MODEL

Purpose:
- One persistent cart per user (created lazily).
- Holds no money: totals are derived from live product prices.

Rules:
- Converted into an Order at checkout; its items are then deleted.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from backend.money import money


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Cart({self.user_id})"

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items.all())

    @property
    def subtotal(self) -> Decimal:
        """
        Live subtotal at current effective prices (display only).
        """
        return money(sum((item.line_total for item in self.items.all()), Decimal("0")))
