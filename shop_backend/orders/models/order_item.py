# orders/models/order_item.py

"""
ORDER ITEM (IMMUTABLE SNAPSHOT)

- price is the effective unit price at order time; later product price or
  discount changes never touch it.
- Rows are append-only: any save() on an existing row raises.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product

from .order import Order


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    quantity = models.PositiveIntegerField()

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Effective unit price at order time (snapshot).",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "product"],
                name="unique_product_per_order",
            )
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_id} @ {self.price}"

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero"})

        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError({"price": "Price cannot be negative"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("OrderItem records are immutable")

        self.clean()
        super().save(*args, **kwargs)
