# orders/models/order.py

"""
ORDER (FINANCIAL SNAPSHOT + WORKFLOW STATUS)

Rules:
- Money fields are computed server-side at creation and never change.
- total == subtotal + shipping + tax on every stored row.
- subtotal == sum(item.price x item.quantity): lines are priced at cent-rounded
  unit prices.
- After creation only `status`, `stock_restored_at` and `updated_at` may change.
- `stock_restored_at` is stamped the one time a cancellation returns units
  to stock; it is never cleared.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PROCESSING = "PROCESSING", "Processing"
    SHIPPED = "SHIPPED", "Shipped"
    DELIVERED = "DELIVERED", "Delivered"
    CANCELLED = "CANCELLED", "Cancelled"


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping = models.DecimalField(max_digits=12, decimal_places=2)
    tax = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)

    shipping_address = models.JSONField(
        help_text="Snapshot: full_name, address, city, state, zip_code, country, phone (optional).",
    )

    status = models.CharField(
        max_length=16,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )

    payment_method = models.CharField(max_length=50)

    stock_restored_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
        ]

    _IMMUTABLE_FIELDS = (
        "user_id",
        "subtotal",
        "shipping",
        "tax",
        "total",
        "shipping_address",
        "payment_method",
        "created_at",
    )

    def __str__(self):
        return f"Order {self.id} | {self.status} | {self.total}"

    def clean(self):
        for field in ("subtotal", "shipping", "tax", "total"):
            value = getattr(self, field)
            if value is None or Decimal(value) < 0:
                raise ValidationError({field: f"{field} must be non-negative"})

        if Decimal(self.total) != Decimal(self.subtotal) + Decimal(self.shipping) + Decimal(self.tax):
            raise ValidationError({"total": "total must equal subtotal + shipping + tax"})

    def _validate_immutable(self, previous: "Order"):
        for field in self._IMMUTABLE_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValidationError(f"Order field '{field}' is immutable")

        if previous.stock_restored_at is not None and self.stock_restored_at != previous.stock_restored_at:
            raise ValidationError("Order stock restoration is recorded once and cannot change")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = Order.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)
        else:
            self.clean()

        super().save(*args, **kwargs)
