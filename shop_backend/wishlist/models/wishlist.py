# wishlist/models/wishlist.py

"""
WISHLIST

- One wishlist per user, created lazily.
- A product appears at most once (DB constraint); items list newest first.
- Holds no quantities or prices: it is a bookmark list.
"""

import uuid

from django.conf import settings
from django.db import models

from products.models import Product


class Wishlist(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="wishlist",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Wishlist({self.user_id})"

    @property
    def item_count(self) -> int:
        return len(self.items.all())


class WishlistItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    wishlist = models.ForeignKey(
        Wishlist,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="wishlist_items",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["wishlist", "product"],
                name="unique_product_per_wishlist",
            )
        ]

    def __str__(self):
        return f"{self.product_id} in {self.wishlist_id}"
