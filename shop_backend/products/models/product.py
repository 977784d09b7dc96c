# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.text import slugify

from backend.money import effective_unit_price

from .category import Category


class Product(models.Model):
    """
    Represents a sellable catalog item.

    STOCK MODEL (IMPORTANT):
    - `stock` is the single source of truth for availability.
    - Orders change it ONLY through products.services.inventory
      (guarded conditional UPDATE), never via save().

    RATING:
    - `rating` and `reviews_count` are derived from reviews and never
      written through the catalog API.

    PRICING:
    - `price` is the list price.
    - `discount` (percent, 0-100) applies only while `on_sale` is set.
    - `effective_price` is what a customer pays per unit right now.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=280, unique=True, blank=True)
    description = models.TextField(blank=True)

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField(default=0)

    on_sale = models.BooleanField(default=False)
    discount = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        help_text="Percent off the list price while on_sale is set.",
    )

    featured = models.BooleanField(default=False)
    is_new = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("0.0"),
        validators=[MinValueValidator(Decimal("0.0")), MaxValueValidator(Decimal("5.0"))],
        help_text="Average review rating, maintained by reviews.services.",
    )
    reviews_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "is_active"], name="product_category_active_idx"),
            models.Index(fields=["featured", "is_active"], name="product_featured_active_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def effective_price(self) -> Decimal:
        return effective_unit_price(
            unit_price=self.price,
            discount_percent=self.discount,
            on_sale=self.on_sale,
        )

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def clean(self):
        if self.price is None or Decimal(self.price) <= 0:
            raise ValidationError({"price": "Price must be greater than zero"})

        if self.discount is None or not 0 <= int(self.discount) <= 100:
            raise ValidationError({"discount": "Discount must be between 0 and 100"})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = f"{slugify(self.name)[:240]}-{str(self.id)[:8]}"
        self.full_clean()
        super().save(*args, **kwargs)
