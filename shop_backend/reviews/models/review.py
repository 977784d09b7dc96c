# reviews/models/review.py

"""
PRODUCT REVIEW

Rules:
- One review per user per product (DB constraint).
- rating is a whole number in MIN_RATING..MAX_RATING.
- helpful only ever increments (F() update in the service).
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from products.models import Product

MIN_RATING = 1
MAX_RATING = 5


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="reviews",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reviews",
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
    )
    title = models.CharField(max_length=200)
    comment = models.TextField(max_length=2000)

    helpful = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-helpful", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "user"],
                name="unique_review_per_user_product",
            )
        ]
        indexes = [
            models.Index(fields=["product", "helpful", "created_at"], name="review_product_rank_idx"),
        ]

    def __str__(self):
        return f"{self.rating}/5 {self.product_id} by {self.user_id}"

    def clean(self):
        if self.rating is None or not MIN_RATING <= int(self.rating) <= MAX_RATING:
            raise ValidationError(
                {"rating": f"Rating must be between {MIN_RATING} and {MAX_RATING}"}
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
