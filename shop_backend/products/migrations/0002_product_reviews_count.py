"""
======================================================
PATH: products/migrations/0002_product_reviews_count.py
======================================================
MIGRATION: ADD Product.reviews_count + rating help text (ratings come from reviews)
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("products", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="product",
            name="reviews_count",
            field=models.PositiveIntegerField(default=0),
        ),
        migrations.AlterField(
            model_name="product",
            name="rating",
            field=models.DecimalField(
                decimal_places=1,
                default=Decimal("0.0"),
                help_text="Average review rating, maintained by reviews.services.",
                max_digits=2,
                validators=[
                    django.core.validators.MinValueValidator(Decimal("0.0")),
                    django.core.validators.MaxValueValidator(Decimal("5.0")),
                ],
            ),
        ),
    ]
