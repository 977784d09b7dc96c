# reviews/services/review_service.py

"""
REVIEW SERVICE

Rules:
- Only active products can be reviewed or have their reviews listed.
- One review per user per product: a second attempt is a 409.
- Product.rating (average, 1 decimal, half-up) and Product.reviews_count
  are recomputed in the same transaction as every review write, under the
  product row lock, so concurrent reviews never lose an update.
- Catalog cache entries for the product are invalidated after commit.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, F, Sum

from backend.exceptions import ConflictError, DomainError, NotFoundError
from products.models import Product
from products.services.catalog_cache import CatalogCache, get_catalog_cache
from products.services.inventory import get_active_product, lock_products
from reviews.models import MAX_RATING, MIN_RATING, Review

logger = logging.getLogger(__name__)

RATING_STEP = Decimal("0.1")


# ============================================================
# DOMAIN ERRORS
# ============================================================

class ReviewRatingError(DomainError):
    code = "INVALID_RATING"


class DuplicateReviewError(ConflictError):
    def __init__(self):
        super().__init__("You have already reviewed this product")


class ReviewNotFoundError(NotFoundError):
    def __init__(self, review_id=None):
        super().__init__("Review not found", details={"review_id": str(review_id)} if review_id else None)


def _validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ReviewRatingError("Rating must be a whole number")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ReviewRatingError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


# ============================================================
# READS
# ============================================================

def list_product_reviews(*, product_id):
    """
    Most helpful first, then newest.
    """
    product = get_active_product(product_id)
    return (
        Review.objects.filter(product=product)
        .select_related("user")
        .order_by("-helpful", "-created_at")
    )


def get_user_review(*, user, product_id) -> Review:
    product = get_active_product(product_id)
    review = Review.objects.select_related("user").filter(user=user, product=product).first()
    if review is None:
        raise ReviewNotFoundError()
    return review


# ============================================================
# RATING AGGREGATE
# ============================================================

def average_rating(*, total, count) -> Decimal:
    if not count:
        return Decimal("0.0")
    return (Decimal(total) / Decimal(count)).quantize(RATING_STEP, rounding=ROUND_HALF_UP)


def refresh_product_rating(*, product_id) -> tuple:
    """
    Recompute rating + reviews_count from the review rows.

    Callers hold the product row lock (lock_products) inside their transaction.
    """
    stats = Review.objects.filter(product_id=product_id).aggregate(
        total=Sum("rating"),
        count=Count("id"),
    )
    count = stats["count"] or 0
    rating = average_rating(total=stats["total"] or 0, count=count)

    Product.objects.filter(id=product_id).update(rating=rating, reviews_count=count)
    return rating, count


def _invalidate_after_commit(product_id, catalog_cache: Optional[CatalogCache]) -> None:
    cache = catalog_cache or get_catalog_cache()
    ids = [str(product_id)]
    transaction.on_commit(lambda: cache.invalidate_products(ids))


# ============================================================
# WRITES
# ============================================================

@transaction.atomic
def create_review(
    *,
    user,
    product_id,
    rating: int,
    title: str,
    comment: str,
    catalog_cache: Optional[CatalogCache] = None,
) -> Review:
    rating = _validate_rating(rating)
    product = get_active_product(product_id)
    lock_products([product.id])

    if Review.objects.filter(user=user, product=product).exists():
        raise DuplicateReviewError()

    try:
        with transaction.atomic():
            review = Review.objects.create(
                product=product,
                user=user,
                rating=rating,
                title=title,
                comment=comment,
            )
    except IntegrityError as exc:
        raise DuplicateReviewError() from exc

    rating_now, count = refresh_product_rating(product_id=product.id)
    _invalidate_after_commit(product.id, catalog_cache)

    logger.info(
        "Review created",
        extra={
            "review_id": str(review.id),
            "product_id": str(product.id),
            "rating": rating,
            "product_rating": str(rating_now),
            "reviews_count": count,
        },
    )
    return review


@transaction.atomic
def delete_review(*, review: Review, catalog_cache: Optional[CatalogCache] = None) -> None:
    product_id = review.product_id
    lock_products([product_id])
    review.delete()
    refresh_product_rating(product_id=product_id)
    _invalidate_after_commit(product_id, catalog_cache)


@transaction.atomic
def mark_review_helpful(*, review_id) -> Review:
    updated = Review.objects.filter(id=review_id).update(helpful=F("helpful") + 1)
    if not updated:
        raise ReviewNotFoundError(review_id)
    return Review.objects.select_related("user").get(id=review_id)
