# products/services/recommendations.py

"""
PRODUCT RECOMMENDATIONS

Rules:
- Only active, in-stock products are ever recommended.
- Per product: same category first (featured, then best rated, then most
  reviewed). Fewer than `limit` -> top up with featured products from OTHER
  categories. The product itself is never recommended.
- Per category set (purchase history): products in those categories, topped
  up the same way. An empty set yields featured products only.
- Trending: most reviewed, then best rated, then newest.
"""

from __future__ import annotations

from typing import Iterable

from products.models import Product

DEFAULT_LIMIT = 8


def _available():
    return Product.objects.select_related("category").filter(is_active=True, stock__gt=0)


def _top_up_with_featured(picked: list, *, limit: int, exclude_categories, exclude_ids=()) -> list:
    if len(picked) >= limit:
        return picked

    featured = list(
        _available()
        .filter(featured=True)
        .exclude(category_id__in=list(exclude_categories))
        .exclude(id__in=[*exclude_ids, *(p.id for p in picked)])
        .order_by("-rating", "-reviews_count", "-created_at")[: limit - len(picked)]
    )
    return picked + featured


def recommend_products(*, product: Product, limit: int = DEFAULT_LIMIT) -> list:
    if limit <= 0:
        return []

    same_category = list(
        _available()
        .filter(category_id=product.category_id)
        .exclude(id=product.id)
        .order_by("-featured", "-rating", "-reviews_count", "-created_at")[:limit]
    )

    return _top_up_with_featured(
        same_category,
        limit=limit,
        exclude_categories=[product.category_id],
        exclude_ids=[product.id],
    )


def recommend_for_categories(*, category_ids: Iterable, limit: int = DEFAULT_LIMIT) -> list:
    if limit <= 0:
        return []

    category_ids = list(category_ids)
    picked = []
    if category_ids:
        picked = list(
            _available()
            .filter(category_id__in=category_ids)
            .order_by("-featured", "-rating", "-reviews_count", "-created_at")[:limit]
        )

    return _top_up_with_featured(picked, limit=limit, exclude_categories=category_ids)


def trending_products(*, limit: int = DEFAULT_LIMIT) -> list:
    if limit <= 0:
        return []
    return list(_available().order_by("-reviews_count", "-rating", "-created_at")[:limit])
