# wishlist/services/wishlist_service.py

"""
WISHLIST SERVICE

Rules:
- Only active products can be added; a product is listed at most once.
- Adding a product that is already listed is a 409, removing one that is
  not listed is a 404.
- The wishlist never touches stock.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from backend.exceptions import ConflictError, NotFoundError
from products.services.inventory import get_active_product
from wishlist.models import Wishlist, WishlistItem

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class DuplicateWishlistItemError(ConflictError):
    def __init__(self, product_id=None):
        super().__init__(
            "Product already in wishlist",
            details={"product_id": str(product_id)} if product_id else None,
        )


class WishlistItemNotFoundError(NotFoundError):
    def __init__(self, product_id=None):
        super().__init__(
            "Wishlist item not found",
            details={"product_id": str(product_id)} if product_id else None,
        )


# ============================================================
# READS
# ============================================================

def get_or_create_wishlist(*, user) -> Wishlist:
    wishlist, _ = Wishlist.objects.get_or_create(user=user)
    return wishlist


def get_wishlist_with_items(*, user) -> Wishlist:
    wishlist = get_or_create_wishlist(user=user)
    return Wishlist.objects.prefetch_related("items__product__category").get(id=wishlist.id)


def is_in_wishlist(*, user, product_id) -> bool:
    return WishlistItem.objects.filter(wishlist__user=user, product_id=product_id).exists()


# ============================================================
# WRITES
# ============================================================

@transaction.atomic
def add_item(*, user, product_id) -> WishlistItem:
    product = get_active_product(product_id)
    wishlist = get_or_create_wishlist(user=user)

    if WishlistItem.objects.filter(wishlist=wishlist, product=product).exists():
        raise DuplicateWishlistItemError(product.id)

    try:
        with transaction.atomic():
            item = WishlistItem.objects.create(wishlist=wishlist, product=product)
    except IntegrityError as exc:
        raise DuplicateWishlistItemError(product.id) from exc

    logger.debug(
        "Wishlist item added",
        extra={"wishlist_id": str(wishlist.id), "product_id": str(product.id)},
    )
    return WishlistItem.objects.select_related("product__category").get(id=item.id)


@transaction.atomic
def remove_item(*, user, product_id) -> None:
    deleted, _ = WishlistItem.objects.filter(wishlist__user=user, product_id=product_id).delete()
    if not deleted:
        raise WishlistItemNotFoundError(product_id)
