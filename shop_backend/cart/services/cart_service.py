# cart/services/cart_service.py

"""
CART SERVICE

Purpose:
- Single place for cart mutations (views stay thin).

Rules:
- Quantity per line is 1..10; adding an existing product merges quantities.
- Requested quantity (after merge) must not exceed current stock.
- Stock is only checked here, never reserved: checkout re-validates under lock.
"""

from __future__ import annotations

import logging

from django.db import transaction

from backend.exceptions import DomainError, NotFoundError
from cart.models import MAX_QUANTITY_PER_ITEM, Cart, CartItem
from products.services.inventory import ensure_available, get_active_product

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class CartQuantityError(DomainError):
    code = "INVALID_QUANTITY"


class CartItemNotFoundError(NotFoundError):
    def __init__(self, product_id=None):
        super().__init__("Item not found in cart", details={"product_id": str(product_id)} if product_id else None)


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise CartQuantityError("Quantity must be a whole number")
    if quantity <= 0:
        raise CartQuantityError("Quantity must be greater than 0")
    if quantity > MAX_QUANTITY_PER_ITEM:
        raise CartQuantityError(f"Maximum quantity per item is {MAX_QUANTITY_PER_ITEM}")
    return quantity


# ============================================================
# READS
# ============================================================

def get_or_create_cart(*, user) -> Cart:
    cart, _ = Cart.objects.get_or_create(user=user)
    return cart


def get_cart_with_items(*, user) -> Cart:
    cart = get_or_create_cart(user=user)
    return Cart.objects.prefetch_related("items__product__category").get(id=cart.id)


def _get_item(*, cart: Cart, product_id) -> CartItem:
    item = (
        CartItem.objects.select_for_update()
        .select_related("product")
        .filter(cart=cart, product_id=product_id)
        .first()
    )
    if item is None:
        raise CartItemNotFoundError(product_id)
    return item


# ============================================================
# WRITES
# ============================================================

@transaction.atomic
def add_item(*, user, product_id, quantity: int) -> CartItem:
    quantity = _validate_quantity(quantity)
    product = get_active_product(product_id)
    cart = get_or_create_cart(user=user)

    item = CartItem.objects.select_for_update().filter(cart=cart, product=product).first()
    new_quantity = (item.quantity if item else 0) + quantity

    if new_quantity > MAX_QUANTITY_PER_ITEM:
        raise CartQuantityError(f"Maximum quantity per item is {MAX_QUANTITY_PER_ITEM}")

    ensure_available(product=product, quantity=new_quantity)

    if item:
        item.quantity = new_quantity
        item.save(update_fields=["quantity", "updated_at"])
    else:
        item = CartItem.objects.create(cart=cart, product=product, quantity=new_quantity)

    logger.debug(
        "Cart item added",
        extra={"cart_id": str(cart.id), "product_id": str(product.id), "quantity": new_quantity},
    )
    return item


@transaction.atomic
def update_item(*, user, product_id, quantity: int) -> CartItem:
    quantity = _validate_quantity(quantity)
    cart = get_or_create_cart(user=user)
    item = _get_item(cart=cart, product_id=product_id)

    ensure_available(product=item.product, quantity=quantity)

    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    return item


@transaction.atomic
def remove_item(*, user, product_id) -> None:
    cart = get_or_create_cart(user=user)
    item = _get_item(cart=cart, product_id=product_id)
    item.delete()


@transaction.atomic
def clear_cart(*, user) -> int:
    cart = get_or_create_cart(user=user)
    deleted, _ = cart.items.all().delete()
    return deleted
