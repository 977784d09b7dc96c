# orders/services/order_service.py

"""
ORDER SERVICE (CART -> ORDER TRANSACTION)

Purpose:
- Turn the user's cart into an immutable Order in ONE database transaction.
- Read-side helpers for the caller's order history.

create_order steps (all inside transaction.atomic):
1) lock the cart row, load its lines
2) reject an empty cart
3) lock product rows (ordered by id) and validate stock for EVERY line
   before any write
4) round each effective unit price to cents, then price the lines with the
   pure calculator so subtotal == sum(item price x quantity) on the stored rows
5) create Order (PENDING) + OrderItems (effective price snapshot)
6) decrement stock with guarded UPDATEs (a lost race rolls everything back)
7) delete the cart lines
After commit: catalog cache entries of the touched products are invalidated.

Hard rules:
- Money is server-owned; clients never send prices or totals.
- Stock decisions never read the cache.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from django.db import transaction

from backend.money import money
from cart.models import Cart
from orders.models import Order, OrderItem, OrderStatus
from orders.services.exceptions import EmptyCartError, OrderNotFoundError
from orders.services.pricing import PriceLine, PricingConfig, calculate_order_totals
from products.services.catalog_cache import CatalogCache, get_catalog_cache
from products.services.inventory import (
    InsufficientStockError,
    decrement_stock,
    ensure_available,
    lock_products,
)

logger = logging.getLogger(__name__)


def parse_order_id(order_id) -> uuid.UUID:
    """
    Malformed ids are treated like unknown ones.
    """
    try:
        return uuid.UUID(str(order_id))
    except ValueError:
        raise OrderNotFoundError(order_id) from None


def _with_items(qs):
    return qs.prefetch_related("items__product")


@transaction.atomic
def create_order(
    *,
    user,
    shipping_address: dict,
    payment_method: str,
    pricing: Optional[PricingConfig] = None,
    catalog_cache: Optional[CatalogCache] = None,
) -> Order:
    pricing = pricing or PricingConfig.from_settings()

    # --------------------------------------------------
    # 1-2) CART SNAPSHOT
    # --------------------------------------------------
    cart = Cart.objects.select_for_update().filter(user=user).first()
    cart_items = list(cart.items.order_by("product_id")) if cart else []

    if not cart_items:
        raise EmptyCartError()

    # --------------------------------------------------
    # 3) LOCK + VALIDATE ALL LINES BEFORE ANY WRITE
    # --------------------------------------------------
    products = lock_products(item.product_id for item in cart_items)

    lines = []
    for item in cart_items:
        product = products[str(item.product_id)]

        if not product.is_active:
            raise InsufficientStockError(
                product_name=product.name,
                available=0,
                requested=item.quantity,
            )

        ensure_available(product=product, quantity=item.quantity)
        lines.append((item, product))

    # --------------------------------------------------
    # 4) PRICING
    # --------------------------------------------------
    # Customers are charged the unit price they see on each line.
    quote = calculate_order_totals(
        (
            PriceLine(unit_price=money(product.effective_price), quantity=item.quantity)
            for item, product in lines
        ),
        pricing,
    ).rounded()

    # --------------------------------------------------
    # 5) ORDER + ITEMS
    # --------------------------------------------------
    order = Order.objects.create(
        user=user,
        subtotal=quote.subtotal,
        shipping=quote.shipping,
        tax=quote.tax,
        total=quote.total,
        shipping_address=dict(shipping_address),
        payment_method=payment_method,
        status=OrderStatus.PENDING,
    )

    for (item, product), unit_price in zip(lines, quote.effective_prices):
        OrderItem.objects.create(
            order=order,
            product=product,
            quantity=item.quantity,
            price=unit_price,  # 🔒 PRICE SNAPSHOT
        )

    # --------------------------------------------------
    # 6) STOCK (single exit point)
    # --------------------------------------------------
    for item, product in lines:
        decrement_stock(product=product, quantity=item.quantity)

    # --------------------------------------------------
    # 7) CLEAR CART
    # --------------------------------------------------
    cart.items.all().delete()

    product_ids = [str(product.id) for _, product in lines]
    cache = catalog_cache or get_catalog_cache()
    transaction.on_commit(lambda: cache.invalidate_products(product_ids))

    logger.info(
        "Order created",
        extra={
            "order_id": str(order.id),
            "user_id": str(user.id),
            "total": str(order.total),
            "items": len(lines),
        },
    )

    return _with_items(Order.objects).get(id=order.id)


# ============================================================
# READS
# ============================================================

def list_user_orders(*, user):
    return _with_items(Order.objects.filter(user=user)).order_by("-created_at")


def get_user_order(*, user, order_id) -> Order:
    order_id = parse_order_id(order_id)
    order = _with_items(Order.objects.filter(user=user, id=order_id)).first()
    if order is None:
        raise OrderNotFoundError(order_id)
    return order
