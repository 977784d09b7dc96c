# orders/services/order_lifecycle.py

"""
ORDER STATUS WORKFLOW

Rules:
- Status must be one of OrderStatus.
- Default mode is permissive: any status may move to any other (the admin
  dashboard relies on this to correct mistakes).
- Strict mode (settings.ORDERS["STRICT_STATUS_TRANSITIONS"]) enforces
  ALLOWED_TRANSITIONS below.
- Moving INTO CANCELLED from another status returns every item's quantity to
  stock, once per order (guarded by Order.stock_restored_at).
- Same-status updates are accepted and change nothing.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from orders.models import Order, OrderStatus
from orders.services.exceptions import (
    InvalidStatusError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
)
from orders.services.order_service import parse_order_id
from products.services.catalog_cache import get_catalog_cache
from products.services.inventory import restore_stock

logger = logging.getLogger(__name__)


# ============================================================
# STATE DEFINITIONS (strict mode)
# ============================================================

TERMINAL_STATES = {
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
}

ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
}


# ============================================================
# DOMAIN RULES
# ============================================================

def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatusError(value) from None


def strict_transitions_enabled() -> bool:
    return bool((getattr(settings, "ORDERS", None) or {}).get("STRICT_STATUS_TRANSITIONS", False))


def can_transition(*, from_status: str, to_status: str, strict: bool = True) -> bool:
    if from_status == to_status:
        return True

    if not strict:
        return True

    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str, strict: bool) -> None:
    if not can_transition(from_status=order.status, to_status=target_status, strict=strict):
        raise InvalidStatusTransitionError(from_status=order.status, to_status=target_status)


# ============================================================
# WORKFLOW
# ============================================================

def _restock_cancelled_order(order: Order) -> list:
    """
    Return every item's quantity to stock. Caller holds the order row lock.
    """
    product_ids = []
    for item in order.items.all().order_by("product_id"):
        restore_stock(product_id=item.product_id, quantity=item.quantity)
        product_ids.append(str(item.product_id))

    order.stock_restored_at = timezone.now()
    logger.info(
        "Cancelled order restocked",
        extra={"order_id": str(order.id), "product_ids": product_ids},
    )
    return product_ids


@transaction.atomic
def update_order_status(*, order_id, new_status, strict: Optional[bool] = None) -> Order:
    target = parse_status(new_status)
    strict = strict_transitions_enabled() if strict is None else strict

    order = Order.objects.select_for_update().filter(id=parse_order_id(order_id)).first()
    if order is None:
        raise OrderNotFoundError(order_id)

    previous_status = order.status
    validate_transition(order=order, target_status=target, strict=strict)

    if previous_status == target:
        return order

    restocked = []
    if (
        target == OrderStatus.CANCELLED
        and previous_status != OrderStatus.CANCELLED
        and order.stock_restored_at is None
    ):
        restocked = _restock_cancelled_order(order)

    order.status = target
    order.save(update_fields=["status", "stock_restored_at", "updated_at"])

    if restocked:
        cache = get_catalog_cache()
        transaction.on_commit(lambda: cache.invalidate_products(restocked))

    logger.info(
        "Order status updated",
        extra={"order_id": str(order.id), "from": previous_status, "to": str(target)},
    )
    return order
