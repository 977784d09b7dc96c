# orders/services/recommendations.py

"""
PURCHASE-HISTORY RECOMMENDATIONS

Categories come from the items of the user's most recent non-cancelled
orders; ranking and the featured top-up are the catalog's rules
(products.services.recommendations).
"""

from __future__ import annotations

from orders.models import Order, OrderItem, OrderStatus
from products.services.recommendations import DEFAULT_LIMIT, recommend_for_categories

RECENT_ORDERS = 10


def purchased_category_ids(*, user, recent_orders: int = RECENT_ORDERS) -> set:
    order_ids = list(
        Order.objects.filter(user=user)
        .exclude(status=OrderStatus.CANCELLED)
        .order_by("-created_at")
        .values_list("id", flat=True)[:recent_orders]
    )
    return set(
        OrderItem.objects.filter(order_id__in=order_ids)
        .order_by()
        .values_list("product__category_id", flat=True)
    )


def recommend_for_user(*, user, limit: int = DEFAULT_LIMIT) -> list:
    return recommend_for_categories(category_ids=purchased_category_ids(user=user), limit=limit)
