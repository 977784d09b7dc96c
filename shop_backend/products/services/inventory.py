# products/services/inventory.py

"""
STOCK PRIMITIVES

Purpose:
- The ONLY code paths that change Product.stock for orders.
- Decrement is a guarded conditional UPDATE (stock >= qty), so two concurrent
  buyers can never both take the last unit, even without row locks.
- Restore is an unconditional F() increment.

Callers own the transaction: these helpers never open one themselves.
"""

from __future__ import annotations

import logging
from typing import Iterable

from django.db.models import F

from backend.exceptions import DomainError, NotFoundError
from products.models import Product

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class InsufficientStockError(DomainError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, *, product_name: str, available: int, requested: int):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. Only {available} available.",
            details={
                "product": product_name,
                "available": available,
                "requested": requested,
            },
        )


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id=None):
        super().__init__("Product not found", details={"product_id": str(product_id)} if product_id else None)


# ============================================================
# READS
# ============================================================

def get_active_product(product_id) -> Product:
    product = Product.objects.filter(id=product_id, is_active=True).first()
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


def lock_products(product_ids: Iterable) -> dict:
    """
    Lock product rows (SELECT ... FOR UPDATE) in a stable id order.

    Consistent ordering keeps concurrent checkouts from deadlocking on
    overlapping carts. Must run inside transaction.atomic.
    """
    ids = sorted({str(pid) for pid in product_ids})
    rows = Product.objects.select_for_update().filter(id__in=ids).order_by("id")
    return {str(p.id): p for p in rows}


def ensure_available(*, product: Product, quantity: int) -> None:
    if product.stock < quantity:
        logger.info(
            "Stock shortfall",
            extra={
                "product_id": str(product.id),
                "available": product.stock,
                "requested": quantity,
            },
        )
        raise InsufficientStockError(
            product_name=product.name,
            available=product.stock,
            requested=quantity,
        )


# ============================================================
# WRITES
# ============================================================

def decrement_stock(*, product: Product, quantity: int) -> None:
    """
    stock := stock - quantity, only if stock >= quantity.

    A zero-row update means another transaction took the units first.
    """
    if quantity <= 0:
        raise ValueError("quantity must be positive")

    updated = Product.objects.filter(id=product.id, stock__gte=quantity).update(
        stock=F("stock") - quantity
    )

    if updated == 0:
        current = Product.objects.filter(id=product.id).values_list("stock", flat=True).first() or 0
        logger.warning(
            "Stock decrement lost a race",
            extra={
                "product_id": str(product.id),
                "available": current,
                "requested": quantity,
            },
        )
        raise InsufficientStockError(
            product_name=product.name,
            available=current,
            requested=quantity,
        )


def restore_stock(*, product_id, quantity: int) -> None:
    if quantity <= 0:
        raise ValueError("quantity must be positive")

    Product.objects.filter(id=product_id).update(stock=F("stock") + quantity)
