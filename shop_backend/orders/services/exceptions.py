# orders/services/exceptions.py

"""
ORDER DOMAIN ERRORS

Rendered by backend.exceptions.api_exception_handler:
- EmptyCartError                 400 EMPTY_CART
- InsufficientStockError         400 INSUFFICIENT_STOCK
- InvalidStatusError             400 INVALID_STATUS
- InvalidStatusTransitionError   409 INVALID_STATUS_TRANSITION
- OrderNotFoundError             404 NOT_FOUND
"""

from rest_framework import status

from backend.exceptions import DomainError, NotFoundError
from orders.models import OrderStatus
from products.services.inventory import InsufficientStockError


class EmptyCartError(DomainError):
    code = "EMPTY_CART"

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class InvalidStatusError(DomainError):
    code = "INVALID_STATUS"

    def __init__(self, value):
        super().__init__(
            f"Invalid status. Must be one of: {', '.join(OrderStatus.values)}",
            details={"status": str(value)},
        )


class InvalidStatusTransitionError(DomainError):
    code = "INVALID_STATUS_TRANSITION"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, *, from_status: str, to_status: str):
        super().__init__(
            f"Order cannot move from {from_status} to {to_status}",
            details={"from": from_status, "to": to_status},
        )


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id=None):
        super().__init__("Order not found", details={"order_id": str(order_id)} if order_id else None)


__all__ = [
    "EmptyCartError",
    "InsufficientStockError",
    "InvalidStatusError",
    "InvalidStatusTransitionError",
    "OrderNotFoundError",
]
