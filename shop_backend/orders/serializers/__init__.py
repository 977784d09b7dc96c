# orders/serializers/__init__.py

from .input import CreateOrderInputSerializer, ShippingAddressSerializer, UpdateOrderStatusInputSerializer
from .order import OrderItemSerializer, OrderSerializer

__all__ = [
    "CreateOrderInputSerializer",
    "ShippingAddressSerializer",
    "UpdateOrderStatusInputSerializer",
    "OrderItemSerializer",
    "OrderSerializer",
]
