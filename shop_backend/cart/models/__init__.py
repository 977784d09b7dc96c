from .cart import Cart
from .cart_item import MAX_QUANTITY_PER_ITEM, CartItem

__all__ = [
    "Cart",
    "CartItem",
    "MAX_QUANTITY_PER_ITEM",
]
