from .api import CartItemDetailView, CartItemsView, CartView

__all__ = [
    "CartView",
    "CartItemsView",
    "CartItemDetailView",
]
