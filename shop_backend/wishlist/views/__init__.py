from .api import WishlistCheckView, WishlistItemView, WishlistView

__all__ = [
    "WishlistCheckView",
    "WishlistItemView",
    "WishlistView",
]
