from .wishlist import Wishlist, WishlistItem

__all__ = [
    "Wishlist",
    "WishlistItem",
]
