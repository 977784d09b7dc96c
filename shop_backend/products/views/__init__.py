from .category import CategoryViewSet
from .product import ProductViewSet
from .recommendations import TrendingProductsView

__all__ = [
    "CategoryViewSet",
    "ProductViewSet",
    "TrendingProductsView",
]
