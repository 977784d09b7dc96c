# products/serializers/__init__.py

from .category import CategorySerializer
from .product import ProductSerializer, ProductSummarySerializer

__all__ = [
    "CategorySerializer",
    "ProductSerializer",
    "ProductSummarySerializer",
]
