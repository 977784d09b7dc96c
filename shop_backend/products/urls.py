# products/urls.py

"""
CATALOG URLS

Mounted at /api/:
- /api/products/...
- /api/categories/...
- /api/recommendations/trending/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import CategoryViewSet, ProductViewSet, TrendingProductsView

router = DefaultRouter()
router.include_root_view = False

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("recommendations/trending/", TrendingProductsView.as_view(), name="recommendations-trending"),
    path("", include(router.urls)),
]
