# products/views/recommendations.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from products.serializers import ProductSerializer
from products.services.catalog_cache import get_catalog_cache
from products.services.recommendations import DEFAULT_LIMIT, trending_products


class TrendingProductsView(APIView):
    """
    GET /api/recommendations/trending/   most reviewed in-stock products (public, cached)
    """

    permission_classes = [AllowAny]
    serializer_class = ProductSerializer

    @extend_schema(responses={200: ProductSerializer(many=True)}, description="Trending products")
    def get(self, request):
        cache = get_catalog_cache()

        cached = cache.get_trending()
        if cached is not None:
            return Response(cached)

        data = ProductSerializer(
            trending_products(limit=DEFAULT_LIMIT),
            many=True,
            context={"request": request},
        ).data
        cache.set_trending(data)
        return Response(data)
