# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public catalog browsing (list, detail, recommendations) with django-filter
  filtering and read-through caching.
- Admin-only create / update / delete.

Cache rules:
- Only storefront reads are cached (admins see inactive products too).
- Writes invalidate after commit: product key + listing version bump.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import ProtectedError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from backend.exceptions import ConflictError
from permissions.roles import IsAdminOrReadOnly, is_admin
from products.filters import ProductFilter
from products.models import Product
from products.serializers import ProductSerializer
from products.services.catalog_cache import CatalogCache, get_catalog_cache
from products.services.recommendations import DEFAULT_LIMIT, recommend_products

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    Public:
    - GET /api/products/?category=&min_price=&max_price=&in_stock=&on_sale=&featured=&is_new=&search=&ordering=
    - GET /api/products/{id}/
    - GET /api/products/{id}/recommendations/

    Admin:
    - POST / PUT / PATCH / DELETE
    """

    serializer_class = ProductSerializer
    permission_classes = [IsAdminOrReadOnly]
    filterset_class = ProductFilter

    def get_queryset(self):
        qs = Product.objects.select_related("category")
        if not is_admin(self.request.user):
            qs = qs.filter(is_active=True)
        return qs.order_by("-created_at")

    def get_catalog_cache(self) -> CatalogCache:
        return get_catalog_cache()

    def _use_cache(self) -> bool:
        return not is_admin(self.request.user)

    def _invalidate_after_commit(self, product_ids) -> None:
        cache = self.get_catalog_cache()
        ids = [str(pid) for pid in product_ids]
        transaction.on_commit(lambda: cache.invalidate_products(ids))

    # -----------------------------
    # Cached reads
    # -----------------------------
    def list(self, request, *args, **kwargs):
        if not self._use_cache():
            return super().list(request, *args, **kwargs)

        cache = self.get_catalog_cache()
        params = dict(request.query_params.lists())

        cached = cache.get_listing(params)
        if cached is not None:
            return Response(cached)

        response = super().list(request, *args, **kwargs)
        cache.set_listing(params, response.data)
        return response

    def retrieve(self, request, *args, **kwargs):
        if not self._use_cache():
            return super().retrieve(request, *args, **kwargs)

        cache = self.get_catalog_cache()
        product_id = kwargs.get(self.lookup_url_kwarg or self.lookup_field)

        cached = cache.get_product(product_id)
        if cached is not None:
            return Response(cached)

        response = super().retrieve(request, *args, **kwargs)
        cache.set_product(product_id, response.data)
        return response

    # -----------------------------
    # Admin writes
    # -----------------------------
    def perform_create(self, serializer):
        product = serializer.save()
        logger.info("Product created", extra={"product_id": str(product.id)})
        self._invalidate_after_commit([product.id])

    def perform_update(self, serializer):
        product = serializer.save()
        self._invalidate_after_commit([product.id])

    def perform_destroy(self, instance):
        product_id = instance.id
        try:
            instance.delete()
        except ProtectedError as exc:
            raise ConflictError(
                "Product is referenced by existing orders; deactivate it instead"
            ) from exc
        self._invalidate_after_commit([product_id])

    # -----------------------------
    # Recommendations (public)
    # -----------------------------
    @extend_schema(
        responses={200: OpenApiResponse(response=ProductSerializer(many=True))},
        description="Same-category in-stock products, topped up with featured products.",
    )
    @action(detail=True, methods=["get"], permission_classes=[AllowAny])
    def recommendations(self, request, pk=None):
        product = self.get_object()
        cache = self.get_catalog_cache()

        cached = cache.get_recommendations(product.id)
        if cached is not None:
            return Response(cached)

        products = recommend_products(product=product, limit=DEFAULT_LIMIT)
        data = ProductSerializer(products, many=True, context=self.get_serializer_context()).data
        cache.set_recommendations(product.id, data)
        return Response(data)
