# products/views/category.py

from __future__ import annotations

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework import viewsets
from rest_framework.response import Response

from backend.exceptions import ConflictError
from permissions.roles import IsAdminOrReadOnly
from products.models import Category
from products.serializers import CategorySerializer
from products.services.catalog_cache import CatalogCache, get_catalog_cache


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API

    Policy:
    - Anyone can READ categories (storefront navigation); reads are cached.
    - Only admins can CREATE/UPDATE/DELETE.
    - ?featured=true narrows the list to featured categories.
    """

    serializer_class = CategorySerializer
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = None

    def get_queryset(self):
        qs = Category.objects.all().order_by("name")
        if self._featured_only():
            qs = qs.filter(featured=True)
        return qs

    def get_catalog_cache(self) -> CatalogCache:
        return get_catalog_cache()

    def _featured_only(self) -> bool:
        return (self.request.query_params.get("featured") or "").lower() in {"1", "true", "yes"}

    def list(self, request, *args, **kwargs):
        cache = self.get_catalog_cache()
        scope = "featured" if self._featured_only() else "all"

        cached = cache.get_categories(scope)
        if cached is not None:
            return Response(cached)

        response = super().list(request, *args, **kwargs)
        cache.set_categories(scope, response.data)
        return response

    def retrieve(self, request, *args, **kwargs):
        cache = self.get_catalog_cache()
        category_id = kwargs.get("pk")

        cached = cache.get_category(category_id)
        if cached is not None:
            return Response(cached)

        response = super().retrieve(request, *args, **kwargs)
        cache.set_category(category_id, response.data)
        return response

    def _invalidate_after_commit(self, category_id) -> None:
        cache = self.get_catalog_cache()
        transaction.on_commit(lambda: cache.invalidate_categories(category_id))

    def perform_create(self, serializer):
        category = serializer.save()
        self._invalidate_after_commit(category.id)

    def perform_update(self, serializer):
        category = serializer.save()
        self._invalidate_after_commit(category.id)

    def perform_destroy(self, instance):
        category_id = instance.id
        try:
            instance.delete()
        except ProtectedError as exc:
            raise ConflictError("Category still has products") from exc
        self._invalidate_after_commit(category_id)
