# backend/views.py

"""
Platform endpoints (public, no auth):
- GET /api/          index of the API
- GET /api/health/   database and cache check for load balancers

Health semantics:
- database down -> 503 (nothing works without it)
- cache down    -> 200 "degraded" (catalog reads fall back to the database)
"""

from __future__ import annotations

import logging

from django.core.cache import caches
from django.db import DatabaseError, connections
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)

HEALTH_CHECK_KEY = "health:check"

API_INDEX = {
    "auth": {
        "register": "/api/auth/register/",
        "login": "/api/auth/login/",
        "me": "/api/auth/me/",
        "change_password": "/api/auth/me/password/",
        "jwt_create": "/api/auth/jwt/create/",
        "jwt_refresh": "/api/auth/jwt/refresh/",
    },
    "docs": {
        "swagger": "/api/docs/",
        "schema": "/api/schema/",
    },
    "modules": {
        "products": "/api/products/",
        "categories": "/api/categories/",
        "cart": "/api/cart/",
        "orders": "/api/orders/",
        "wishlist": "/api/wishlist/",
        "reviews": "/api/products/{id}/reviews/",
        "trending": "/api/recommendations/trending/",
        "recommendations": "/api/recommendations/user/",
    },
}

HealthSerializer = inline_serializer(
    name="Health",
    fields={
        "status": serializers.CharField(),
        "db": serializers.CharField(),
        "cache": serializers.CharField(),
    },
)


@extend_schema(responses={200: OpenApiTypes.OBJECT})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response({"message": "Home Decor Storefront API is running", **API_INDEX})


def _database_ok() -> bool:
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check: database unavailable")
        return False
    return True


def _cache_ok() -> bool:
    backend = caches["default"]
    try:
        backend.set(HEALTH_CHECK_KEY, 1, 5)
        return backend.get(HEALTH_CHECK_KEY) == 1
    except Exception:
        logger.warning("Health check: cache unavailable", exc_info=True)
        return False


@extend_schema(responses={200: HealthSerializer, 503: HealthSerializer})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    db_ok = _database_ok()
    cache_ok = _cache_ok()

    body = {
        "status": "ok" if db_ok and cache_ok else "degraded",
        "db": "ok" if db_ok else "down",
        "cache": "ok" if cache_ok else "down",
    }
    return Response(body, status=200 if db_ok else 503)
