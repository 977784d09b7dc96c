# backend/urls.py
"""
URL ROOT

Everything lives under /api/:
- catalog, review and trending reads are public; cart, wishlist, orders
  and personal recommendations need a Bearer JWT
- catalog writes and order status changes are admin only

The Django admin mounts at ADMIN_PATH (pick a non-obvious value in production).
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from backend.views import api_root, health_check
from orders.views import UserRecommendationsView

ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/").rstrip("/") + "/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("auth/", include("users.urls")),
    # reviews nest under /products/{id}/ and must precede the catalog router
    path("", include("reviews.urls")),
    # products + categories share one router
    path("", include("products.urls")),
    path("recommendations/user/", UserRecommendationsView.as_view(), name="recommendations-user"),
    path("cart/", include("cart.urls")),
    path("wishlist/", include("wishlist.urls")),
    path("orders/", include("orders.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
