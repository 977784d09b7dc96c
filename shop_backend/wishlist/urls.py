# wishlist/urls.py

from django.urls import path

from wishlist.views import WishlistCheckView, WishlistItemView, WishlistView

app_name = "wishlist"

urlpatterns = [
    path("", WishlistView.as_view(), name="wishlist"),
    path("items/<uuid:product_id>/", WishlistItemView.as_view(), name="wishlist-item"),
    path("items/<uuid:product_id>/check/", WishlistCheckView.as_view(), name="wishlist-check"),
]
