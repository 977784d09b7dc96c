# cart/urls.py

from django.urls import path

from cart.views import CartItemDetailView, CartItemsView, CartView

app_name = "cart"

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("items/<uuid:product_id>/", CartItemDetailView.as_view(), name="cart-item-detail"),
]
