# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Authenticated user's cart: read, clear, add/update/remove lines.

Hard rules:
- Money is server-owned: the cart shows live product prices; the order
  snapshots them at checkout.
- Every mutation answers with the full, fresh cart.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services.cart_service import (
    add_item,
    clear_cart,
    get_cart_with_items,
    remove_item,
    update_item,
)


def _cart_response(*, user, http_status=status.HTTP_200_OK):
    cart = get_cart_with_items(user=user)
    return Response(CartSerializer(cart).data, status=http_status)


class CartView(APIView):
    """
    GET    /api/cart/   current cart (created on first access)
    DELETE /api/cart/   remove every item
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(responses={200: CartSerializer}, description="Get the authenticated user's cart")
    def get(self, request):
        return _cart_response(user=request.user)

    @extend_schema(responses={200: CartSerializer}, description="Clear the cart")
    def delete(self, request):
        clear_cart(user=request.user)
        return _cart_response(user=request.user)


class CartItemsView(APIView):
    """
    POST /api/cart/items/   add a product (merges with an existing line)
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={201: CartSerializer},
        description="Add a product to the cart (max 10 per product, limited by stock)",
    )
    def post(self, request):
        ser = AddCartItemInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        add_item(
            user=request.user,
            product_id=ser.validated_data["product_id"],
            quantity=ser.validated_data["quantity"],
        )
        return _cart_response(user=request.user, http_status=status.HTTP_201_CREATED)


class CartItemDetailView(APIView):
    """
    PATCH  /api/cart/items/{product_id}/   set quantity
    DELETE /api/cart/items/{product_id}/   remove line
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Set the quantity of a cart line",
    )
    def patch(self, request, product_id):
        ser = UpdateCartItemInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        update_item(
            user=request.user,
            product_id=product_id,
            quantity=ser.validated_data["quantity"],
        )
        return _cart_response(user=request.user)

    @extend_schema(responses={200: CartSerializer}, description="Remove a product from the cart")
    def delete(self, request, product_id):
        remove_item(user=request.user, product_id=product_id)
        return _cart_response(user=request.user)
