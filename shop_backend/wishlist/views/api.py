# wishlist/views/api.py

"""
WISHLIST API (authenticated)

- GET    /api/wishlist/                              wishlist, newest first
- GET    /api/wishlist/items/{product_id}/check/     {"product_id", "in_wishlist"}
- POST   /api/wishlist/items/{product_id}/           add (201, 409 if present)
- DELETE /api/wishlist/items/{product_id}/           remove (204, 404 if absent)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from wishlist.serializers import (
    WishlistCheckSerializer,
    WishlistItemSerializer,
    WishlistSerializer,
)
from wishlist.services.wishlist_service import (
    add_item,
    get_wishlist_with_items,
    is_in_wishlist,
    remove_item,
)


class WishlistView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = WishlistSerializer

    @extend_schema(responses={200: WishlistSerializer}, description="Get the caller's wishlist")
    def get(self, request):
        wishlist = get_wishlist_with_items(user=request.user)
        return Response(WishlistSerializer(wishlist).data)


class WishlistItemView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = WishlistItemSerializer

    @extend_schema(
        request=None,
        responses={
            201: WishlistItemSerializer,
            404: OpenApiResponse(description="NOT_FOUND"),
            409: OpenApiResponse(description="CONFLICT (already in wishlist)"),
        },
        description="Add a product to the wishlist",
    )
    def post(self, request, product_id):
        item = add_item(user=request.user, product_id=product_id)
        return Response(WishlistItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={204: None}, description="Remove a product from the wishlist")
    def delete(self, request, product_id):
        remove_item(user=request.user, product_id=product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class WishlistCheckView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = WishlistCheckSerializer

    @extend_schema(responses={200: WishlistCheckSerializer}, description="Is this product in the wishlist?")
    def get(self, request, product_id):
        data = {"product_id": product_id, "in_wishlist": is_in_wishlist(user=request.user, product_id=product_id)}
        return Response(WishlistCheckSerializer(data).data)
