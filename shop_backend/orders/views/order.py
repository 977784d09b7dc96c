# orders/views/order.py

"""
ORDER API

Customer (authenticated):
- POST /api/orders/            create order from the caller's cart
- GET  /api/orders/            caller's orders, newest first (paginated)
- GET  /api/orders/{id}/       one of the caller's orders

Admin:
- PATCH /api/orders/{id}/status/   move through the status workflow

Thin layer: validation via serializers, all rules live in orders.services.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle

from backend.pagination import StandardPagination
from orders.models import Order
from orders.serializers import (
    CreateOrderInputSerializer,
    OrderSerializer,
    UpdateOrderStatusInputSerializer,
)
from orders.services.order_lifecycle import update_order_status
from orders.services.order_service import create_order, get_user_order, list_user_orders
from permissions.roles import IsAdmin


class CheckoutThrottle(UserRateThrottle):
    scope = "checkout"


class OrderPagination(StandardPagination):
    page_size = 10


class OrderViewSet(viewsets.GenericViewSet):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination

    def get_queryset(self):
        return list_user_orders(user=self.request.user)

    def get_permissions(self):
        if self.action == "update_status":
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.action == "create":
            return [*super().get_throttles(), CheckoutThrottle()]
        return super().get_throttles()

    # -----------------------------
    # Create (checkout)
    # -----------------------------
    @extend_schema(
        request=CreateOrderInputSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="EMPTY_CART / INSUFFICIENT_STOCK / VALIDATION_ERROR"),
            401: OpenApiResponse(description="Unauthenticated"),
        },
        description="Create an order from the authenticated user's cart",
    )
    def create(self, request):
        ser = CreateOrderInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        order = create_order(
            user=request.user,
            shipping_address=ser.validated_data["shipping_address"],
            payment_method=ser.validated_data["payment_method"],
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # -----------------------------
    # Reads
    # -----------------------------
    def list(self, request):
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(OrderSerializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        order = get_user_order(user=request.user, order_id=pk)
        return Response(OrderSerializer(order).data)

    # -----------------------------
    # Admin: status workflow
    # -----------------------------
    @extend_schema(
        request=UpdateOrderStatusInputSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="INVALID_STATUS"),
            403: OpenApiResponse(description="Not an admin"),
            404: OpenApiResponse(description="NOT_FOUND"),
            409: OpenApiResponse(description="INVALID_STATUS_TRANSITION (strict mode)"),
        },
        description="Update an order's status (admin only). Cancelling restocks once.",
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        ser = UpdateOrderStatusInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        order = update_order_status(order_id=pk, new_status=ser.validated_data["status"])
        order = Order.objects.prefetch_related("items__product").get(id=order.id)
        return Response(OrderSerializer(order).data)
