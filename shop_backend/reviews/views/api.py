# reviews/views/api.py

"""
REVIEW API

Public:
- GET   /api/products/{product_id}/reviews/      paginated, most helpful first
- PATCH /api/reviews/{review_id}/helpful/        +1 helpful vote

Authenticated:
- POST  /api/products/{product_id}/reviews/      one review per product
- GET   /api/products/{product_id}/reviews/me/   the caller's review
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.pagination import StandardPagination
from reviews.serializers import CreateReviewInputSerializer, ReviewSerializer
from reviews.services.review_service import (
    create_review,
    get_user_review,
    list_product_reviews,
    mark_review_helpful,
)


class ReviewPagination(StandardPagination):
    page_size = 10


class ProductReviewsView(GenericAPIView):
    serializer_class = ReviewSerializer
    pagination_class = ReviewPagination

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated()]
        return [AllowAny()]

    @extend_schema(responses={200: ReviewSerializer(many=True)}, description="Reviews for a product")
    def get(self, request, product_id):
        page = self.paginate_queryset(list_product_reviews(product_id=product_id))
        return self.get_paginated_response(ReviewSerializer(page, many=True).data)

    @extend_schema(
        request=CreateReviewInputSerializer,
        responses={
            201: ReviewSerializer,
            404: OpenApiResponse(description="NOT_FOUND"),
            409: OpenApiResponse(description="CONFLICT (already reviewed)"),
        },
        description="Review a product (updates its average rating)",
    )
    def post(self, request, product_id):
        ser = CreateReviewInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        review = create_review(user=request.user, product_id=product_id, **ser.validated_data)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class MyProductReviewView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ReviewSerializer

    @extend_schema(responses={200: ReviewSerializer}, description="The caller's review of a product")
    def get(self, request, product_id):
        review = get_user_review(user=request.user, product_id=product_id)
        return Response(ReviewSerializer(review).data)


class ReviewHelpfulView(APIView):
    permission_classes = [AllowAny]
    serializer_class = ReviewSerializer

    @extend_schema(request=None, responses={200: ReviewSerializer}, description="Mark a review as helpful")
    def patch(self, request, review_id):
        review = mark_review_helpful(review_id=review_id)
        return Response(ReviewSerializer(review).data)
