# orders/views/recommendations.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.services.recommendations import recommend_for_user
from products.serializers import ProductSerializer


class UserRecommendationsView(APIView):
    """
    GET /api/recommendations/user/   products from categories the caller has bought from
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ProductSerializer

    @extend_schema(
        responses={200: ProductSerializer(many=True)},
        description="Recommendations from the caller's recent orders, topped up with featured products",
    )
    def get(self, request):
        products = recommend_for_user(user=request.user)
        return Response(ProductSerializer(products, many=True).data)
