# cart/serializers.py

from decimal import ROUND_HALF_UP

from rest_framework import serializers

from backend.serializers import AliasedInputMixin
from cart.models import Cart, CartItem
from products.serializers import ProductSummarySerializer


# =====================================================
# INPUT
# =====================================================

class AddCartItemInputSerializer(AliasedInputMixin, serializers.Serializer):
    aliases = {"productId": "product_id"}

    product_id = serializers.UUIDField()
    # Range (1..10) is enforced by the cart service so merges share one rule.
    quantity = serializers.IntegerField(required=False, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


# =====================================================
# OUTPUT
# =====================================================

class CartItemSerializer(serializers.ModelSerializer):
    product = ProductSummarySerializer(read_only=True)
    line_total = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        rounding=ROUND_HALF_UP,
        read_only=True,
    )

    class Meta:
        model = CartItem
        fields = ["id", "product", "quantity", "line_total", "created_at", "updated_at"]
        read_only_fields = fields


class CartSerializer(serializers.ModelSerializer):
    """
    Live view of the cart: prices and stock are current, not snapshotted.
    """

    items = CartItemSerializer(many=True, read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Cart
        fields = ["id", "items", "item_count", "subtotal", "updated_at"]
        read_only_fields = fields
