# wishlist/serializers.py

from rest_framework import serializers

from products.serializers import ProductSerializer
from wishlist.models import Wishlist, WishlistItem


class WishlistItemSerializer(serializers.ModelSerializer):
    product = ProductSerializer(read_only=True)

    class Meta:
        model = WishlistItem
        fields = ["id", "product", "created_at"]
        read_only_fields = fields


class WishlistSerializer(serializers.ModelSerializer):
    items = WishlistItemSerializer(many=True, read_only=True)
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Wishlist
        fields = ["id", "items", "item_count", "updated_at"]
        read_only_fields = fields


class WishlistCheckSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    in_wishlist = serializers.BooleanField()
