# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: catalog CRUD + storefront reads
- ProductSummarySerializer: compact embed for cart lines and order items
"""

from decimal import ROUND_HALF_UP

from rest_framework import serializers

from products.models import Category, Product


class CategoryBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug"]


class ProductSerializer(serializers.ModelSerializer):
    """
    Canonical Product serializer.

    GUARANTEES:
    - effective_price is computed server-side (never trusted from clients)
    - stock is read-write for admins only (view-level permission)
    - rating and reviews_count come from reviews and are read-only
    """

    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), write_only=True)
    category_detail = CategoryBriefSerializer(source="category", read_only=True)

    effective_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        rounding=ROUND_HALF_UP,
        read_only=True,
    )
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "category",
            "category_detail",
            "price",
            "effective_price",
            "on_sale",
            "discount",
            "stock",
            "in_stock",
            "featured",
            "is_new",
            "is_active",
            "rating",
            "reviews_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "category_detail",
            "effective_price",
            "in_stock",
            "rating",
            "reviews_count",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {"slug": {"required": False}}

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name is required")
        return value

    def validate_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("Price must be greater than zero")
        return value


class ProductSummarySerializer(serializers.ModelSerializer):
    effective_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        rounding=ROUND_HALF_UP,
        read_only=True,
    )

    class Meta:
        model = Product
        fields = ["id", "name", "slug", "price", "effective_price", "on_sale", "discount", "stock"]
        read_only_fields = fields
