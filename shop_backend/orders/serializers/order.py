# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderProductSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    slug = serializers.CharField()


class OrderItemSerializer(serializers.ModelSerializer):
    """
    price is the frozen effective unit price, not the product's current price.
    """

    product = OrderProductSerializer(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product", "quantity", "price", "line_total"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "items",
            "subtotal",
            "shipping",
            "tax",
            "total",
            "shipping_address",
            "payment_method",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
