# orders/serializers/input.py

"""
ORDER INPUT SERIALIZERS

- snake_case is canonical; storefront camelCase keys are accepted as aliases.
- Status is a plain string here: unknown values are rejected by the workflow
  service with INVALID_STATUS (not a generic validation error).
"""

from rest_framework import serializers

from backend.serializers import AliasedInputMixin


class ShippingAddressSerializer(AliasedInputMixin, serializers.Serializer):
    aliases = {"fullName": "full_name", "zipCode": "zip_code"}

    full_name = serializers.CharField(min_length=2, max_length=100)
    address = serializers.CharField(min_length=5, max_length=200)
    city = serializers.CharField(min_length=2, max_length=100)
    state = serializers.CharField(min_length=2, max_length=100)
    zip_code = serializers.CharField(min_length=5, max_length=10)
    country = serializers.CharField(min_length=2, max_length=100)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=30)


class CreateOrderInputSerializer(AliasedInputMixin, serializers.Serializer):
    aliases = {"shippingAddress": "shipping_address", "paymentMethod": "payment_method"}

    shipping_address = ShippingAddressSerializer()
    payment_method = serializers.CharField(min_length=1, max_length=50)


class UpdateOrderStatusInputSerializer(serializers.Serializer):
    status = serializers.CharField()
