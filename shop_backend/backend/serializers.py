# backend/serializers.py

"""
Shared serializer helpers.

AliasedInputMixin:
- Storefront clients send camelCase keys (shippingAddress, zipCode, productId).
- The API is snake_case; aliases are rewritten before field validation.
- When both spellings are present the snake_case value wins.
"""

from __future__ import annotations

from collections.abc import Mapping


class AliasedInputMixin:
    aliases: dict = {}

    def to_internal_value(self, data):
        if isinstance(data, Mapping) and self.aliases:
            data = dict(data.items())
            for alias, canonical in self.aliases.items():
                if alias in data:
                    value = data.pop(alias)
                    data.setdefault(canonical, value)
        return super().to_internal_value(data)
