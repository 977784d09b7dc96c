# products/filters.py

"""
PRODUCT LISTING FILTERS (django-filter)

Query params:
- category=<uuid> | category_slug=<slug>
- min_price / max_price  (list price bounds, inclusive)
- in_stock=true          (stock > 0)
- on_sale / featured / is_new = true|false
- search=<text>          (name or description, case-insensitive)
- ordering=price|-price|name|-name|rating|-rating|reviews_count|-reviews_count
           |created_at|-created_at
"""

from __future__ import annotations

import django_filters
from django.db.models import Q

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    category = django_filters.UUIDFilter(field_name="category_id")
    category_slug = django_filters.CharFilter(field_name="category__slug")

    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    in_stock = django_filters.BooleanFilter(method="filter_in_stock")
    on_sale = django_filters.BooleanFilter()
    featured = django_filters.BooleanFilter()
    is_new = django_filters.BooleanFilter()

    search = django_filters.CharFilter(method="filter_search")

    ordering = django_filters.OrderingFilter(
        fields=(
            ("price", "price"),
            ("name", "name"),
            ("rating", "rating"),
            ("reviews_count", "reviews_count"),
            ("created_at", "created_at"),
        )
    )

    class Meta:
        model = Product
        fields = ["category", "on_sale", "featured", "is_new"]

    def filter_in_stock(self, queryset, name, value):
        if value is None:
            return queryset
        if value:
            return queryset.filter(stock__gt=0)
        return queryset.filter(stock=0)

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
