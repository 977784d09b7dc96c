# products/admin.py

"""
CATALOG ADMIN

Stock edits here are plain saves: use them for restocking only.
Order-driven stock changes always go through products.services.inventory.
Every save or delete invalidates the catalog cache after commit.
"""

from django.contrib import admin
from django.db import transaction

from products.models import Category, Product
from products.services.catalog_cache import get_catalog_cache


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "featured")
    list_filter = ("featured",)
    search_fields = ("name",)
    prepopulated_fields = {"slug": ("name",)}
    ordering = ("name",)

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        category_id = obj.id
        transaction.on_commit(lambda: get_catalog_cache().invalidate_categories(category_id))


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "price",
        "on_sale",
        "discount",
        "stock",
        "featured",
        "is_active",
    )
    list_filter = ("category", "on_sale", "featured", "is_new", "is_active")
    list_editable = ("stock", "is_active")
    search_fields = ("name", "slug", "description")
    readonly_fields = ("rating", "reviews_count", "created_at", "updated_at")
    ordering = ("-created_at",)

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        product_id = str(obj.id)
        transaction.on_commit(lambda: get_catalog_cache().invalidate_products([product_id]))

    def delete_model(self, request, obj):
        product_id = str(obj.id)
        super().delete_model(request, obj)
        transaction.on_commit(lambda: get_catalog_cache().invalidate_products([product_id]))
