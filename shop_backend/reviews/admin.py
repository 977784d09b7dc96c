# reviews/admin.py

"""
REVIEW MODERATION

Ratings are read-only: Product.rating is derived from them.
Deletes go through the review service so the product aggregate is recomputed.
"""

from django.contrib import admin

from reviews.models import Review
from reviews.services.review_service import delete_review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "user", "rating", "title", "helpful", "created_at")
    list_filter = ("rating",)
    search_fields = ("title", "comment", "product__name", "user__email")
    readonly_fields = ("product", "user", "rating", "helpful", "created_at", "updated_at")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def delete_model(self, request, obj):
        delete_review(review=obj)

    def delete_queryset(self, request, queryset):
        for review in queryset:
            delete_review(review=review)
