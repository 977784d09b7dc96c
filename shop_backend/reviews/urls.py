# reviews/urls.py

"""
Mounted at /api/ (ahead of the catalog router).
"""

from django.urls import path

from reviews.views import MyProductReviewView, ProductReviewsView, ReviewHelpfulView

app_name = "reviews"

urlpatterns = [
    path("products/<uuid:product_id>/reviews/", ProductReviewsView.as_view(), name="product-reviews"),
    path("products/<uuid:product_id>/reviews/me/", MyProductReviewView.as_view(), name="my-review"),
    path("reviews/<uuid:review_id>/helpful/", ReviewHelpfulView.as_view(), name="review-helpful"),
]
