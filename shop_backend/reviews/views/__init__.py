from .api import MyProductReviewView, ProductReviewsView, ReviewHelpfulView

__all__ = [
    "MyProductReviewView",
    "ProductReviewsView",
    "ReviewHelpfulView",
]
