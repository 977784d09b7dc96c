from .order import CheckoutThrottle, OrderViewSet
from .recommendations import UserRecommendationsView

__all__ = [
    "CheckoutThrottle",
    "OrderViewSet",
    "UserRecommendationsView",
]
