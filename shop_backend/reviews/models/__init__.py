from .review import MAX_RATING, MIN_RATING, Review

__all__ = [
    "MAX_RATING",
    "MIN_RATING",
    "Review",
]
