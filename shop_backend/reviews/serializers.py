# reviews/serializers.py

from django.contrib.auth import get_user_model
from rest_framework import serializers

from reviews.models import MAX_RATING, MIN_RATING, Review

User = get_user_model()


class CreateReviewInputSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    title = serializers.CharField(min_length=3, max_length=200)
    comment = serializers.CharField(min_length=10, max_length=2000)


class ReviewAuthorSerializer(serializers.ModelSerializer):
    """
    Public author info only: never the email.
    """

    class Meta:
        model = User
        fields = ["id", "full_name"]
        read_only_fields = fields


class ReviewSerializer(serializers.ModelSerializer):
    user = ReviewAuthorSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "product",
            "user",
            "rating",
            "title",
            "comment",
            "helpful",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
