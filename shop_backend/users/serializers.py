# users/serializers.py

"""
ACCOUNT SERIALIZERS

- Emails are stored and compared lowercase.
- Registration never accepts a role: every self-service account is a customer.
- Password changes require the current password.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from backend.serializers import AliasedInputMixin

User = get_user_model()


def _normalize_email(value: str) -> str:
    return (value or "").strip().lower()


class RegisterSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        validators=[validate_password],
        style={"input_type": "password"},
    )

    class Meta:
        model = User
        fields = ["email", "password", "first_name", "last_name"]

    def validate_email(self, value):
        email = _normalize_email(value)
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("An account with this email already exists")
        return email

    def create(self, validated_data):
        return User.objects.create_user(role=User.ROLE_CUSTOMER, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_email(self, value):
        return _normalize_email(value)


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name", "full_name", "role", "created_at"]
        read_only_fields = fields


class ProfileUpdateSerializer(AliasedInputMixin, serializers.ModelSerializer):
    """
    Partial profile edit. Email and role are not editable here.
    """

    aliases = {"firstName": "first_name", "lastName": "last_name"}

    class Meta:
        model = User
        fields = ["first_name", "last_name"]
        extra_kwargs = {
            "first_name": {"max_length": 100},
            "last_name": {"max_length": 100},
        }


class ChangePasswordSerializer(AliasedInputMixin, serializers.Serializer):
    aliases = {"currentPassword": "current_password", "newPassword": "new_password"}

    current_password = serializers.CharField(write_only=True, style={"input_type": "password"})
    new_password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
    )

    def validate(self, attrs):
        if attrs["current_password"] == attrs["new_password"]:
            raise serializers.ValidationError(
                {"new_password": "New password must differ from the current one"}
            )
        try:
            validate_password(attrs["new_password"], user=self.context.get("user"))
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"new_password": list(exc.messages)}) from exc
        return attrs


class TokenPairSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokenPairSerializer()
