"""
PATH: users/views/profile.py

Authenticated account endpoints:
- GET   /api/auth/me/            profile
- PATCH /api/auth/me/            edit first/last name
- PATCH /api/auth/me/password/   change password (current password required)
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import ChangePasswordSerializer, ProfileUpdateSerializer, UserSerializer

logger = logging.getLogger(__name__)


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(responses={200: UserSerializer}, description="Current user's profile")
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        request=ProfileUpdateSerializer,
        responses={200: UserSerializer},
        description="Update first/last name",
    )
    def patch(self, request):
        ser = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        user = ser.save()
        return Response(UserSerializer(user).data)


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ChangePasswordSerializer

    @extend_schema(
        request=ChangePasswordSerializer,
        responses={
            200: OpenApiResponse(description="Password updated"),
            401: OpenApiResponse(description="Current password is incorrect"),
        },
        description="Change the current user's password",
    )
    def patch(self, request):
        ser = ChangePasswordSerializer(data=request.data, context={"user": request.user})
        ser.is_valid(raise_exception=True)

        user = request.user
        if not user.check_password(ser.validated_data["current_password"]):
            raise AuthenticationFailed("Current password is incorrect")

        user.set_password(ser.validated_data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        logger.info("Password changed", extra={"user_id": str(user.id)})

        return Response({"message": "Password updated"})
