# backend/exceptions.py

"""
API ERROR NORMALIZATION

Purpose:
- One error envelope for every failed request:
      {"error": {"code": "...", "message": "...", "details": {...}?}}
- Domain errors (raised by services) carry their own code + HTTP status.
- DRF errors (auth, permissions, validation, 404) are re-wrapped in the envelope.
- Anything else is logged server-side with its stack trace and answered with an
  opaque 500 (no internals leak to clients).
"""

from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)


# ======================================================
# DOMAIN ERRORS
# ======================================================

class DomainError(Exception):
    """
    Base class for client-facing business errors.

    Subclasses set `code` and `http_status`; `details` is optional structured
    context for the client (e.g. available quantity).
    """

    code = "DOMAIN_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "", *, details: dict | None = None):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.details = details or {}


class NotFoundError(DomainError):
    """Resource not found."""

    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """Request conflicts with the current state of the resource."""

    code = "CONFLICT"
    http_status = status.HTTP_409_CONFLICT


# ======================================================
# RESPONSE HELPERS
# ======================================================

def error_response(*, code: str, message: str, http_status: int, details=None, headers=None):
    """
    Canonical API error response.
    """
    body = {"code": code, "message": message}
    if details:
        body["details"] = details
    return Response({"error": body}, status=http_status, headers=headers)


_DRF_CODES = (
    (exceptions.NotAuthenticated, "UNAUTHORIZED"),
    (exceptions.AuthenticationFailed, "UNAUTHORIZED"),
    (exceptions.PermissionDenied, "FORBIDDEN"),
    (exceptions.NotFound, "NOT_FOUND"),
    (exceptions.ValidationError, "VALIDATION_ERROR"),
    (exceptions.Throttled, "RATE_LIMITED"),
    (exceptions.MethodNotAllowed, "METHOD_NOT_ALLOWED"),
    (exceptions.ParseError, "MALFORMED_REQUEST"),
)


def _drf_code(exc) -> str:
    for exc_cls, code in _DRF_CODES:
        if isinstance(exc, exc_cls):
            return code
    return str(getattr(exc, "default_code", "error")).upper()


def _drf_message(exc, data) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return "Invalid request data"
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return str(exc)


# ======================================================
# DRF EXCEPTION HANDLER
# ======================================================

def api_exception_handler(exc, context):
    """
    REST_FRAMEWORK["EXCEPTION_HANDLER"] hook.
    """
    if isinstance(exc, DomainError):
        set_rollback()
        return error_response(
            code=exc.code,
            message=str(exc),
            http_status=exc.http_status,
            details=exc.details,
        )

    # Django-native 404 / permission errors: normalize first so codes are stable.
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or "Not found.")
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(str(exc) or None)

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled API error",
            extra={"view": view.__class__.__name__ if view else None},
        )
        set_rollback()
        return error_response(
            code="SERVER_ERROR",
            message="An unexpected error occurred. Please try again later.",
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    details = response.data if isinstance(exc, exceptions.ValidationError) else None

    return error_response(
        code=_drf_code(exc),
        message=_drf_message(exc, response.data),
        http_status=response.status_code,
        details=details,
        headers={k: v for k, v in response.items()},
    )
