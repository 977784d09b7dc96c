# backend/settings/prod.py
"""
PRODUCTION SETTINGS

Fail-closed: the process refuses to boot when any of these is missing or unsafe
- SECRET_KEY (non-default)
- ALLOWED_HOSTS
- DATABASE_URL (Postgres; SQLite is rejected)
- REDIS_URL (catalog cache must be shared by every worker)
- CORS_ALLOWED_ORIGINS / CSRF_TRUSTED_ORIGINS (https storefront origins only)

Static files are served by WhiteNoise behind a TLS-terminating proxy.
"""

from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403
from .base import BASE_DIR, MIDDLEWARE, REDIS_URL, env  # explicit for Ruff (F405)

DEBUG = False


def _require(value, message: str):
    if not value:
        raise ImproperlyConfigured(message)
    return value


def _storefront_origins(name: str) -> list:
    origins = _require(env.list(name, default=[]), f"{name} must be set in production.")
    for origin in origins:
        if not origin.startswith("https://"):
            raise ImproperlyConfigured(f"{name} must only list https:// origins ({origin}).")
        if "localhost" in origin or "127.0.0.1" in origin:
            raise ImproperlyConfigured(f"Remove local origin {origin} from {name}.")
    return origins


# ----------------------------
# Core
# ----------------------------
_secret_key = (env("SECRET_KEY", default="") or "").strip()
if _secret_key == "dev-insecure-change-me":
    _secret_key = ""
SECRET_KEY = _require(_secret_key, "SECRET_KEY must be set to a strong value in production.")

ALLOWED_HOSTS = _require(env.list("ALLOWED_HOSTS", default=[]), "ALLOWED_HOSTS must be set in production.")

# ----------------------------
# Postgres
# ----------------------------
_database_url = _require(
    (env("DATABASE_URL", default="") or "").strip(),
    "DATABASE_URL must point at Postgres in production.",
)
if _database_url.startswith("sqlite"):
    raise ImproperlyConfigured("SQLite is not supported in production; use Postgres.")

DATABASES = {"default": env.db("DATABASE_URL")}
DATABASES["default"]["CONN_MAX_AGE"] = env.int("DB_CONN_MAX_AGE", default=60)

# ----------------------------
# Redis (catalog cache)
# ----------------------------
_require(REDIS_URL, "REDIS_URL must be set in production.")

# ----------------------------
# Static (WhiteNoise)
# ----------------------------
STATIC_ROOT = env("STATIC_ROOT", default=str(BASE_DIR / "staticfiles"))
MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# ----------------------------
# TLS behind proxy
# ----------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=3600)
SECURE_HSTS_INCLUDE_SUBDOMAINS = env.bool("SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True)
SECURE_HSTS_PRELOAD = env.bool("SECURE_HSTS_PRELOAD", default=False)

# Admin session + CSRF cookies (the API itself is Bearer-token only)
SESSION_COOKIE_SECURE = CSRF_COOKIE_SECURE = True
SESSION_COOKIE_HTTPONLY = CSRF_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = CSRF_COOKIE_SAMESITE = "Lax"

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "same-origin"
SECURE_CROSS_ORIGIN_OPENER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

# ----------------------------
# Storefront origins
# ----------------------------
CORS_ALLOWED_ORIGINS = _storefront_origins("CORS_ALLOWED_ORIGINS")
CSRF_TRUSTED_ORIGINS = _storefront_origins("CSRF_TRUSTED_ORIGINS")
CORS_ALLOW_CREDENTIALS = False
