# backend/settings/dev.py
"""
LOCAL DEVELOPMENT

- DEBUG on, SQLite from DATABASE_URL default
- Storefront dev server (Next.js on :3000) allowed through CORS/CSRF
- App loggers at DEBUG so cache hits/misses and stock shortfalls are visible
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

STOREFRONT_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=["http://localhost:3000"])

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "0.0.0.0"])
CORS_ALLOWED_ORIGINS = STOREFRONT_ORIGINS
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=STOREFRONT_ORIGINS)

for _app in ("products", "cart", "orders", "reviews", "wishlist"):
    LOGGING["loggers"][_app]["level"] = env("DEV_LOG_LEVEL", default="DEBUG")
