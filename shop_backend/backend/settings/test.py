# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- File-backed SQLite with IMMEDIATE transactions, so threaded checkout
  tests share one database and writers queue on the lock
  (TEST_DATABASE_URL switches to Postgres)
- Local-memory cache (never talks to Redis)
- Fast password hasher
- Throttles relaxed so API tests never hit 429
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import BASE_DIR, REST_FRAMEWORK, env

DEBUG = False

_TEST_SQLITE = str(BASE_DIR / "test-db.sqlite3")

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": _TEST_SQLITE,
        "OPTIONS": {"transaction_mode": "IMMEDIATE", "timeout": 20},
        "TEST": {"NAME": _TEST_SQLITE},
    }
}

if env("TEST_DATABASE_URL", default=""):
    DATABASES = {"default": env.db("TEST_DATABASE_URL")}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "shop-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        "anon": "10000/min",
        "user": "10000/min",
        "checkout": "10000/min",
    },
}

PRICING = {
    "TAX_RATE": "0.08",
    "FREE_SHIPPING_THRESHOLD": "100",
    "STANDARD_SHIPPING_COST": "10",
}

ORDERS = {
    "STRICT_STATUS_TRANSITIONS": False,
}
