# backend/wsgi.py
"""
WSGI entrypoint for the storefront API (gunicorn backend.wsgi:application).

Servers set DJANGO_SETTINGS_MODULE=backend.settings.prod; the dev fallback
only applies to local runs.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_wsgi_application()
