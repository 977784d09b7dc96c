# backend/asgi.py

import os

from django.core.asgi import get_asgi_application

# dev unless the process environment pins another settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_asgi_application()
