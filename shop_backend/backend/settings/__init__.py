# backend/settings/__init__.py
# Pick a concrete module via DJANGO_SETTINGS_MODULE: dev, test or prod.
