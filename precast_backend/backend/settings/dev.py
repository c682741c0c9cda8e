# backend/settings/dev.py
"""
LOCAL DEVELOPMENT SETTINGS

SQLite by default (DATABASE_URL overrides it). Also the test-suite settings.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import TESTING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "testserver"])

# Planning front-end dev server
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=["http://localhost:5173"])
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=["http://localhost:5173"])
CORS_ALLOW_CREDENTIALS = True

if TESTING:
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    LOGGING["loggers"]["sales"]["level"] = "WARNING"  # noqa: F405
    LOGGING["loggers"]["inventory"]["level"] = "WARNING"  # noqa: F405
