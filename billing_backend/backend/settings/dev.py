"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
Safe + convenient defaults:
- local media storage for exported journal spreadsheets
- verbose journal engine logging
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import BASE_DIR, LOGGING, TESTING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS", default=["http://localhost:5173"]
)

CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS", default=["http://localhost:5173"]
)

CORS_ALLOW_CREDENTIALS = True

# Journal spreadsheets land in <repo>/media and are served by backend.urls
# while DEBUG is on.
MEDIA_ROOT = env("MEDIA_ROOT", default=str(BASE_DIR / "media"))

# journal engine logs at DEBUG locally (test runs keep LOG_LEVEL)
if not TESTING:
    LOGGING["loggers"]["journals"]["level"] = env("JOURNALS_LOG_LEVEL", default="DEBUG")
