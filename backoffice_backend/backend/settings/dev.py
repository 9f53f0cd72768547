# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
Safe + convenient defaults.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS", default=["http://localhost:5173"]
)

CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS", default=["http://localhost:5173"]
)

CORS_ALLOW_CREDENTIALS = True

# Verbose domain logs locally (stock gateway, order transitions, postings)
DEV_LOG_LEVEL = env.str("DEV_LOG_LEVEL", default="DEBUG").upper()
for _name in ("products", "orders", "accounting", "notifications", "purchases"):
    LOGGING["loggers"][_name]["level"] = DEV_LOG_LEVEL
