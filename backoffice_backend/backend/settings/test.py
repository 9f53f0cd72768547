# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS
- In-memory SQLite (fast, isolated)
- Cheap password hashing
- Throttles loose enough that API tests never trip them
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

PRODUCT_DELETE_MODE = "soft"

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        "anon": "10000/min",
        "user": "10000/min",
        "order_create": "10000/min",
    },
}
