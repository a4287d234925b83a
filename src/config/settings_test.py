"""Settings for the pytest suite.

Provides the secrets the base settings refuse to default, an in-memory
SQLite database and a local-memory cache so tests need no services.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from config.settings import *  # noqa: E402,F401,F403

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "price-catalog-tests",
    }
}
