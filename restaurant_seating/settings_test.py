"""
Settings for the test run: in-memory channel layer, throwaway SQLite database.
"""

from .settings import *  # noqa: F401,F403
from .settings import BASE_DIR

SECRET_KEY = "test-secret-key"
DEBUG = False

# File-backed so threads in TransactionTestCase share one database.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_seating.sqlite3",
        "OPTIONS": {"transaction_mode": "IMMEDIATE", "timeout": 20},
        "TEST": {"NAME": BASE_DIR / "test_seating.sqlite3"},
    }
}

CHANNEL_LAYERS = {
    "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
