"""
Django settings for the commerce project.

Environment variables:

- DJANGO_SECRET_KEY, DJANGO_DEBUG, DJANGO_ALLOWED_HOSTS
- DJANGO_DB_PATH: SQLite database file
- COMMERCE_LOG_LEVEL: level for the commerce loggers
- COMMERCE_GATEWAY_TIMEOUT: seconds allowed per gateway call (unset: no timeout)
- COMMERCE_SIMULATED_LATENCY: delay used by the simulated gateways
- COMMERCE_WELCOME_NOTIFICATION_FAILURE: propagate, suppress or compensate
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-development-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")

ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "commerce",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DJANGO_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}

_gateway_timeout = os.environ.get("COMMERCE_GATEWAY_TIMEOUT")

COMMERCE = {
    "GATEWAY_TIMEOUT": float(_gateway_timeout) if _gateway_timeout else None,
    "SIMULATED_LATENCY": float(os.environ.get("COMMERCE_SIMULATED_LATENCY", "0.1")),
    "WELCOME_NOTIFICATION_FAILURE": os.environ.get(
        "COMMERCE_WELCOME_NOTIFICATION_FAILURE", "propagate"
    ),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "commerce": {
            "handlers": ["console"],
            "level": os.environ.get("COMMERCE_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
