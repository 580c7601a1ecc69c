"""
HGS – Django Settings (Infrastructure Only)
============================================
Django hosts the key/value state store. Governance rules live in the
engines; nothing here changes who may call what.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("HGS_SECRET_KEY", "hgs-dev-key-replace-before-deployment")

DEBUG = os.environ.get("HGS_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── HGS Modules ───────────────────────────────────────
    "core.state_store",
]

MIDDLEWARE = []

# ── Database ──────────────────────────────────────────────────
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("HGS_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Logging ───────────────────────────────────────────────────
HGS_LOG_LEVEL = os.environ.get("HGS_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "hgs": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "hgs",
        },
    },
    "loggers": {
        "hgs": {
            "handlers": ["console"],
            "level": HGS_LOG_LEVEL,
            "propagate": True,
        },
    },
}
