import os
from pathlib import Path

import dotenv
from celery.schedules import crontab

BASE_DIR = Path(__file__).resolve().parent.parent

dotenv.load_dotenv(BASE_DIR / ".env")


def get(key, default=None):
    return os.environ.get(key, default)


def get_bool(key, default=False):
    return get(key, str(default)).lower() in ("1", "true", "yes", "on")


ENV = get("ENV", "dev")

SECRET_KEY = get("SECRET_KEY", "insecure-dev-key" if ENV in ("dev", "test") else None)
DEBUG = get_bool("DEBUG", ENV == "dev")
ALLOWED_HOSTS = get("ALLOWED_HOSTS", "localhost").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "marches",
]

# Database

DATABASES = {
    "default": {
        "ENGINE": get("DATABASE_ENGINE", "django.db.backends.sqlite3"),
        "NAME": get("DATABASE_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": get("DATABASE_USER", ""),
        "PASSWORD": get("DATABASE_PASSWORD", ""),
        "HOST": get("DATABASE_HOST", ""),
        "PORT": get("DATABASE_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Internationalization

LANGUAGE_CODE = "fr-fr"
TIME_ZONE = "Europe/Paris"
USE_I18N = True
USE_TZ = True

# Celery

CELERY_BROKER_URL = get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_TASK_ALWAYS_EAGER = get_bool("CELERY_TASK_ALWAYS_EAGER", ENV == "test")
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_TIMEZONE = TIME_ZONE

# Les statuts dépendent de la date du jour : recalcul chaque nuit
PROCEDURE_STATUS_REFRESH_HOUR = int(get("PROCEDURE_STATUS_REFRESH_HOUR", "2"))

CELERY_BEAT_SCHEDULE = {
    "refresh-procedure-statuses": {
        "task": "marches.refresh_procedure_statuses",
        "schedule": crontab(hour=PROCEDURE_STATUS_REFRESH_HOUR, minute=0),
    },
}

# Logging

LOG_LEVEL = get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "celery_task": {
            "()": "marches.logging.CeleryTaskFilter",
        },
    },
    "formatters": {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - [%(task_name)s %(task_id)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filters": ["celery_task"],
        },
    },
    "loggers": {
        "marches": {
            "level": LOG_LEVEL,
        },
        "celery": {
            "level": "INFO",
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}
