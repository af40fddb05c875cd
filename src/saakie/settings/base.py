"""Base settings for Saakie project."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
SRC_DIR = BASE_DIR / "src"

SECRET_KEY = os.environ.get("SECRET_KEY")

DEBUG = False


def env_list(name, default=""):
    """Split a comma separated environment variable into a list."""
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


ALLOWED_HOSTS = env_list("ALLOWED_HOSTS")

# Storefront origins allowed to post to the cart endpoints
CSRF_TRUSTED_ORIGINS = env_list("CSRF_TRUSTED_ORIGINS")

DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

SAAKIE_APPS = [
    "saakie.core",
    "saakie.store",
    "saakie.directory",
    "saakie.identity",
    "saakie.profile",
]

INSTALLED_APPS = DJANGO_APPS + SAAKIE_APPS

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "saakie.core.middleware.IdentityProviderMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "saakie.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "saakie.wsgi.application"

# Orders, catalog and the user directory live in PostgreSQL
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("POSTGRES_DB", "saakie"),
        "USER": os.environ.get("POSTGRES_USER", "postgres"),
        "PASSWORD": os.environ.get("POSTGRES_PASSWORD", "postgres"),
        "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
        "PORT": os.environ.get("POSTGRES_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
        "CONN_MAX_AGE": 60,
        "CONN_HEALTH_CHECKS": True,
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        "KEY_PREFIX": "saakie",
        "TIMEOUT": 60 * 15,
    }
}

# Sessions hold the shopping cart; cache first, database as the durable copy
SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"
SESSION_COOKIE_AGE = 60 * 60 * 24 * 30

# Custom user model
AUTH_USER_MODEL = "core.User"

# Customers sign in through the identity provider; only superusers created
# with createsuperuser carry a local password.
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 12}},
]

LANGUAGE_CODE = "en-in"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Identity provider (session tokens and lifecycle webhooks)
IDENTITY_PROVIDER = {
    "JWT_KEY": os.environ.get("CLERK_JWT_KEY", ""),
    "JWT_ALGORITHMS": ["RS256"],
    "AUTHORIZED_PARTIES": env_list("CLERK_AUTHORIZED_PARTIES"),
    "WEBHOOK_SECRET": os.environ.get("CLERK_WEBHOOK_SECRET"),
}

# Cart, shipping and catalog settings read through saakie.store.conf
STORE = {
    "CART_SESSION_KEY": "saakie-cart",
    "CART_VERSION": 1,
    "SHIPPING_CHARGE": 100,
    "FREE_SHIPPING_THRESHOLD": 2999,
    "ITEMS_PER_PAGE": 12,
    "MAX_PRICE": 10000,
    "LOW_STOCK_THRESHOLD": 5,
}

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "saakie": {
            "handlers": ["console"],
            "level": os.environ.get("SAAKIE_LOG_LEVEL", "DEBUG"),
            "propagate": False,
        },
    },
}
