"""
Django settings for the food truck site.

Every setting comes from the environment - never hardcode credentials.
Run with: SECRET_KEY=... python manage.py runserver
"""

from pathlib import Path

import environ  # type: ignore[import-untyped]

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    PAYMENT_PROVIDER=(str, "stripe"),
    PAYMENT_PROVIDER_TIMEOUT=(float, 30.0),
    STRIPE_SECRET_KEY=(str, ""),
    STRIPE_WEBHOOK_SECRET=(str, ""),
    STRIPE_PUBLISHABLE_KEY=(str, ""),
    SQUARE_ACCESS_TOKEN=(str, ""),
    SQUARE_LOCATION_ID=(str, ""),
    SQUARE_APPLICATION_ID=(str, ""),
    SQUARE_ENVIRONMENT=(str, "sandbox"),
    SQUARE_WEBHOOK_SIGNATURE_KEY=(str, ""),
    SQUARE_WEBHOOK_URL=(str, ""),
    SQUARE_TERMINAL_DEVICE_ID=(str, "default"),
    LOG_LEVEL=(str, "INFO"),
)

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "apps.web.core",
    "apps.web.orders",
    "apps.web.payments",
    "apps.web.pos",
    "apps.web.bookings",
    "apps.web.content",
]

MIDDLEWARE = [
    # First, so every later log record carries the request id
    "apps.web.core.middleware.RequestIDMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "apps.web.config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
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

WSGI_APPLICATION = "apps.web.config.wsgi.application"

# Database
# https://docs.djangoproject.com/en/5.1/ref/settings/#databases
DATABASES = {
    "default": env.db(
        "DATABASE_URL", default=f"sqlite:///{BASE_DIR.parent.parent / 'db.sqlite3'}"
    ),
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR.parent.parent / "staticfiles"

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Uploaded images are capped at 5 MB by the view; leave headroom for the form
DATA_UPLOAD_MAX_MEMORY_SIZE = 6 * 1024 * 1024
FILE_UPLOAD_MAX_MEMORY_SIZE = 6 * 1024 * 1024

# =============================================================================
# Payments
# =============================================================================

# "square" selects Square; anything else selects Stripe
PAYMENT_PROVIDER = env("PAYMENT_PROVIDER")
# Seconds before a provider call is abandoned
PAYMENT_PROVIDER_TIMEOUT = env("PAYMENT_PROVIDER_TIMEOUT")

STRIPE_SECRET_KEY = env("STRIPE_SECRET_KEY")
STRIPE_WEBHOOK_SECRET = env("STRIPE_WEBHOOK_SECRET")
STRIPE_PUBLISHABLE_KEY = env("STRIPE_PUBLISHABLE_KEY")

SQUARE_ACCESS_TOKEN = env("SQUARE_ACCESS_TOKEN")
SQUARE_LOCATION_ID = env("SQUARE_LOCATION_ID")
SQUARE_APPLICATION_ID = env("SQUARE_APPLICATION_ID")
SQUARE_ENVIRONMENT = env("SQUARE_ENVIRONMENT")
SQUARE_WEBHOOK_SIGNATURE_KEY = env("SQUARE_WEBHOOK_SIGNATURE_KEY")
# Notification URL as registered with Square; it is part of the signature
SQUARE_WEBHOOK_URL = env("SQUARE_WEBHOOK_URL")
SQUARE_TERMINAL_DEVICE_ID = env("SQUARE_TERMINAL_DEVICE_ID")

# =============================================================================
# Logging
# =============================================================================

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": "apps.web.core.request_id.RequestIDFilter"},
    },
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "filters": ["request_id"],
        },
    },
    "root": {
        "handlers": ["console"],
        "level": env("LOG_LEVEL"),
    },
}
