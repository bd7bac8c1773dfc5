"""Django app configuration for core storage."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Core storage app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.core"
    verbose_name = "Core"
