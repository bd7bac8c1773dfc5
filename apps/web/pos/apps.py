"""Django app configuration for point-of-sale checkout."""

from django.apps import AppConfig


class PosConfig(AppConfig):
    """Point-of-sale app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.pos"
    verbose_name = "Point of Sale"
