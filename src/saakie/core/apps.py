"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """User accounts, session token middleware and access mixins."""

    name = "saakie.core"
    verbose_name = "Accounts"
    default_auto_field = "django.db.models.BigAutoField"
