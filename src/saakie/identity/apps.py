from django.apps import AppConfig


class IdentityConfig(AppConfig):
    name = "saakie.identity"
    verbose_name = "Identity Sync"
    default_auto_field = "django.db.models.BigAutoField"
