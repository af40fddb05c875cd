from django.apps import AppConfig


class DirectoryConfig(AppConfig):
    name = "saakie.directory"
    verbose_name = "User Directory"
    default_auto_field = "django.db.models.BigAutoField"
