from django.apps import AppConfig


class HoldersConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "holders"
    verbose_name = "Holders and pets"
