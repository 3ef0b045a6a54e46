# megamenu/apps.py

from django.apps import AppConfig


class MegaMenuConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "megamenu"
    verbose_name = "Mega Menu Cards"
