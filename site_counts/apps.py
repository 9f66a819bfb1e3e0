# FILE: site_counts/apps.py
from django.apps import AppConfig


class SiteCountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "site_counts"
    verbose_name = "Site Counts"

    def ready(self):
        # Регистрируем блок после загрузки всех приложений (аналог хука init).
        from . import registry
        from .block import BLOCK_NAME, Block

        if not registry.is_registered(BLOCK_NAME):
            Block.default().init()
