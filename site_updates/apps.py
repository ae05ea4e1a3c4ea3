from django.apps import AppConfig


class SiteUpdatesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'site_updates'
