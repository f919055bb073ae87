from django.apps import AppConfig


class I18nConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'divina.i18n'
    verbose_name = 'Languages'
