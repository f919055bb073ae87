from django.apps import AppConfig


class LiturgyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'divina.liturgy'
    verbose_name = 'Liturgical calendar'
