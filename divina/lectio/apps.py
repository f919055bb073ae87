from django.apps import AppConfig


class LectioConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'divina.lectio'
    verbose_name = 'Lectio Divina'
