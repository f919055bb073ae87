from django.apps import AppConfig


class ExercisesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'divina.exercises'
    verbose_name = 'Spiritual exercises'
