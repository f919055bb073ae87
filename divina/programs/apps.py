from django.apps import AppConfig


class ProgramsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'divina.programs'
    verbose_name = 'Programs'

    def ready(self):
        import divina.programs.signals  # noqa: F401  # Session and program totals
