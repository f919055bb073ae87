from django.core.management.base import BaseCommand
from divina.i18n.models import Locale

DEFAULT_LOCALES = [
    {'code': 'sk', 'name': 'Slovak', 'native_name': 'Slovenčina'},
    {'code': 'cz', 'name': 'Czech', 'native_name': 'Čeština'},
    {'code': 'en', 'name': 'English', 'native_name': 'English'},
    {'code': 'es', 'name': 'Spanish', 'native_name': 'Español'},
]


class Command(BaseCommand):
    help = 'Create the content locales (sk, cz, en, es) if they do not exist'

    def handle(self, *args, **options):
        created_count = 0
        for data in DEFAULT_LOCALES:
            locale, created = Locale.objects.get_or_create(
                code=data['code'],
                defaults={'name': data['name'], 'native_name': data['native_name'], 'is_active': True},
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'✓ Created locale: {locale}'))
            else:
                self.stdout.write(f'  Locale already exists: {locale}')

        self.stdout.write(self.style.SUCCESS(f'\nCompleted: {created_count} locales created'))
