from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from divina.core.cache_signals import suspend_cache_signals
from divina.core.cache_utils import invalidate_resource_cache
from divina.liturgy.calapi import CalAPIClient, CalendarServiceError, VALID_LANGUAGES
from divina.liturgy.models import LiturgicalCalendarDay
from divina.liturgy.services import (
    calendar_day_from_remote, get_or_create_liturgical_year, liturgical_year_for_date,
)


class Command(BaseCommand):
    help = 'Fetch a civil year from CalAPI and store it as the liturgical calendar of a locale'

    def add_arguments(self, parser):
        parser.add_argument('year', type=int, help='Civil year to generate, e.g. 2025')
        parser.add_argument('--locale', default='sk', help='Locale code to store the days under (default: sk)')
        parser.add_argument('--source-lang', default='cs', choices=VALID_LANGUAGES,
                            help='CalAPI language to fetch titles in (default: cs)')

    def handle(self, *args, **options):
        year = options['year']
        locale_code = options['locale']
        source_lang = options['source_lang']

        self.stdout.write(f'Fetching {year} from CalAPI ({source_lang})...')
        try:
            payloads = CalAPIClient().year(year, source_lang)
        except CalendarServiceError as e:
            raise CommandError(f'Calendar service error: {e}')

        if not payloads:
            raise CommandError(f'CalAPI returned no days for {year}')

        with suspend_cache_signals(), transaction.atomic():
            years = {}
            custom_dates = set(LiturgicalCalendarDay.objects.filter(
                locale_code=locale_code, date__year=year, is_custom_edit=True
            ).values_list('date', flat=True))

            LiturgicalCalendarDay.objects.filter(
                locale_code=locale_code, date__year=year, is_custom_edit=False
            ).delete()

            days = []
            for payload in payloads:
                day = calendar_day_from_remote(payload, locale_code, source_api=f'calapi-{source_lang}')
                if day.date in custom_dates:
                    continue
                liturgical_year_number = liturgical_year_for_date(day.date)
                if liturgical_year_number not in years:
                    years[liturgical_year_number] = get_or_create_liturgical_year(
                        liturgical_year_number, locale_code, is_generated=True
                    )
                day.liturgical_year = years[liturgical_year_number]
                days.append(day)

            LiturgicalCalendarDay.objects.bulk_create(days, batch_size=50)

        invalidate_resource_cache('calendar')
        self.stdout.write(self.style.SUCCESS(
            f'✓ Stored {len(days)} days for {year} ({locale_code}); kept {len(custom_dates)} custom days'
        ))
