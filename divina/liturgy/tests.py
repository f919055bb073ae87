"""
Tests for the liturgical calendar
Tests: year and cycle rules, day classification, CalAPI client and proxy, stored calendar, generation command
"""
from datetime import date
from io import StringIO
from unittest import mock
import requests
from django.test import TestCase
from django.core.cache import cache
from django.core.management import call_command
from django.core.management.base import CommandError
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.liturgy.calapi import CalAPIClient, CalendarServiceError
from divina.liturgy.models import LiturgicalYear, LiturgicalCalendarDay
from divina.liturgy.services import (
    calendar_day_from_remote, find_calendar_day, first_sunday_of_advent, is_ordinary_weekday,
    is_special_day, lectionary_cycle_for_year, ferial_lectionary_for_year, liturgical_year_bounds,
    liturgical_year_for_date, reading_cycle,
)


def remote_day(day_date, title='Pondělí 1. týdne v mezidobí', rank_num=3.13):
    return {
        'date': day_date.isoformat(),
        'season': 'ordinary',
        'season_week': 1,
        'weekday': 'monday',
        'celebrations': [{'title': title, 'rank': 'ferial', 'rank_num': rank_num, 'colour': 'green'}],
    }


class LiturgicalYearRuleTests(TestCase):
    """Test the year and cycle arithmetic"""

    def test_lectionary_cycle(self):
        """Test Sunday cycles rotate C, A, B"""
        self.assertEqual(lectionary_cycle_for_year(2025), 'C')
        self.assertEqual(lectionary_cycle_for_year(2026), 'A')
        self.assertEqual(lectionary_cycle_for_year(2027), 'B')

    def test_ferial_lectionary(self):
        """Test weekday lectionary I in odd years and II in even years"""
        self.assertEqual(ferial_lectionary_for_year(2025), 1)
        self.assertEqual(ferial_lectionary_for_year(2026), 2)

    def test_first_sunday_of_advent(self):
        """Test known Advent dates"""
        self.assertEqual(first_sunday_of_advent(2024), date(2024, 12, 1))
        self.assertEqual(first_sunday_of_advent(2025), date(2025, 11, 30))
        self.assertEqual(first_sunday_of_advent(2023), date(2023, 12, 3))

    def test_year_bounds(self):
        """Test the liturgical year runs from Advent to the Saturday before Advent"""
        self.assertEqual(liturgical_year_bounds(2025), (date(2024, 12, 1), date(2025, 11, 29)))

    def test_year_for_date(self):
        """Test days after the first Sunday of Advent belong to the next year"""
        self.assertEqual(liturgical_year_for_date(date(2025, 11, 29)), 2025)
        self.assertEqual(liturgical_year_for_date(date(2025, 11, 30)), 2026)
        self.assertEqual(liturgical_year_for_date(date(2025, 1, 15)), 2025)


class DayClassificationTests(TestCase):
    """Test which days read from the Sunday cycle"""

    def test_ordinary_weekday_titles(self):
        """Test Ordinary Time weekday titles in every supported language"""
        self.assertTrue(is_ordinary_weekday('Pondelok 3. týždňa v Cezročnom období'))
        self.assertTrue(is_ordinary_weekday('Úterý 2. týdne v mezidobí'))
        self.assertTrue(is_ordinary_weekday('Monday of the 3rd week in Ordinary Time'))
        self.assertTrue(is_ordinary_weekday('Lunes de la 2ª semana del Tiempo Ordinario'))
        self.assertFalse(is_ordinary_weekday('Nanebovzatie Panny Márie'))
        self.assertFalse(is_ordinary_weekday(''))

    def test_seasonal_weekdays_are_not_ordinary(self):
        """Test weekdays of Lent, Advent and Easter are not Ordinary Time weekdays"""
        self.assertFalse(is_ordinary_weekday('Pondelok 3. týždňa v Pôstnom období'))
        self.assertFalse(is_ordinary_weekday('Úterý 2. týdne postní doby'))
        self.assertFalse(is_ordinary_weekday('Monday of the 3rd week of Lent'))
        self.assertFalse(is_ordinary_weekday('Lunes de la 2ª semana de Adviento'))

    def test_ranked_seasonal_weekday_is_special(self):
        """Test a Lent weekday ranked above an ordinary weekday is special"""
        self.assertTrue(is_special_day('Pondelok 3. týždňa v Pôstnom období', 2.9))
        self.assertFalse(is_special_day('Pondelok 3. týždňa v Pôstnom období', None))

    def test_sunday_is_special(self):
        """Test Sundays are special regardless of rank"""
        self.assertTrue(is_special_day('3. nedeľa v Cezročnom období', None))
        self.assertTrue(is_special_day('Second Sunday of Advent', 1.0))

    def test_ranked_celebration_is_special(self):
        """Test a feast ranked above a weekday is special"""
        self.assertTrue(is_special_day('Nanebovzatie Panny Márie', 1.3))

    def test_weekday_never_special(self):
        """Test weekday titles stay ordinary even with a rank"""
        self.assertFalse(is_special_day('Streda 5. týždňa v Cezročnom období', 3.13))

    def test_reading_cycle(self):
        """Test special days use the year cycle and weekdays use N"""
        year = TestDataFactory.create_liturgical_year(2025)
        sunday = TestDataFactory.create_calendar_day(date(2025, 3, 2), liturgical_year=year,
                                                     celebration_title='8. nedeľa v Cezročnom období')
        weekday = TestDataFactory.create_calendar_day(date(2025, 3, 3), liturgical_year=year)
        lent = TestDataFactory.create_calendar_day(date(2025, 3, 24), liturgical_year=year,
                                                   celebration_title='Pondelok 3. týždňa v Pôstnom období',
                                                   celebration_rank_num=2.9)
        self.assertEqual(reading_cycle(sunday, year), 'C')
        self.assertEqual(reading_cycle(weekday, year), 'N')
        self.assertEqual(reading_cycle(lent, year), 'C')


class CalendarLookupTests(TestCase):
    """Test day lookup with language fallback"""

    def test_requested_language(self):
        """Test the requested language is used when present"""
        TestDataFactory.create_calendar_day(date(2025, 3, 3), locale_code='en')
        day, lang = find_calendar_day(date(2025, 3, 3), 'en')
        self.assertEqual(lang, 'en')
        self.assertEqual(day.locale_code, 'en')

    def test_fallback_to_slovak(self):
        """Test missing languages fall back to Slovak"""
        TestDataFactory.create_calendar_day(date(2025, 3, 3), locale_code='sk')
        day, lang = find_calendar_day(date(2025, 3, 3), 'es')
        self.assertEqual(lang, 'sk')
        self.assertIsNotNone(day)

    def test_missing_day(self):
        """Test no day in any language"""
        day, lang = find_calendar_day(date(2025, 3, 3), 'en')
        self.assertIsNone(day)
        self.assertEqual(lang, 'en')

    def test_day_from_remote(self):
        """Test building a day from a CalAPI payload with an alternative celebration"""
        payload = remote_day(date(2025, 12, 8), title='Panny Marie počaté bez poskvrny', rank_num=1.3)
        payload['celebrations'].append({'title': 'Alt', 'rank': 'memorial', 'rank_num': 3.1, 'colour': 'white'})
        day = calendar_day_from_remote(payload, 'sk')
        self.assertEqual(day.date, date(2025, 12, 8))
        self.assertEqual(day.celebration_rank_num, 1.3)
        self.assertEqual(day.alternative_celebration_title, 'Alt')
        self.assertFalse(day.is_custom_edit)


class CalAPIClientTests(TestCase):
    """Test the remote calendar client"""

    def make_client(self, response=None, side_effect=None):
        session = mock.Mock()
        session.get.return_value = response
        session.get.side_effect = side_effect
        return CalAPIClient(base_url='http://calapi.test/api/v0', calendar='czech', timeout=5, session=session), session

    def test_builds_url(self):
        """Test the request path includes language, calendar and date parts"""
        response = mock.Mock(status_code=200)
        response.json.return_value = remote_day(date(2025, 12, 8))
        client, session = self.make_client(response)
        client.day(2025, 12, 8, 'cs')
        self.assertEqual(session.get.call_args[0][0], 'http://calapi.test/api/v0/cs/calendars/czech/2025/12/8')

    def test_invalid_language(self):
        """Test unsupported languages are rejected before any request"""
        client, session = self.make_client()
        with self.assertRaises(ValueError):
            client.today('sk')
        session.get.assert_not_called()

    def test_http_error(self):
        """Test non-200 responses raise a service error"""
        client, _ = self.make_client(mock.Mock(status_code=503, reason='Service Unavailable'))
        with self.assertRaises(CalendarServiceError) as context:
            client.today('cs')
        self.assertEqual(context.exception.status_code, 503)

    def test_timeout(self):
        """Test timeouts raise a service error"""
        client, _ = self.make_client(side_effect=requests.exceptions.Timeout())
        with self.assertRaises(CalendarServiceError):
            client.today('cs')

    def test_year_skips_failed_months(self):
        """Test a failing month does not abort the whole year"""
        client = CalAPIClient(base_url='http://calapi.test', session=mock.Mock())
        with mock.patch.object(client, 'month') as month:
            month.side_effect = [[{'date': '2025-01-01'}], CalendarServiceError('down')] + [[]] * 10
            days = client.year(2025, 'cs')
        self.assertEqual(len(days), 1)

    def test_lectionary(self):
        """Test the lectionary summary shape"""
        response = mock.Mock(status_code=200)
        response.json.return_value = {'lectionary': 'C', 'ferial_lectionary': 1}
        client, _ = self.make_client(response)
        self.assertEqual(client.lectionary(2025, 'cs'), {'year': 2025, 'lectionary': 'C', 'ferial_lectionary': 1})

    def test_multi_day_collects_failures(self):
        """Test one failing language is reported without losing the others"""
        client = CalAPIClient(base_url='http://calapi.test', session=mock.Mock())
        with mock.patch.object(client, 'day') as day:
            day.side_effect = [remote_day(date(2025, 12, 8)), CalendarServiceError('CalAPI error: 500')]
            days, errors = client.multi_day(2025, 12, 8, ['cs', 'la'])
        self.assertEqual(list(days), ['cs'])
        self.assertEqual(errors, {'la': 'CalAPI error: 500'})


class CalendarProxyAPITests(TestCase):
    """Test the CalAPI proxy endpoint"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()

    @mock.patch('divina.liturgy.views.CalAPIClient')
    def test_day(self, client_class):
        """Test the default action returns one remote day"""
        client_class.return_value.day.return_value = remote_day(date(2025, 12, 8))
        response = self.client.get('/api/v1/liturgical-calendar/', {'year': 2025, 'month': 12, 'day': 8})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['date'], '2025-12-08')
        client_class.return_value.day.assert_called_once_with(2025, 12, 8, 'cs')

    def test_invalid_language(self):
        """Test unsupported proxy languages"""
        response = self.client.get('/api/v1/liturgical-calendar/', {'action': 'today', 'lang': 'sk'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_parameters(self):
        """Test the month action needs year and month"""
        response = self.client.get('/api/v1/liturgical-calendar/', {'action': 'month', 'year': 2025})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_action(self):
        """Test unknown actions"""
        response = self.client.get('/api/v1/liturgical-calendar/', {'action': 'week'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @mock.patch('divina.liturgy.views.CalAPIClient')
    def test_remote_failure(self, client_class):
        """Test remote failures map to 502"""
        client_class.return_value.today.side_effect = CalendarServiceError('Calendar service timed out')
        response = self.client.get('/api/v1/liturgical-calendar/', {'action': 'today'})
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)

    @mock.patch('divina.liturgy.views.CalAPIClient')
    def test_multi_language_day(self, client_class):
        """Test the same day from several languages with per-language errors"""
        client_class.return_value.multi_day.return_value = (
            {'cs': remote_day(date(2025, 12, 8)), 'en': remote_day(date(2025, 12, 8), title='Immaculate Conception')},
            {'la': 'CalAPI error: 500'},
        )
        response = self.client.get('/api/v1/liturgical-calendar/', {
            'action': 'multi', 'year': 2025, 'month': 12, 'day': 8, 'langs': 'cs, EN,la',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['date'], '2025-12-08')
        self.assertEqual(sorted(response.data['days']), ['cs', 'en'])
        self.assertEqual(response.data['errors'], {'la': 'CalAPI error: 500'})
        client_class.return_value.multi_day.assert_called_once_with(2025, 12, 8, ['cs', 'en', 'la'])

    @mock.patch('divina.liturgy.views.CalAPIClient')
    def test_multi_language_all_failed(self, client_class):
        client_class.return_value.multi_day.return_value = ({}, {'cs': 'down', 'en': 'down'})
        response = self.client.get('/api/v1/liturgical-calendar/', {
            'action': 'multi', 'year': 2025, 'month': 12, 'day': 8, 'langs': 'cs,en',
        })
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['days'], {})

    def test_multi_language_rejects_unsupported(self):
        response = self.client.get('/api/v1/liturgical-calendar/', {
            'action': 'multi', 'year': 2025, 'month': 12, 'day': 8, 'langs': 'cs,sk',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('sk', response.data['error'])


class CalendarDatabaseAPITests(TestCase):
    """Test the stored calendar endpoint"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.year = TestDataFactory.create_liturgical_year(2025)
        TestDataFactory.create_calendar_day(date(2025, 3, 2), liturgical_year=self.year,
                                            celebration_title='8. nedeľa v Cezročnom období')
        TestDataFactory.create_calendar_day(date(2025, 3, 3), liturgical_year=self.year)
        TestDataFactory.create_calendar_day(date(2025, 4, 1), liturgical_year=self.year)

    def test_lectionary(self):
        """Test the stored lectionary of a year"""
        response = self.client.get('/api/v1/liturgical-calendar/db/', {'action': 'lectionary', 'year': 2025})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['lectionary'], 'C')

    def test_lectionary_missing_year(self):
        """Test an unknown year is 404"""
        response = self.client.get('/api/v1/liturgical-calendar/db/', {'action': 'lectionary', 'year': 2030})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_month(self):
        """Test a month returns its stored days in order"""
        response = self.client.get('/api/v1/liturgical-calendar/db/', {'action': 'month', 'year': 2025, 'month': 3})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([day['date'] for day in response.data['days']], ['2025-03-02', '2025-03-03'])
        self.assertEqual(response.data['source'], 'database-pregenerated')

    def test_year(self):
        """Test a whole civil year"""
        response = self.client.get('/api/v1/liturgical-calendar/db/', {'action': 'year', 'year': 2025})
        self.assertEqual(response.data['total_days'], 3)

    def test_day(self):
        """Test one stored day with its celebrations"""
        response = self.client.get('/api/v1/liturgical-calendar/db/',
                                   {'action': 'day', 'year': 2025, 'month': 3, 'day': 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['celebrations'][0]['title'], '8. nedeľa v Cezročnom období')

    def test_day_missing(self):
        """Test a day that is not stored is 404"""
        response = self.client.get('/api/v1/liturgical-calendar/db/',
                                   {'action': 'day', 'year': 2025, 'month': 5, 'day': 1})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_date(self):
        """Test impossible dates are rejected"""
        response = self.client.get('/api/v1/liturgical-calendar/db/',
                                   {'action': 'day', 'year': 2025, 'month': 2, 'day': 30})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_edit_refreshes_cached_month(self):
        """Test editing a day drops the cached month"""
        self.client.get('/api/v1/liturgical-calendar/db/', {'action': 'month', 'year': 2025, 'month': 3})
        TestDataFactory.create_calendar_day(date(2025, 3, 4), liturgical_year=self.year)
        response = self.client.get('/api/v1/liturgical-calendar/db/', {'action': 'month', 'year': 2025, 'month': 3})
        self.assertEqual(len(response.data['days']), 3)


class CalendarAdminAPITests(TestCase):
    """Test calendar administration"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_editor())
        self.year = TestDataFactory.create_liturgical_year(2025)
        self.day = TestDataFactory.create_calendar_day(date(2025, 3, 3), liturgical_year=self.year, lectio_key=None)

    def test_edit_marks_custom(self):
        """Test editing a day flags it as a custom edit"""
        response = self.client.patch(f'/api/v1/admin/calendar-days/{self.day.id}/', {'lectio_key': 'MT5'},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.day.refresh_from_db()
        self.assertTrue(self.day.is_custom_edit)
        self.assertEqual(self.day.lectio_key, 'MT5')

    def test_missing_lectio_filter(self):
        """Test listing days without a lectio key"""
        TestDataFactory.create_calendar_day(date(2025, 3, 4), liturgical_year=self.year, lectio_key='MT2')
        response = self.client.get('/api/v1/admin/calendar-days/', {'missing_lectio': 'true'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['lectionary_cycle'], 'C')

    def test_anonymous_rejected(self):
        """Test admin endpoints need authentication"""
        self.client.logout()
        response = self.client.get('/api/v1/admin/calendar-days/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_plain_user_forbidden(self):
        """Test regular users cannot edit the calendar"""
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/liturgical-years/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class GenerateCalendarCommandTests(TestCase):
    """Test storing a CalAPI year"""

    @mock.patch('divina.liturgy.management.commands.generate_liturgical_calendar.CalAPIClient')
    def test_generate_keeps_custom_days(self, client_class):
        """Test regenerated days replace generated ones and keep custom edits"""
        TestDataFactory.create_calendar_day(date(2025, 3, 3), lectio_key='CUSTOM', is_custom_edit=True)
        TestDataFactory.create_calendar_day(date(2025, 3, 4), lectio_key='OLD')
        client_class.return_value.year.return_value = [
            remote_day(date(2025, 3, 3)),
            remote_day(date(2025, 3, 4)),
            remote_day(date(2025, 12, 8), title='Panny Marie počaté bez poskvrny', rank_num=1.3),
        ]

        call_command('generate_liturgical_calendar', '2025', stdout=StringIO())

        self.assertEqual(LiturgicalCalendarDay.objects.get(date=date(2025, 3, 3)).lectio_key, 'CUSTOM')
        regenerated = LiturgicalCalendarDay.objects.get(date=date(2025, 3, 4))
        self.assertIsNone(regenerated.lectio_key)
        self.assertEqual(regenerated.liturgical_year.year, 2025)
        self.assertEqual(LiturgicalCalendarDay.objects.get(date=date(2025, 12, 8)).liturgical_year.year, 2026)
        self.assertEqual(LiturgicalYear.objects.get(year=2026, locale_code='sk').lectionary_cycle, 'A')

    @mock.patch('divina.liturgy.management.commands.generate_liturgical_calendar.CalAPIClient')
    def test_generate_empty_year_fails(self, client_class):
        """Test an empty remote year aborts the command"""
        client_class.return_value.year.return_value = []
        with self.assertRaises(CommandError):
            call_command('generate_liturgical_calendar', '2025', stdout=StringIO())
