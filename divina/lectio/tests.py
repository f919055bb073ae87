"""
Tests for Lectio Divina readings
Tests: source resolution cascade, reading endpoints, audio playlists, source management and import
"""
from datetime import date
from django.test import TestCase
from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.lectio.models import LectioSource
from divina.lectio.playlist import PlaylistError, build_playlist, lectio_playlist, select_bible
from divina.lectio.services import (
    CalendarDayNotFound, ERROR_NO_LECTIO_KEY, ERROR_SOURCE_NOT_FOUND, ERROR_YEAR_NOT_FOUND,
    make_preview, resolve_lectio, source_lookup_order,
)

SUNDAY_TITLE = '8. nedeľa v Cezročnom období'


class SourceLookupOrderTests(TestCase):
    """Test the order in which (language, cycle) pairs are tried"""

    def test_weekday_in_slovak(self):
        """Test a Slovak weekday has a single attempt"""
        self.assertEqual(source_lookup_order('sk', 'N', False), [('sk', 'N')])

    def test_special_day_in_other_language(self):
        """Test special days fall back to the weekday cycle before Slovak"""
        self.assertEqual(
            source_lookup_order('en', 'C', True),
            [('en', 'C'), ('en', 'N'), ('sk', 'C'), ('sk', 'N')],
        )

    def test_weekday_in_other_language(self):
        self.assertEqual(source_lookup_order('cz', 'N', False), [('cz', 'N'), ('sk', 'N')])


class ResolveLectioTests(TestCase):
    """Test resolving a date to a lectio source"""

    def setUp(self):
        self.year = TestDataFactory.create_liturgical_year(2025)
        self.sunday = TestDataFactory.create_calendar_day(date(2025, 3, 2), liturgical_year=self.year,
                                                          lectio_key='LK6', celebration_title=SUNDAY_TITLE)
        self.weekday = TestDataFactory.create_calendar_day(date(2025, 3, 3), liturgical_year=self.year,
                                                           lectio_key='MK10')

    def test_weekday_uses_ordinary_cycle(self):
        """Test ordinary weekdays read cycle N"""
        source = TestDataFactory.create_lectio_source('MK10', cycle='N')
        resolution = resolve_lectio(date(2025, 3, 3), 'sk')
        self.assertEqual(resolution.source, source)
        self.assertEqual(resolution.cycle, 'N')
        self.assertFalse(resolution.special)

    def test_sunday_uses_year_cycle(self):
        """Test Sundays read the cycle of their liturgical year"""
        TestDataFactory.create_lectio_source('LK6', cycle='N')
        source = TestDataFactory.create_lectio_source('LK6', cycle='C')
        resolution = resolve_lectio(date(2025, 3, 2), 'sk')
        self.assertEqual(resolution.source, source)
        self.assertTrue(resolution.special)

    def test_sunday_falls_back_to_ordinary_cycle(self):
        """Test a special day without its cycle uses the weekday reading"""
        source = TestDataFactory.create_lectio_source('LK6', cycle='N')
        resolution = resolve_lectio(date(2025, 3, 2), 'sk')
        self.assertEqual(resolution.source, source)
        self.assertEqual(resolution.meta()['cycle'], 'N')

    def test_language_falls_back_to_slovak(self):
        """Test a missing translation uses the Slovak reading"""
        TestDataFactory.create_calendar_day(date(2025, 3, 3), locale_code='en', liturgical_year=self.year,
                                            lectio_key='MK10')
        source = TestDataFactory.create_lectio_source('MK10', lang='sk', cycle='N')
        resolution = resolve_lectio(date(2025, 3, 3), 'en')
        self.assertEqual(resolution.source, source)
        meta = resolution.meta()
        self.assertEqual(meta['requested_lang'], 'en')
        self.assertEqual(meta['lang'], 'sk')

    def test_requested_language_preferred(self):
        """Test the requested language wins when both exist"""
        TestDataFactory.create_calendar_day(date(2025, 3, 3), locale_code='en', liturgical_year=self.year,
                                            lectio_key='MK10')
        TestDataFactory.create_lectio_source('MK10', lang='sk')
        english = TestDataFactory.create_lectio_source('MK10', lang='en')
        self.assertEqual(resolve_lectio(date(2025, 3, 3), 'en').source, english)

    def test_missing_calendar_day(self):
        """Test a date without a calendar day raises"""
        with self.assertRaises(CalendarDayNotFound):
            resolve_lectio(date(2025, 6, 1), 'sk')

    def test_missing_lectio_key(self):
        """Test a day without a chapter key reports an error"""
        TestDataFactory.create_calendar_day(date(2025, 3, 4), liturgical_year=self.year, lectio_key=None)
        resolution = resolve_lectio(date(2025, 3, 4), 'sk')
        self.assertFalse(resolution.found)
        self.assertEqual(resolution.error, ERROR_NO_LECTIO_KEY)

    def test_missing_liturgical_year(self):
        """Test a day not linked to a liturgical year reports an error"""
        TestDataFactory.create_calendar_day(date(2025, 3, 4), lectio_key='MK10')
        resolution = resolve_lectio(date(2025, 3, 4), 'sk')
        self.assertEqual(resolution.error, ERROR_YEAR_NOT_FOUND)

    def test_missing_source(self):
        """Test no source in any language"""
        resolution = resolve_lectio(date(2025, 3, 3), 'sk')
        self.assertEqual(resolution.error, ERROR_SOURCE_NOT_FOUND)
        self.assertEqual(resolution.meta()['lectio_key'], 'MK10')

    def test_preview(self):
        """Test long text is cut with an ellipsis"""
        self.assertEqual(make_preview('short'), 'short')
        self.assertEqual(make_preview('x' * 400), 'x' * 300 + '...')
        self.assertEqual(make_preview(None), '')


class LectioAPITests(TestCase):
    """Test the public reading endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.year = TestDataFactory.create_liturgical_year(2025)
        TestDataFactory.create_calendar_day(date(2025, 3, 2), liturgical_year=self.year, lectio_key='LK6',
                                            celebration_title=SUNDAY_TITLE)
        self.source = TestDataFactory.create_lectio_source('LK6', cycle='C', lectio_text='Lectio text')

    def test_by_date(self):
        """Test a resolved reading with its metadata"""
        response = self.client.get('/api/v1/lectio/', {'date': '2025-03-02', 'lang': 'sk'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['id'], self.source.id)
        self.assertEqual(response.data['meta']['lectionary_cycle'], 'C')
        self.assertTrue(response.data['meta']['is_special_day'])

    def test_date_required(self):
        """Test the date parameter is mandatory"""
        response = self.client.get('/api/v1/lectio/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_date(self):
        response = self.client.get('/api/v1/lectio/', {'date': '2025-13-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar_day_not_found(self):
        """Test an unknown date is 404 with an empty payload"""
        response = self.client.get('/api/v1/lectio/', {'date': '2025-07-01'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIsNone(response.data['data'])
        self.assertEqual(response.data['error'], 'Calendar day not found')

    def test_source_not_found(self):
        """Test a day whose source is missing is 404 with metadata"""
        TestDataFactory.create_calendar_day(date(2025, 3, 3), liturgical_year=self.year, lectio_key='MK10')
        response = self.client.get('/api/v1/lectio/', {'date': '2025-03-03'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], ERROR_SOURCE_NOT_FOUND)
        self.assertEqual(response.data['meta']['lectio_key'], 'MK10')

    def test_edit_refreshes_cached_reading(self):
        """Test saving a source drops the cached reading"""
        self.client.get('/api/v1/lectio/', {'date': '2025-03-02'})
        self.source.lectio_text = 'Updated text'
        self.source.save()
        response = self.client.get('/api/v1/lectio/', {'date': '2025-03-02'})
        self.assertEqual(response.data['data']['lectio_text'], 'Updated text')

    def test_today_uses_checked_sources(self):
        """Test the daily preview hides unchecked sources"""
        today = timezone.localdate()
        TestDataFactory.create_calendar_day(today, liturgical_year=self.year, lectio_key='TODAY')
        TestDataFactory.create_lectio_source('TODAY', checked=False)
        response = self.client.get('/api/v1/lectio/today/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['liturgicalDay']['date'], today.isoformat())
        self.assertIsNone(response.data['lectio'])

    def test_today_preview(self):
        """Test the daily preview content"""
        today = timezone.localdate()
        TestDataFactory.create_calendar_day(today, liturgical_year=self.year, lectio_key='TODAY')
        TestDataFactory.create_lectio_source('TODAY', lectio_text='y' * 500, meditatio_text='Meditatio')
        response = self.client.get('/api/v1/lectio/today/')
        lectio = response.data['lectio']
        self.assertEqual(len(lectio['lectio_preview']), 303)
        self.assertTrue(lectio['has_meditatio'])
        self.assertFalse(lectio['has_oratio'])

    def test_today_missing(self):
        """Test no calendar entry for today"""
        response = self.client.get('/api/v1/lectio/today/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class PlaylistTests(TestCase):
    """Test audio playlists and interludes"""

    def sections(self):
        return [
            {'key': 'prayer', 'label': 'Prayer', 'url': '', 'slide': None},
            {'key': 'bible_1', 'label': 'Bible', 'url': 'https://audio.test/bible.mp3', 'slide': 0},
            {'key': 'lectio', 'label': 'Lectio', 'url': 'https://audio.test/lectio.mp3', 'slide': 1},
            {'key': 'contemplatio', 'label': 'Contemplatio', 'url': 'https://audio.test/c.mp3', 'slide': 4},
            {'key': 'actio', 'label': 'Actio', 'url': 'https://audio.test/actio.mp3', 'slide': 5},
        ]

    def test_no_interludes(self):
        """Test sections without audio are dropped"""
        tracks = build_playlist(self.sections(), 'none')
        self.assertEqual([track['key'] for track in tracks], ['bible_1', 'lectio', 'contemplatio', 'actio'])

    def test_short_mode(self):
        """Test short interludes with a long one after contemplatio"""
        tracks = build_playlist(self.sections(), 'short', 'en')
        interludes = [track for track in tracks if track['kind'] == 'interlude']
        self.assertEqual([track['variant'] for track in interludes], ['short', 'short', 'long'])
        self.assertEqual([track['slide'] for track in interludes], [1, 4, 5])
        self.assertEqual(tracks[-1]['key'], 'actio')

    def test_long_mode(self):
        tracks = build_playlist(self.sections(), 'long')
        self.assertEqual(len(tracks), 7)
        self.assertTrue(all(track['variant'] == 'long' for track in tracks if track['kind'] == 'interlude'))

    def test_invalid_mode(self):
        with self.assertRaises(PlaylistError):
            build_playlist(self.sections(), 'loud')

    def test_select_bible(self):
        """Test an empty requested translation falls back to one with text"""
        source = TestDataFactory.create_lectio_source('MK1', bible_1='', bible_2='Text 2')
        self.assertEqual(select_bible(source, 'bible_3'), 'bible_2')
        self.assertEqual(select_bible(source, 'bible_2'), 'bible_2')

    def test_lectio_playlist(self):
        """Test the tracks built from a source"""
        source = TestDataFactory.create_lectio_source('MK1', bible_1_audio='https://audio.test/b1.mp3',
                                                      oratio_audio='https://audio.test/o.mp3')
        playlist = lectio_playlist(source, mode='short', lang='sk')
        self.assertEqual(playlist['bible'], 'bible_1')
        self.assertEqual([track['key'] for track in playlist['tracks']], ['bible_1', 'interlude', 'oratio'])

    def test_playlist_endpoint(self):
        """Test the playlist endpoint and its mode validation"""
        year = TestDataFactory.create_liturgical_year(2025)
        TestDataFactory.create_calendar_day(date(2025, 3, 3), liturgical_year=year, lectio_key='MK1')
        TestDataFactory.create_lectio_source('MK1', bible_1_audio='https://audio.test/b1.mp3')
        client = AuthenticatedAPIClient()

        response = client.get('/api/v1/lectio/playlist/', {'date': '2025-03-03', 'mode': 'long'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['tracks']), 1)
        self.assertEqual(response.data['meta']['lectio_key'], 'MK1')

        response = client.get('/api/v1/lectio/playlist/', {'date': '2025-03-03', 'mode': 'loud'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class LectioSourceAPITests(TestCase):
    """Test source listing, management and import"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        TestDataFactory.create_lectio_source('MT1', cycle='N', book='Matúš')
        TestDataFactory.create_lectio_source('LK6', cycle='C', book='Lukáš', scripture_reference='Lk 6, 39-45')
        TestDataFactory.create_lectio_source('LK6', lang='en', cycle='C', book='Luke', checked=False)

    def test_public_list_filters(self):
        """Test filtering by language, cycle and search"""
        response = self.client.get('/api/v1/lectio-sources/', {'lang': 'sk', 'cycle': 'c'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

        response = self.client.get('/api/v1/lectio-sources/', {'search': 'Lk 6'})
        self.assertEqual(response.data['count'], 1)

        response = self.client.get('/api/v1/lectio-sources/', {'checked': 'false'})
        self.assertEqual(response.data['results'][0]['book'], 'Luke')

    def test_admin_requires_editor(self):
        """Test plain users cannot manage sources"""
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/lectio-sources/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_create(self):
        """Test editors create sources and the change is audited"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.post('/api/v1/admin/lectio-sources/',
                                    {'chapter_key': ' JN3 ', 'lang': 'sk', 'cycle': 'B'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['chapter_key'], 'JN3')
        self.assertTrue(AuditLog.objects.filter(model_name='LectioSource', action='create').exists())

    def test_admin_duplicate(self):
        """Test the chapter key, language and cycle are unique together"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.post('/api/v1/admin/lectio-sources/',
                                    {'chapter_key': 'MT1', 'lang': 'sk', 'cycle': 'N'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_import(self):
        """Test bulk import creates new and updates existing sources"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.post('/api/v1/admin/lectio-sources/import/', [
            {'chapter_key': 'MT1', 'lang': 'sk', 'cycle': 'N', 'lectio_text': 'Imported'},
            {'chapter_key': 'MT2', 'lang': 'sk', 'cycle': 'N'},
        ], format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'created': 1, 'updated': 1})
        self.assertEqual(LectioSource.objects.get(chapter_key='MT1', lang='sk').lectio_text, 'Imported')

    def test_import_rolls_back(self):
        """Test one invalid item rejects the whole import"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.post('/api/v1/admin/lectio-sources/import/', [
            {'chapter_key': 'MT2', 'lang': 'sk', 'cycle': 'N'},
            {'chapter_key': 'MT3', 'lang': 'sk', 'cycle': 'X'},
        ], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('1', {str(key) for key in response.data['details']})
        self.assertFalse(LectioSource.objects.filter(chapter_key='MT2').exists())

    def test_import_requires_list(self):
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.post('/api/v1/admin/lectio-sources/import/', {'chapter_key': 'MT2'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
