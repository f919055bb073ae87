"""
Tests for languages, translations and locale management
"""
from io import StringIO
from django.test import TestCase, RequestFactory
from django.core.cache import cache
from django.core.management import call_command
from django.contrib.auth.models import AnonymousUser
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.i18n.models import Locale
from divina.i18n.translations import (
    get_translations, normalize_language, parse_accept_language, resolve_language, translate,
)


class LanguageResolutionTests(TestCase):
    """Test language code handling"""

    def setUp(self):
        self.factory = RequestFactory()

    def test_normalize_language(self):
        """Test aliases and regional tags map to supported codes"""
        self.assertEqual(normalize_language('cs'), 'cz')
        self.assertEqual(normalize_language('sk-SK'), 'sk')
        self.assertEqual(normalize_language('EN_us'), 'en')
        self.assertIsNone(normalize_language('de'))
        self.assertIsNone(normalize_language(''))

    def test_accept_language_quality(self):
        """Test the highest weighted supported language wins"""
        self.assertEqual(parse_accept_language('de;q=1.0, en;q=0.5, cs;q=0.8'), 'cz')
        self.assertIsNone(parse_accept_language('de, fr'))

    def test_query_parameter_wins(self):
        """Test an explicit lang parameter overrides the header"""
        request = self.factory.get('/', {'lang': 'es'}, HTTP_ACCEPT_LANGUAGE='en')
        request.user = AnonymousUser()
        self.assertEqual(resolve_language(request), 'es')

    def test_user_preference_before_header(self):
        """Test the user's preferred language beats Accept-Language"""
        request = self.factory.get('/', HTTP_ACCEPT_LANGUAGE='en')
        request.user = TestDataFactory.create_user(preferred_language='cz')
        self.assertEqual(resolve_language(request), 'cz')

    def test_default_language(self):
        """Test Slovak is used without any hint"""
        request = self.factory.get('/')
        request.user = AnonymousUser()
        self.assertEqual(resolve_language(request), 'sk')


class TranslationTests(TestCase):
    """Test translation lookup and fallback"""

    def test_translate(self):
        """Test a key in each language"""
        self.assertEqual(translate('rosary.joyful', 'en'), 'Joyful Mysteries')
        self.assertEqual(translate('rosary.joyful', 'cs'), 'Radostná tajemství')

    def test_unknown_language_falls_back_to_slovak(self):
        """Test unsupported languages use Slovak"""
        self.assertEqual(translate('rosary.joyful', 'de'), 'Radostné tajomstvá')

    def test_unknown_key_returns_key(self):
        """Test missing keys come back unchanged"""
        self.assertEqual(translate('missing.key', 'en'), 'missing.key')

    def test_tables_share_keys(self):
        """Test every language table covers the Slovak keys"""
        slovak_keys = set(get_translations('sk'))
        for lang in ['cz', 'en', 'es']:
            self.assertEqual(set(get_translations(lang)), slovak_keys)


class LocaleAPITests(TestCase):
    """Test public and admin locale endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        TestDataFactory.create_locale('sk', 'Slovak', 'Slovenčina')
        TestDataFactory.create_locale('en', 'English', 'English')
        TestDataFactory.create_locale('es', 'Spanish', 'Español', is_active=False)

    def test_public_list_only_active(self):
        """Test inactive locales are hidden from readers"""
        response = self.client.get('/api/v1/locales/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(item['code'] for item in response.data), ['en', 'sk'])

    def test_translation_table(self):
        """Test the translation endpoint returns the requested table"""
        response = self.client.get('/api/v1/translations/', {'lang': 'en'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['lang'], 'en')
        self.assertEqual(response.data['translations']['rosary.joyful'], 'Joyful Mysteries')

    def test_translation_table_unsupported(self):
        """Test an unsupported explicit language is rejected"""
        response = self.client.get('/api/v1/translations/', {'lang': 'de'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_create_locale(self):
        """Test admins can add a locale and the change is audited"""
        self.client.authenticate_user(TestDataFactory.create_admin())
        response = self.client.post('/api/v1/admin/locales/', {'code': 'cz', 'name': 'Czech'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(AuditLog.objects.filter(model_name='Locale', action='create').exists())

    def test_admin_requires_admin_role(self):
        """Test editors cannot manage locales"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.get('/api/v1/admin/locales/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_new_locale_visible_after_save(self):
        """Test saving a locale refreshes the cached public list"""
        self.client.get('/api/v1/locales/')
        Locale.objects.filter(code='es').update(is_active=True)
        Locale.objects.get(code='es').save()
        response = self.client.get('/api/v1/locales/')
        self.assertEqual(len(response.data), 3)


class SeedLocalesCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        """Test running the command twice creates four locales"""
        call_command('seed_locales', stdout=StringIO())
        call_command('seed_locales', stdout=StringIO())
        self.assertEqual(Locale.objects.count(), 4)
