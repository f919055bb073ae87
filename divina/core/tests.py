"""
Tests for the core module
Tests: authentication, role flags, user and setting management, audit logs, caching helpers and search
"""
from unittest import mock
from django.test import TestCase
from django.core.cache import cache
from django.core.management import call_command
from django.contrib.auth.models import Group
from rest_framework import status
from io import StringIO
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog, Setting
from divina.core.permissions import get_role_flags, is_admin_user, is_editor_user
from divina.core.cache_utils import (
    cache_query, invalidate_resource_cache, make_cache_key, NEWS_PREFIX,
)
from divina.core.cache_signals import is_suspended, suspend_cache_signals
from divina.core.utils import create_audit_log, parse_bool, parse_positive_int


class RoleTests(TestCase):
    """Test group based roles"""

    def test_admin_group_grants_everything(self):
        """Test admin group members get all role flags"""
        flags = get_role_flags(TestDataFactory.create_admin())
        self.assertTrue(flags['is_admin'])
        self.assertTrue(flags['is_editor'])
        self.assertTrue(flags['can_manage_users'])

    def test_editor_is_not_admin(self):
        """Test editors can edit content but not manage users"""
        editor = TestDataFactory.create_editor()
        self.assertFalse(is_admin_user(editor))
        self.assertTrue(is_editor_user(editor))
        flags = get_role_flags(editor)
        self.assertTrue(flags['can_access_admin'])
        self.assertFalse(flags['can_manage_users'])
        self.assertFalse(flags['can_view_audit_logs'])

    def test_staff_without_group_falls_back_to_admin(self):
        """Test staff users without an application group are admins"""
        self.assertTrue(is_admin_user(TestDataFactory.create_user(is_staff=True)))

    def test_staff_with_group_uses_group(self):
        """Test staff users in the editor group are not admins"""
        user = TestDataFactory.create_user(is_staff=True, groups=['Editor'])
        self.assertFalse(is_admin_user(user))

    def test_plain_user_has_no_roles(self):
        """Test regular users have no admin access"""
        flags = get_role_flags(TestDataFactory.create_user())
        self.assertFalse(flags['can_access_admin'])
        self.assertFalse(flags['can_edit_content'])


class AuthAPITests(TestCase):
    """Test registration, login and the current user endpoint"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_register(self):
        """Test registering returns tokens"""
        data = {
            'username': 'novak',
            'email': 'novak@example.com',
            'password': 'Lectio-Divina-2025',
            'password_confirm': 'Lectio-Divina-2025',
            'preferred_language': 'cz',
        }
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertEqual(response.data['user']['preferred_language'], 'cz')

    def test_register_password_mismatch(self):
        """Test registering with different passwords fails"""
        data = {
            'username': 'novak',
            'email': 'novak@example.com',
            'password': 'Lectio-Divina-2025',
            'password_confirm': 'Something-else-2025',
        }
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login(self):
        """Test logging in with username and password"""
        TestDataFactory.create_user(username='maria', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {'username': 'maria', 'password': 'testpass123'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_me_includes_role_flags(self):
        """Test the current user endpoint reports groups and flags"""
        editor = TestDataFactory.create_editor()
        self.client.authenticate_user(editor)
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['groups'], ['Editor'])
        self.assertTrue(response.data['is_editor'])
        self.assertFalse(response.data['is_admin'])

    def test_me_update_preferred_language(self):
        """Test users can change their own preferred language"""
        user = TestDataFactory.create_user()
        self.client.authenticate_user(user)
        response = self.client.patch('/api/v1/auth/me/', {'preferred_language': 'en'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertEqual(user.preferred_language, 'en')

    def test_me_requires_authentication(self):
        """Test anonymous users are rejected"""
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserManagementAPITests(TestCase):
    """Test user administration"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_list_users_requires_admin(self):
        """Test editors cannot list users"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.get('/api/v1/admin/users/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_user_is_audited(self):
        """Test creating a user writes an audit entry"""
        data = {
            'username': 'jan',
            'email': 'jan@example.com',
            'password': 'Lectio-Divina-2025',
            'password_confirm': 'Lectio-Divina-2025',
        }
        response = self.client.post('/api/v1/admin/users/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(AuditLog.objects.filter(action='create', model_name='User', object_name='jan').exists())

    def test_cannot_delete_self(self):
        """Test admins cannot delete their own account"""
        response = self.client.delete(f'/api/v1/admin/users/{self.admin.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_user(self):
        """Test deleting another user"""
        other = TestDataFactory.create_user()
        response = self.client.delete(f'/api/v1/admin/users/{other.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class SettingAPITests(TestCase):
    """Test runtime settings"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())

    def test_create_and_update_setting(self):
        """Test creating and patching a setting"""
        response = self.client.post('/api/v1/admin/settings/', {'key': 'donation_url', 'value': 'https://example.com'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        setting_id = response.data['id']

        response = self.client.patch(f'/api/v1/admin/settings/{setting_id}/', {'value': 'https://example.org'},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Setting.objects.get(pk=setting_id).value, 'https://example.org')


class AuditLogAPITests(TestCase):
    """Test audit log visibility and filters"""

    def setUp(self):
        self.editor = TestDataFactory.create_editor()
        self.other = TestDataFactory.create_editor()
        create_audit_log(action='create', model_name='News', object_id=1, user=self.editor, object_name='A')
        create_audit_log(action='delete', model_name='News', object_id=2, user=self.other, object_name='B')
        self.client = AuthenticatedAPIClient()

    def test_editor_sees_only_own_entries(self):
        """Test non-moderators only see their own audit entries"""
        self.client.authenticate_user(self.editor)
        response = self.client.get('/api/v1/admin/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['object_name'], 'A')

    def test_moderator_sees_all_and_filters(self):
        """Test moderators see every entry and can filter by action"""
        self.client.authenticate_user(TestDataFactory.create_moderator())
        response = self.client.get('/api/v1/admin/audit-logs/')
        self.assertEqual(response.data['count'], 2)
        response = self.client.get('/api/v1/admin/audit-logs/', {'action': 'delete'})
        self.assertEqual(response.data['count'], 1)

    def test_detail_of_other_user_forbidden(self):
        """Test editors cannot read another user's audit entry"""
        entry = AuditLog.objects.get(object_name='B')
        self.client.authenticate_user(self.editor)
        response = self.client.get(f'/api/v1/admin/audit-logs/{entry.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_audit_log_skips_missing_fields(self):
        """Test incomplete audit entries are skipped, not raised"""
        self.assertIsNone(create_audit_log(action='create', model_name='News', object_id=None))


class CacheUtilsTests(TestCase):
    """Test cache helpers and signal driven invalidation"""

    def setUp(self):
        cache.clear()

    def test_cache_query_reads_through(self):
        """Test the fetch function runs once per key"""
        fetch = mock.Mock(return_value={'value': 1})
        self.assertEqual(cache_query('cache:test:key', fetch, 60), {'value': 1})
        self.assertEqual(cache_query('cache:test:key', fetch, 60), {'value': 1})
        fetch.assert_called_once()

    def test_cache_query_survives_cache_errors(self):
        """Test a broken cache falls back to fetching"""
        with mock.patch('divina.core.cache_utils.cache.get', side_effect=ConnectionError('down')):
            self.assertEqual(cache_query('cache:test:key', lambda: 'fresh', 60), 'fresh')

    def test_make_cache_key_is_stable(self):
        """Test keyword order does not change the key"""
        self.assertEqual(
            make_cache_key(NEWS_PREFIX, lang='sk', page=1),
            make_cache_key(NEWS_PREFIX, page=1, lang='sk'),
        )
        self.assertTrue(make_cache_key(NEWS_PREFIX, lang='sk').startswith(NEWS_PREFIX))

    def test_invalidate_unknown_resource(self):
        """Test unknown resources are rejected"""
        with self.assertRaises(ValueError):
            invalidate_resource_cache('unknown')

    def test_model_save_invalidates_cache(self):
        """Test saving news drops cached news"""
        cache.set(f'{NEWS_PREFIX}:list:abc', ['stale'], 60)
        TestDataFactory.create_news()
        self.assertIsNone(cache.get(f'{NEWS_PREFIX}:list:abc'))

    def test_suspended_signals_keep_cache(self):
        """Test suspended signals leave the cache alone"""
        cache.set(f'{NEWS_PREFIX}:list:abc', ['cached'], 60)
        with suspend_cache_signals():
            self.assertTrue(is_suspended())
            TestDataFactory.create_news()
        self.assertFalse(is_suspended())
        self.assertEqual(cache.get(f'{NEWS_PREFIX}:list:abc'), ['cached'])


class UtilsTests(TestCase):
    """Test request parsing helpers"""

    def test_parse_positive_int(self):
        """Test invalid and out of range values fall back"""
        self.assertEqual(parse_positive_int('5', 1), 5)
        self.assertEqual(parse_positive_int('abc', 1), 1)
        self.assertEqual(parse_positive_int('-3', 1), 1)
        self.assertEqual(parse_positive_int('500', 20, maximum=100), 100)

    def test_parse_bool(self):
        """Test boolean query values"""
        self.assertTrue(parse_bool('true'))
        self.assertFalse(parse_bool('0'))
        self.assertIsNone(parse_bool('maybe'))
        self.assertIsNone(parse_bool(None))


class GlobalSearchAPITests(TestCase):
    """Test cross-content search"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_editor())

    def test_search_across_content(self):
        """Test one query reaches every searchable content type"""
        TestDataFactory.create_news(title='Advent retreat announced')
        TestDataFactory.create_program(title='Advent with Mary')
        TestDataFactory.create_rosary_decade(title='Advent mystery')
        TestDataFactory.create_lectio_source(chapter_key='ADVENT1')
        TestDataFactory.create_article(title='Advent at home', status='draft')
        TestDataFactory.create_exercise(title='Advent retreat weekend')
        response = self.client.get('/api/v1/admin/search/', {'q': 'advent'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['news']), 1)
        self.assertEqual(len(response.data['articles']), 1)
        self.assertEqual(len(response.data['spiritual_exercises']), 1)
        self.assertEqual(len(response.data['programs']), 1)
        self.assertEqual(len(response.data['rosary']), 1)
        self.assertEqual(len(response.data['lectio_sources']), 1)

    def test_empty_query(self):
        """Test an empty query returns empty lists"""
        response = self.client.get('/api/v1/admin/search/')
        self.assertEqual(response.data['news'], [])


class CreateUserGroupsCommandTests(TestCase):
    """Test the group setup command"""

    def test_creates_groups(self):
        """Test the three application groups exist afterwards"""
        call_command('create_user_groups', stdout=StringIO())
        names = set(Group.objects.values_list('name', flat=True))
        self.assertTrue({'Admin', 'Editor', 'Moderator'} <= names)
        self.assertTrue(Group.objects.get(name='Editor').permissions.filter(codename='add_news').exists())
