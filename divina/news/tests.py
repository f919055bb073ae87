"""
Tests for news
Tests: public list shape, filters and search, pagination, administration
"""
from datetime import datetime, timezone as dt_timezone
from django.test import TestCase
from django.core.cache import cache
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.news.models import News


def noon(year, month, day):
    return datetime(year, month, day, 12, 0, tzinfo=dt_timezone.utc)


class NewsListAPITests(TestCase):
    """Test the public news list"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.old = TestDataFactory.create_news('Púť do Šaštína', published_at=noon(2025, 1, 10),
                                               summary='Národná púť', content='Program púte')
        self.middle = TestDataFactory.create_news('Adventná duchovná obnova', published_at=noon(2025, 2, 15),
                                                  summary='Obnova pred Vianocami', content='Prihlásiť sa')
        self.new = TestDataFactory.create_news('Nová aplikácia', published_at=noon(2025, 3, 20),
                                               summary='Lectio Divina v mobile', content='Stiahnite si púť')
        TestDataFactory.create_news('Pilgrimage', lang='en', published_at=noon(2025, 3, 21))

    def test_shape_and_order(self):
        """Test newest first with pagination metadata"""
        response = self.client.get('/api/v1/news/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data['data']], [self.new.id, self.middle.id, self.old.id])
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['page'], 1)
        self.assertEqual(response.data['limit'], 20)
        self.assertEqual(response.data['totalPages'], 1)

    def test_language(self):
        response = self.client.get('/api/v1/news/', {'lang': 'en'})
        self.assertEqual(response.data['total'], 1)
        self.assertEqual(response.data['data'][0]['title'], 'Pilgrimage')

    def test_pagination(self):
        response = self.client.get('/api/v1/news/', {'page': 2, 'limit': 2})
        self.assertEqual(response.data['totalPages'], 2)
        self.assertEqual([item['id'] for item in response.data['data']], [self.old.id])

    def test_page_past_end(self):
        """Test pages past the end are empty"""
        response = self.client.get('/api/v1/news/', {'page': 9})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'], [])
        self.assertEqual(response.data['total'], 3)

    def test_invalid_paging_uses_defaults(self):
        response = self.client.get('/api/v1/news/', {'page': 'x', 'limit': 500})
        self.assertEqual(response.data['page'], 1)
        self.assertEqual(response.data['limit'], 100)

    def test_individual_filters(self):
        response = self.client.get('/api/v1/news/', {'title': 'obnova'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.middle.id])

        response = self.client.get('/api/v1/news/', {'summary': 'mobile'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.new.id])

    def test_date_range_is_inclusive(self):
        """Test both range ends include their whole day"""
        response = self.client.get('/api/v1/news/', {'dateFrom': '2025-02-15', 'dateTo': '2025-03-20'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.new.id, self.middle.id])

    def test_search_overrides_filters(self):
        """Test a global search ignores the individual filters"""
        response = self.client.get('/api/v1/news/', {'search': 'púť', 'title': 'aplikácia', 'dateTo': '2025-01-31'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.new.id, self.old.id])

    def test_invalid_date(self):
        response = self.client.get('/api/v1/news/', {'dateFrom': 'yesterday'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_new_item_visible(self):
        """Test creating news drops cached pages"""
        self.client.get('/api/v1/news/')
        TestDataFactory.create_news('Najnovšia', published_at=noon(2025, 4, 1))
        response = self.client.get('/api/v1/news/')
        self.assertEqual(response.data['total'], 4)
        self.assertEqual(response.data['data'][0]['title'], 'Najnovšia')

    def test_detail(self):
        response = self.client.get(f'/api/v1/news/{self.old.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary'], 'Národná púť')

    def test_detail_missing(self):
        response = self.client.get('/api/v1/news/99999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class NewsAdminAPITests(TestCase):
    """Test news administration"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_editor())
        self.news = TestDataFactory.create_news('Oznam')

    def test_create(self):
        response = self.client.post('/api/v1/admin/news/', {'title': 'Nový oznam', 'lang': 'cz'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNotNone(response.data['published_at'])
        self.assertTrue(AuditLog.objects.filter(model_name='News', action='create').exists())

    def test_blank_title(self):
        response = self.client.post('/api/v1/admin/news/', {'title': '  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_is_paginated(self):
        response = self.client.get('/api/v1/admin/news/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_update(self):
        response = self.client.patch(f'/api/v1/admin/news/{self.news.id}/', {'summary': 'Zhrnutie'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(News.objects.get(pk=self.news.id).summary, 'Zhrnutie')

    def test_delete(self):
        response = self.client.delete(f'/api/v1/admin/news/{self.news.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(News.objects.filter(pk=self.news.id).exists())

    def test_plain_user_cannot_write(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.post('/api/v1/admin/news/', {'title': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
