"""
Tests for the rosary
Tests: navigation across categories, slides, overview and decade endpoints, administration
"""
from django.test import TestCase
from django.core.cache import cache
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.rosary.services import (
    decade_slides, format_duration, get_decade, lectio_steps, navigation, title_before_dash,
)


class RosaryServiceTests(TestCase):
    """Test rosary structure helpers"""

    def test_format_duration(self):
        self.assertEqual(format_duration(45), '45 min')
        self.assertEqual(format_duration(60), '1 h')
        self.assertEqual(format_duration(75), '1 h 15 min')

    def test_lectio_steps_total(self):
        """Test step minutes add up to the total"""
        steps = lectio_steps('en')
        self.assertEqual(len(steps['steps']), 6)
        self.assertEqual(steps['total_minutes'], 47)
        self.assertEqual(steps['total_duration'], '47 min')

    def test_navigation_within_category(self):
        nav = navigation('luminous', 3, 'en')
        self.assertEqual(nav['previous']['number'], 2)
        self.assertEqual(nav['next']['number'], 4)
        self.assertEqual(nav['next']['category'], 'luminous')

    def test_navigation_crosses_categories(self):
        """Test the fifth mystery continues with the next category"""
        nav = navigation('joyful', 5)
        self.assertEqual(nav['next'], {'category': 'luminous', 'category_name': 'Svetelné tajomstvá', 'number': 1})
        self.assertEqual(navigation('sorrowful', 1)['previous']['category'], 'luminous')
        self.assertEqual(navigation('sorrowful', 1)['previous']['number'], 5)

    def test_navigation_ends(self):
        """Test the first and last mysteries have no neighbour beyond the ends"""
        self.assertIsNone(navigation('joyful', 1)['previous'])
        self.assertIsNone(navigation('glorious', 5)['next'])

    def test_get_decade_by_position(self):
        """Test decades are numbered by order among published ones"""
        TestDataFactory.create_rosary_decade(order=1, is_published=False)
        second = TestDataFactory.create_rosary_decade(order=2)
        third = TestDataFactory.create_rosary_decade(order=3)
        self.assertEqual(get_decade('joyful', 1, 'sk'), second)
        self.assertEqual(get_decade('joyful', 2, 'sk'), third)
        self.assertIsNone(get_decade('joyful', 3, 'sk'))
        self.assertIsNone(get_decade('unknown', 1, 'sk'))

    def test_title_before_dash(self):
        self.assertEqual(title_before_dash('Zvestovanie – Lk 1, 26-38'), 'Zvestovanie')
        self.assertEqual(title_before_dash('Narodenie - Lk 2'), 'Narodenie')
        self.assertEqual(title_before_dash('Obetovanie'), 'Obetovanie')

    def test_slides_skip_empty_steps(self):
        """Test empty steps are left out while the intro falls back to the Bible text"""
        decade = TestDataFactory.create_rosary_decade(meditatio_text='Meditácia',
                                                      meditatio_audio='https://audio.test/m.mp3')
        slides = decade_slides(decade, 'sk')
        self.assertEqual([slide['key'] for slide in slides], ['intro', 'meditatio'])
        self.assertEqual(slides[0]['title'], 'Mystery joyful 1')
        self.assertEqual(slides[0]['text'], 'Anjel Gabriel bol poslaný...')
        self.assertIsNone(slides[0]['audio_url'])
        self.assertEqual(slides[1]['step'], '4/7')


class RosaryAPITests(TestCase):
    """Test the public rosary endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        for order in range(1, 7):
            TestDataFactory.create_rosary_decade('joyful', order=order)
        TestDataFactory.create_rosary_decade('glorious', order=1)
        TestDataFactory.create_rosary_decade('glorious', order=2, is_published=False)
        TestDataFactory.create_rosary_decade('glorious', lang='en', order=1)

    def test_overview(self):
        """Test counts are per language and capped at five"""
        response = self.client.get('/api/v1/rosary/', {'lang': 'sk'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        counts = {item['key']: item['decade_count'] for item in response.data['categories']}
        self.assertEqual(counts, {'joyful': 5, 'luminous': 0, 'sorrowful': 0, 'glorious': 1})
        self.assertEqual(response.data['lectio']['total_minutes'], 47)

    def test_overview_in_english(self):
        response = self.client.get('/api/v1/rosary/', {'lang': 'en'})
        self.assertEqual(response.data['categories'][0]['name'], 'Joyful Mysteries')
        counts = {item['key']: item['decade_count'] for item in response.data['categories']}
        self.assertEqual(counts['glorious'], 1)
        self.assertEqual(counts['joyful'], 0)

    def test_category(self):
        """Test a category lists at most five numbered decades"""
        response = self.client.get('/api/v1/rosary/joyful/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['number'] for item in response.data['decades']], [1, 2, 3, 4, 5])

    def test_unknown_category(self):
        response = self.client.get('/api/v1/rosary/happy/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_decade(self):
        """Test a decade with slides and navigation"""
        response = self.client.get('/api/v1/rosary/glorious/1/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['number'], 1)
        self.assertEqual(response.data['navigation']['previous']['category'], 'sorrowful')
        self.assertEqual(response.data['playlist'], {'mode': 'none', 'tracks': []})

    def test_decade_number_out_of_range(self):
        response = self.client.get('/api/v1/rosary/joyful/6/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_unpublished_decade_missing(self):
        """Test unpublished decades are not served"""
        response = self.client.get('/api/v1/rosary/glorious/2/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_playlist_mode(self):
        response = self.client.get('/api/v1/rosary/joyful/1/', {'mode': 'loud'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_publish_refreshes_overview(self):
        """Test publishing a decade drops the cached overview"""
        self.client.get('/api/v1/rosary/')
        TestDataFactory.create_rosary_decade('sorrowful', order=1)
        response = self.client.get('/api/v1/rosary/')
        counts = {item['key']: item['decade_count'] for item in response.data['categories']}
        self.assertEqual(counts['sorrowful'], 1)


class RosaryAdminAPITests(TestCase):
    """Test rosary administration"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_editor())
        self.decade = TestDataFactory.create_rosary_decade('joyful', order=1, is_published=False)
        TestDataFactory.create_rosary_decade('luminous', order=1)

    def test_list_filters(self):
        """Test filtering by category and publication"""
        response = self.client.get('/api/v1/admin/rosary/', {'is_published': 'false'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['id'], self.decade.id)

        response = self.client.get('/api/v1/admin/rosary/', {'category': 'luminous'})
        self.assertEqual(response.data['count'], 1)

    def test_create(self):
        response = self.client.post('/api/v1/admin/rosary/', {
            'category': 'sorrowful', 'title': 'Agónia v Getsemanskej záhrade', 'order': 1, 'is_published': True,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(AuditLog.objects.filter(model_name='RosaryDecade', action='create').exists())

    def test_create_invalid_category(self):
        response = self.client.post('/api/v1/admin/rosary/', {'category': 'happy', 'title': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_publish(self):
        response = self.client.patch(f'/api/v1/admin/rosary/{self.decade.id}/', {'is_published': True},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.decade.refresh_from_db()
        self.assertTrue(self.decade.is_published)

    def test_delete(self):
        response = self.client.delete(f'/api/v1/admin/rosary/{self.decade.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_plain_user_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/rosary/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
