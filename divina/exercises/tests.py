"""
Tests for spiritual exercises
Tests: public list and detail, related item administration, duplication, permissions
"""
from datetime import timedelta
from decimal import Decimal
from django.test import TestCase
from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.exercises.models import (
    SpiritualExercise, ExercisePricing, ExerciseTestimonial, ExerciseGalleryImage, ExerciseForm,
)
from divina.exercises.services import duplicate_exercise


class ExerciseListAPITests(TestCase):
    """Test the public exercise list"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.sk = TestDataFactory.create_locale('sk')
        self.cz = TestDataFactory.create_locale('cz', name='Czech', native_name='Čeština')
        now = timezone.now()
        self.later = TestDataFactory.create_exercise('Jarné exercície', start_date=now + timedelta(days=60),
                                                     locale=self.sk)
        self.sooner = TestDataFactory.create_exercise('Zimné exercície', start_date=now + timedelta(days=10),
                                                      locale=self.cz)
        TestDataFactory.create_exercise('Nezverejnené', is_published=False)
        TestDataFactory.create_exercise('Zrušené', is_active=False)

    def test_published_active_by_start_date(self):
        response = self.client.get('/api/v1/spiritual-exercises/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data['exercises']], [self.sooner.id, self.later.id])

    def test_locale_filter(self):
        response = self.client.get('/api/v1/spiritual-exercises/', {'locale': 'SK'})
        items = response.data['exercises']
        self.assertEqual([item['id'] for item in items], [self.later.id])
        self.assertEqual(items[0]['locale'], {'id': self.sk.id, 'code': 'sk', 'native_name': 'Slovenčina'})

    def test_unknown_locale_is_empty(self):
        response = self.client.get('/api/v1/spiritual-exercises/', {'locale': 'xx'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['exercises'], [])

    def test_published_exercise_appears(self):
        """Test cached list is refreshed when an exercise is published"""
        self.client.get('/api/v1/spiritual-exercises/')
        draft = SpiritualExercise.objects.get(title='Nezverejnené')
        draft.is_published = True
        draft.save()
        response = self.client.get('/api/v1/spiritual-exercises/')
        self.assertEqual(len(response.data['exercises']), 3)


class ExerciseDetailAPITests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.exercise = TestDataFactory.create_exercise('Ignaciánske exercície')
        ExercisePricing.objects.create(exercise=self.exercise, room_type='Jednoposteľová', price=Decimal('180'),
                                       display_order=2)
        ExercisePricing.objects.create(exercise=self.exercise, room_type='Dvojposteľová', price=Decimal('150'),
                                       deposit=Decimal('50'), display_order=1)
        ExerciseTestimonial.objects.create(exercise=self.exercise, author_name='Anna', testimonial_text='Ďakujem')
        ExerciseTestimonial.objects.create(exercise=self.exercise, author_name='Peter', testimonial_text='Skryté',
                                           is_visible=False)
        ExerciseGalleryImage.objects.create(exercise=self.exercise, image_url='https://img/1.jpg')
        ExerciseGalleryImage.objects.create(exercise=self.exercise, image_url='https://img/2.jpg', is_visible=False)
        ExerciseForm.objects.create(exercise=self.exercise, form_id='prihlaska')
        ExerciseForm.objects.create(exercise=self.exercise, form_id='stara', is_active=False)

    def test_public_detail_hides_invisible_items(self):
        response = self.client.get(f'/api/v1/spiritual-exercises/{self.exercise.slug}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        exercise = response.data['exercise']
        self.assertEqual([item['room_type'] for item in exercise['pricing']], ['Dvojposteľová', 'Jednoposteľová'])
        self.assertEqual([item['author_name'] for item in exercise['testimonials']], ['Anna'])
        self.assertEqual([item['image_url'] for item in exercise['gallery']], ['https://img/1.jpg'])
        self.assertEqual([item['form_id'] for item in exercise['forms']], ['prihlaska'])

    def test_unpublished_is_missing(self):
        draft = TestDataFactory.create_exercise('Koncept', is_published=False)
        response = self.client.get(f'/api/v1/spiritual-exercises/{draft.slug}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Spiritual exercise not found or not available')

    def test_admin_detail_shows_everything(self):
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.get(f'/api/v1/admin/spiritual-exercises/{self.exercise.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['testimonials']), 2)
        self.assertEqual(len(response.data['gallery']), 2)
        self.assertEqual(len(response.data['forms']), 2)


class ExerciseAdminAPITests(TestCase):
    """Test exercise administration"""

    def setUp(self):
        cache.clear()
        self.editor = TestDataFactory.create_editor()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.editor)
        self.locale = TestDataFactory.create_locale('sk')

    def test_create(self):
        start = timezone.now() + timedelta(days=20)
        response = self.client.post('/api/v1/admin/spiritual-exercises/', {
            'title': 'Exercície pre mladých',
            'start_date': start.isoformat(),
            'end_date': (start + timedelta(days=3)).isoformat(),
            'location_name': 'Kláštor',
            'locale': self.locale.id,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        exercise = SpiritualExercise.objects.get(pk=response.data['id'])
        self.assertEqual(exercise.slug, 'exercicie-pre-mladych')
        self.assertEqual(exercise.created_by, self.editor)
        self.assertFalse(exercise.is_published)
        self.assertTrue(AuditLog.objects.filter(model_name='SpiritualExercise', action='create').exists())

    def test_end_before_start(self):
        start = timezone.now() + timedelta(days=20)
        response = self.client.post('/api/v1/admin/spiritual-exercises/', {
            'title': 'Zlé dátumy',
            'start_date': start.isoformat(),
            'end_date': (start - timedelta(days=1)).isoformat(),
            'location_name': 'Kláštor',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data)

    def test_list_filters(self):
        TestDataFactory.create_exercise('Slovenské', locale=self.locale)
        TestDataFactory.create_exercise('Bez jazyka', is_published=False)
        response = self.client.get('/api/v1/admin/spiritual-exercises/', {'locale': 'all'})
        self.assertEqual(response.data['count'], 2)
        response = self.client.get('/api/v1/admin/spiritual-exercises/', {'locale': 'sk'})
        self.assertEqual([item['title'] for item in response.data['results']], ['Slovenské'])
        response = self.client.get('/api/v1/admin/spiritual-exercises/', {'search': 'jazyka'})
        self.assertEqual([item['title'] for item in response.data['results']], ['Bez jazyka'])

    def test_pricing_lifecycle(self):
        exercise = TestDataFactory.create_exercise()
        url = f'/api/v1/admin/spiritual-exercises/{exercise.id}/pricing/'
        response = self.client.post(url, {'room_type': 'Izba', 'price': '120.00', 'deposit': '30.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        item_url = f"{url}{response.data['id']}/"

        response = self.client.patch(item_url, {'price': '140.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(ExercisePricing.objects.get(exercise=exercise).price, Decimal('140.00'))

        response = self.client.delete(item_url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(exercise.pricing.exists())

    def test_deposit_above_price(self):
        exercise = TestDataFactory.create_exercise()
        response = self.client.post(f'/api/v1/admin/spiritual-exercises/{exercise.id}/pricing/',
                                    {'room_type': 'Izba', 'price': '100.00', 'deposit': '150.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('deposit', response.data)

    def test_testimonial_rating_range(self):
        exercise = TestDataFactory.create_exercise()
        response = self.client.post(f'/api/v1/admin/spiritual-exercises/{exercise.id}/testimonials/',
                                    {'author_name': 'Jana', 'testimonial_text': 'Krásne', 'rating': 6},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_item_type(self):
        exercise = TestDataFactory.create_exercise()
        response = self.client.get(f'/api/v1/admin/spiritual-exercises/{exercise.id}/rooms/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_item_of_other_exercise(self):
        exercise = TestDataFactory.create_exercise()
        other = TestDataFactory.create_exercise()
        image = ExerciseGalleryImage.objects.create(exercise=other, image_url='https://img/x.jpg')
        response = self.client.delete(f'/api/v1/admin/spiritual-exercises/{exercise.id}/gallery/{image.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(ExerciseGalleryImage.objects.filter(pk=image.pk).exists())

    def test_duplicate_endpoint(self):
        exercise = TestDataFactory.create_exercise('Víkend ticha')
        response = self.client.post(f'/api/v1/admin/spiritual-exercises/{exercise.id}/duplicate/')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['title'], 'Víkend ticha (kópia)')
        self.assertTrue(AuditLog.objects.filter(model_name='SpiritualExercise',
                                                object_id=str(response.data['id'])).exists())

    def test_invalidate(self):
        response = self.client.post('/api/v1/spiritual-exercises/invalidate/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])

    def test_plain_user_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/spiritual-exercises/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class DuplicateExerciseTests(TestCase):
    def test_copies_children_except_forms(self):
        editor = TestDataFactory.create_editor()
        exercise = TestDataFactory.create_exercise('Adventná obnova', max_capacity=30)
        ExercisePricing.objects.create(exercise=exercise, room_type='Izba', price=Decimal('90'))
        ExerciseTestimonial.objects.create(exercise=exercise, author_name='Eva', testimonial_text='Pokoj',
                                           is_visible=False)
        ExerciseGalleryImage.objects.create(exercise=exercise, image_url='https://img/a.jpg')
        ExerciseForm.objects.create(exercise=exercise, form_id='prihlaska')

        copy = duplicate_exercise(exercise, user=editor)

        self.assertNotEqual(copy.pk, exercise.pk)
        self.assertEqual(copy.title, 'Adventná obnova (kópia)')
        self.assertEqual(copy.slug, 'adventna-obnova-copy')
        self.assertFalse(copy.is_published)
        self.assertEqual(copy.created_by, editor)
        self.assertEqual(copy.max_capacity, 30)
        self.assertEqual(copy.start_date, exercise.start_date)
        self.assertEqual(copy.pricing.get().price, Decimal('90'))
        self.assertFalse(copy.testimonials.get().is_visible)
        self.assertEqual(copy.gallery.count(), 1)
        self.assertFalse(copy.forms.exists())
        self.assertEqual(exercise.pricing.count(), 1)

    def test_second_copy_gets_new_slug(self):
        exercise = TestDataFactory.create_exercise('Obnova')
        first = duplicate_exercise(exercise)
        second = duplicate_exercise(exercise)
        self.assertEqual(first.slug, 'obnova-copy')
        self.assertEqual(second.slug, 'obnova-copy-2')
