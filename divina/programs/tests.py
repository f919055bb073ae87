"""
Tests for spiritual programs
Tests: slugs, session and media ordering, derived totals, public and admin endpoints
"""
from django.test import TestCase
from django.core.cache import cache
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.programs.models import Program, ProgramCategory, ProgramSession, SessionMedia
from divina.programs.services import ReorderError, move_to, neighbours, next_order, renumber


def session_titles(program):
    return list(ProgramSession.objects.filter(program=program).order_by('session_order').values_list('title', flat=True))


class SlugTests(TestCase):
    """Test slug generation"""

    def test_accents_stripped(self):
        category = TestDataFactory.create_program_category(name='Duchovné cvičenia')
        program = TestDataFactory.create_program(title='Advent s Máriou', category=category)
        self.assertEqual(category.slug, 'duchovne-cvicenia')
        self.assertEqual(program.slug, 'advent-s-mariou')

    def test_unique_per_language(self):
        """Test equal titles get distinct slugs in one language only"""
        category = TestDataFactory.create_program_category()
        first = TestDataFactory.create_program(title='Pôst', category=category)
        second = TestDataFactory.create_program(title='Pôst', category=category)
        english = TestDataFactory.create_program(title='Pôst', category=category, lang='en')
        self.assertEqual(first.slug, 'post')
        self.assertEqual(second.slug, 'post-2')
        self.assertEqual(english.slug, 'post')

    def test_explicit_slug_kept(self):
        program = TestDataFactory.create_program(title='Novéna', slug='novena-k-duchu')
        self.assertEqual(program.slug, 'novena-k-duchu')


class OrderingServiceTests(TestCase):
    """Test moving and renumbering ordered items"""

    def setUp(self):
        self.program = TestDataFactory.create_program()
        self.first = TestDataFactory.create_session(self.program, title='A')
        self.second = TestDataFactory.create_session(self.program, title='B')
        self.third = TestDataFactory.create_session(self.program, title='C')

    def test_append_order(self):
        """Test new items go after the highest order"""
        self.assertEqual([self.first.session_order, self.second.session_order, self.third.session_order], [1, 2, 3])
        self.assertEqual(next_order(ProgramSession, self.program.pk), 4)

    def test_move_up(self):
        self.assertTrue(move_to(self.third, 1))
        self.assertEqual(session_titles(self.program), ['C', 'A', 'B'])
        self.assertEqual(self.third.session_order, 1)

    def test_move_down(self):
        self.assertTrue(move_to(self.first, 3))
        self.assertEqual(session_titles(self.program), ['B', 'C', 'A'])

    def test_move_to_same_position(self):
        """Test moving onto the current position changes nothing"""
        self.assertFalse(move_to(self.second, 2))
        self.assertEqual(session_titles(self.program), ['A', 'B', 'C'])

    def test_move_out_of_range(self):
        with self.assertRaises(ReorderError):
            move_to(self.first, 4)
        with self.assertRaises(ReorderError):
            move_to(self.first, 0)
        self.assertEqual(session_titles(self.program), ['A', 'B', 'C'])

    def test_move_deleted_item(self):
        ProgramSession.objects.filter(pk=self.second.pk).delete()
        with self.assertRaises(ReorderError):
            move_to(self.second, 1)

    def test_renumber_closes_gaps(self):
        ProgramSession.objects.filter(pk=self.first.pk).delete()
        self.assertEqual(renumber(ProgramSession, self.program.pk), 2)
        orders = list(ProgramSession.objects.filter(program=self.program).order_by('session_order')
                      .values_list('session_order', flat=True))
        self.assertEqual(orders, [1, 2])

    def test_media_ordering(self):
        """Test media items are ordered within their session"""
        media = [TestDataFactory.create_media(self.first, title=str(index)) for index in range(3)]
        other = TestDataFactory.create_media(self.second)
        self.assertEqual(other.media_order, 1)
        move_to(media[2], 1)
        titles = list(SessionMedia.objects.filter(session=self.first).order_by('media_order')
                      .values_list('title', flat=True))
        self.assertEqual(titles, ['2', '0', '1'])

    def test_neighbours_skip_unpublished(self):
        ProgramSession.objects.filter(pk=self.second.pk).update(is_published=False)
        previous, following = neighbours(self.third)
        self.assertEqual(previous, self.first)
        self.assertIsNone(following)


class DerivedTotalsTests(TestCase):
    """Test program totals and session durations follow their children"""

    def setUp(self):
        self.program = TestDataFactory.create_program()

    def test_program_totals(self):
        """Test session count and rounded duration"""
        TestDataFactory.create_session(self.program, duration_minutes=10)
        session = TestDataFactory.create_session(self.program, duration_minutes=20.4)
        self.program.refresh_from_db()
        self.assertEqual(self.program.total_sessions, 2)
        self.assertEqual(self.program.total_duration_minutes, 30)

        session.delete()
        self.program.refresh_from_db()
        self.assertEqual(self.program.total_sessions, 1)
        self.assertEqual(self.program.total_duration_minutes, 10)

    def test_session_duration_from_media(self):
        """Test timed media replace the manual session duration"""
        session = TestDataFactory.create_session(self.program, duration_minutes=45)
        TestDataFactory.create_media(session, media_type='audio', content='https://audio.test/1.mp3',
                                     duration_minutes=5)
        TestDataFactory.create_media(session, media_type='video', content='https://video.test/1',
                                     duration_minutes=7)
        session.refresh_from_db()
        self.program.refresh_from_db()
        self.assertEqual(session.duration_minutes, 12)
        self.assertEqual(self.program.total_duration_minutes, 12)

    def test_untimed_media_keep_manual_duration(self):
        session = TestDataFactory.create_session(self.program, duration_minutes=45)
        TestDataFactory.create_media(session)
        session.refresh_from_db()
        self.assertEqual(session.duration_minutes, 45)


class ProgramPublicAPITests(TestCase):
    """Test the public program endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.category = TestDataFactory.create_program_category(name='Exercície', display_order=1)
        self.program = TestDataFactory.create_program(title='Advent s Máriou', category=self.category,
                                                      description='Štyri týždne modlitby')
        self.featured = TestDataFactory.create_program(title='Zelený štvrtok', category=self.category,
                                                       is_featured=True)
        TestDataFactory.create_program(title='Koncept', category=self.category, is_published=False)
        TestDataFactory.create_program(title='Advent with Mary', category=self.category, lang='en')
        self.first = TestDataFactory.create_session(self.program, title='Úvod')
        self.hidden = TestDataFactory.create_session(self.program, title='Skryté', is_published=False)
        self.last = TestDataFactory.create_session(self.program, title='Záver')
        TestDataFactory.create_media(self.first)
        TestDataFactory.create_media(self.first, is_published=False)

    def test_list(self):
        """Test only published programs are listed, featured first"""
        response = self.client.get('/api/v1/programs/', {'lang': 'sk'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['title'] for item in response.data], ['Zelený štvrtok', 'Advent s Máriou'])

    def test_list_search(self):
        response = self.client.get('/api/v1/programs/', {'search': 'týždne'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['category_slug'], 'exercicie')

    def test_categories(self):
        """Test categories count published programs per language"""
        response = self.client.get('/api/v1/program-categories/', {'lang': 'sk'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['program_count'], 2)

    def test_detail(self):
        """Test a program lists its published sessions"""
        response = self.client.get('/api/v1/programs/exercicie/advent-s-mariou/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['title'] for item in response.data['sessions']], ['Úvod', 'Záver'])
        self.assertEqual(response.data['sessions'][0]['media_count'], 1)
        self.assertEqual(response.data['total_sessions'], 3)

    def test_detail_not_found(self):
        response = self.client.get('/api/v1/programs/exercicie/koncept/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_session_detail(self):
        """Test a session with its published media and navigation over published sessions"""
        response = self.client.get('/api/v1/programs/exercicie/advent-s-mariou/sessions/1/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['session']['media']), 1)
        self.assertIsNone(response.data['navigation']['previous'])
        self.assertEqual(response.data['navigation']['next'], {'session_order': 3, 'title': 'Záver'})

    def test_unpublished_session_hidden(self):
        response = self.client.get('/api/v1/programs/exercicie/advent-s-mariou/sessions/2/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ProgramAdminAPITests(TestCase):
    """Test program administration"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_editor())
        self.category = TestDataFactory.create_program_category(name='Kurzy')
        self.program = TestDataFactory.create_program(title='Kurz modlitby', category=self.category)

    def test_create_program(self):
        """Test programs are created with a generated slug and audited"""
        response = self.client.post('/api/v1/admin/programs/', {
            'title': 'Pôstne zamyslenia', 'category': self.category.id, 'lang': 'sk',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'postne-zamyslenia')
        self.assertEqual(response.data['total_sessions'], 0)
        self.assertTrue(AuditLog.objects.filter(model_name='Program', action='create').exists())

    def test_blank_title_rejected(self):
        response = self.client.post('/api/v1/admin/programs/', {'title': '   ', 'category': self.category.id},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_filters(self):
        TestDataFactory.create_program(title='Iný', category=self.category, is_published=False)
        response = self.client.get('/api/v1/admin/programs/', {'is_published': 'false'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_delete_category_with_programs(self):
        """Test categories in use cannot be deleted"""
        response = self.client.delete(f'/api/v1/admin/program-categories/{self.category.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(ProgramCategory.objects.filter(pk=self.category.id).exists())

    def test_delete_empty_category(self):
        empty = TestDataFactory.create_program_category(name='Prázdna')
        response = self.client.delete(f'/api/v1/admin/program-categories/{empty.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_append_session(self):
        """Test new sessions are appended and totals refreshed"""
        TestDataFactory.create_session(self.program)
        response = self.client.post(f'/api/v1/admin/programs/{self.program.id}/sessions/',
                                    {'title': 'Druhé stretnutie', 'duration_minutes': 30, 'session_order': 1},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['session_order'], 2)
        self.program.refresh_from_db()
        self.assertEqual(self.program.total_sessions, 2)

    def test_reorder_session(self):
        first = TestDataFactory.create_session(self.program, title='A')
        TestDataFactory.create_session(self.program, title='B')
        response = self.client.post(f'/api/v1/admin/sessions/{first.id}/reorder/', {'target_order': 2},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['moved'])
        self.assertEqual([item['title'] for item in response.data['sessions']], ['B', 'A'])
        self.assertTrue(AuditLog.objects.filter(model_name='ProgramSession', action='reorder').exists())

    def test_reorder_invalid_target(self):
        first = TestDataFactory.create_session(self.program)
        response = self.client.post(f'/api/v1/admin/sessions/{first.id}/reorder/', {'target_order': 'x'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post(f'/api/v1/admin/sessions/{first.id}/reorder/', {'target_order': 5},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_session_renumbers(self):
        first = TestDataFactory.create_session(self.program, title='A')
        TestDataFactory.create_session(self.program, title='B')
        TestDataFactory.create_session(self.program, title='C')
        response = self.client.delete(f'/api/v1/admin/sessions/{first.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        orders = dict(ProgramSession.objects.filter(program=self.program).values_list('title', 'session_order'))
        self.assertEqual(orders, {'B': 1, 'C': 2})

    def test_media_create_and_reorder(self):
        session = TestDataFactory.create_session(self.program)
        response = self.client.post(f'/api/v1/admin/sessions/{session.id}/media/',
                                    {'media_type': 'audio', 'content': 'https://audio.test/a.mp3', 'title': 'A'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['media_order'], 1)
        second = TestDataFactory.create_media(session, title='B')

        response = self.client.post(f'/api/v1/admin/media/{second.id}/reorder/', {'target_order': 1},
                                    format='json')
        self.assertEqual([item['title'] for item in response.data['media']], ['B', 'A'])

    def test_media_requires_content(self):
        session = TestDataFactory.create_session(self.program)
        response = self.client.post(f'/api/v1/admin/sessions/{session.id}/media/',
                                    {'media_type': 'text', 'content': '  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reorder_refreshes_public_detail(self):
        """Test a reorder drops the cached public data"""
        self.program.is_published = True
        self.program.save()
        TestDataFactory.create_session(self.program, title='A')
        second = TestDataFactory.create_session(self.program, title='B')
        self.client.get(f'/api/v1/programs/kurzy/{self.program.slug}/')
        self.client.post(f'/api/v1/admin/sessions/{second.id}/reorder/', {'target_order': 1}, format='json')
        response = self.client.get(f'/api/v1/programs/kurzy/{self.program.slug}/')
        self.assertEqual(response.data['sessions'][0]['title'], 'B')

    def test_plain_user_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/programs/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_program_totals_read_only(self):
        response = self.client.patch(f'/api/v1/admin/programs/{self.program.id}/', {'total_sessions': 99},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Program.objects.get(pk=self.program.id).total_sessions, 0)
