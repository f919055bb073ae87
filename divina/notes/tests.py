"""
Tests for personal notes
Tests: ownership, validation of required and optional fields, search, ordering
"""
from datetime import timedelta
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.notes.models import Note


class NoteAPITests(TestCase):
    """Test the notes endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/notes/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_own_notes_only(self):
        """Test users only see their own notes"""
        mine = TestDataFactory.create_note(self.user)
        TestDataFactory.create_note(self.other)
        response = self.client.get('/api/v1/notes/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data], [mine.id])

    def test_most_recently_edited_first(self):
        older = TestDataFactory.create_note(self.user, title='Staršia')
        newer = TestDataFactory.create_note(self.user, title='Novšia')
        Note.objects.filter(pk=older.pk).update(updated_at=timezone.now() - timedelta(days=1))
        response = self.client.get('/api/v1/notes/')
        self.assertEqual([item['id'] for item in response.data], [newer.id, older.id])

    def test_search(self):
        """Test the query matches title, content and Bible fields"""
        TestDataFactory.create_note(self.user, title='Ranná modlitba')
        quoted = TestDataFactory.create_note(self.user, bible_reference='Jn 3, 16', bible_quote='Veď Boh tak miloval svet')
        response = self.client.get('/api/v1/notes/', {'q': 'Jn 3'})
        self.assertEqual([item['id'] for item in response.data], [quoted.id])
        response = self.client.get('/api/v1/notes/', {'q': 'miloval'})
        self.assertEqual(len(response.data), 1)

    def test_create(self):
        response = self.client.post('/api/v1/notes/', {
            'title': '  Myšlienka  ', 'content': 'Obsah', 'bible_reference': '   ',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        note = Note.objects.get(pk=response.data['id'])
        self.assertEqual(note.user, self.user)
        self.assertEqual(note.title, 'Myšlienka')
        self.assertIsNone(note.bible_reference)

    def test_create_requires_title_and_content(self):
        response = self.client.post('/api/v1/notes/', {'title': ' ', 'content': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data)
        self.assertIn('content', response.data)

    def test_other_users_note_is_missing(self):
        """Test another user's note looks like it does not exist"""
        foreign = TestDataFactory.create_note(self.other)
        self.assertEqual(self.client.get(f'/api/v1/notes/{foreign.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(f'/api/v1/notes/{foreign.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Note.objects.filter(pk=foreign.id).exists())

    def test_update(self):
        note = TestDataFactory.create_note(self.user, bible_quote='Citát')
        response = self.client.patch(f'/api/v1/notes/{note.id}/', {'bible_quote': None}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        note.refresh_from_db()
        self.assertIsNone(note.bible_quote)

    def test_delete(self):
        note = TestDataFactory.create_note(self.user)
        response = self.client.delete(f'/api/v1/notes/{note.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Note.objects.filter(pk=note.id).exists())
