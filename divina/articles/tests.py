"""
Tests for articles
Tests: published list and filters, detail with blocks, categories, block replacement, administration
"""
from django.test import TestCase
from django.core.cache import cache
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.articles.models import Article, ArticleBlock, ArticleCategory


class ArticleModelTests(TestCase):
    def test_slug_unique_per_language(self):
        first = TestDataFactory.create_article('Lectio v rodine')
        second = TestDataFactory.create_article('Lectio v rodine')
        english = TestDataFactory.create_article('Lectio v rodine', lang='en')
        self.assertEqual(first.slug, 'lectio-v-rodine')
        self.assertEqual(second.slug, 'lectio-v-rodine-2')
        self.assertEqual(english.slug, 'lectio-v-rodine')

    def test_publishing_sets_published_at(self):
        """Test published_at is stamped on first publish only"""
        article = TestDataFactory.create_article('Koncept', status='draft')
        self.assertIsNone(article.published_at)
        article.status = 'published'
        article.save()
        stamped = article.published_at
        self.assertIsNotNone(stamped)
        article.title = 'Upravený'
        article.save()
        self.assertEqual(Article.objects.get(pk=article.pk).published_at, stamped)


class ArticleListAPITests(TestCase):
    """Test the public article list"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.author = TestDataFactory.create_editor()
        self.author.first_name = 'Mária'
        self.author.last_name = 'Kováčová'
        self.author.save()
        self.category = TestDataFactory.create_article_category('Modlitba', color='#10B981')
        self.first = TestDataFactory.create_article('Ticho pred Bohom', category=self.category, author=self.author,
                                                    excerpt='O kontemplácii', tags=['ticho'])
        self.second = TestDataFactory.create_article('Rodinná modlitba', content='Večer spolu')
        TestDataFactory.create_article('Rozpracovaný', status='draft')

    def test_published_only_newest_first(self):
        response = self.client.get('/api/v1/articles/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data['data']], [self.second.id, self.first.id])
        self.assertEqual(response.data['total'], 2)
        self.assertEqual(response.data['totalPages'], 1)

    def test_category_and_author_embedded(self):
        response = self.client.get('/api/v1/articles/', {'category': self.category.id})
        item = response.data['data'][0]
        self.assertEqual(item['category_detail'],
                         {'id': self.category.id, 'name': 'Modlitba', 'slug': 'modlitba', 'color': '#10B981'})
        self.assertEqual(item['author_name'], 'Mária Kováčová')
        self.assertEqual(response.data['total'], 1)

    def test_filters(self):
        response = self.client.get('/api/v1/articles/', {'author': self.author.id})
        self.assertEqual([item['id'] for item in response.data['data']], [self.first.id])
        response = self.client.get('/api/v1/articles/', {'tag': 'ticho'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.first.id])

    def test_search_matches_excerpt_and_content(self):
        response = self.client.get('/api/v1/articles/', {'search': 'kontemplácii'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.first.id])
        response = self.client.get('/api/v1/articles/', {'search': 'Večer'})
        self.assertEqual([item['id'] for item in response.data['data']], [self.second.id])

    def test_invalid_category(self):
        response = self.client.get('/api/v1/articles/', {'category': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pagination(self):
        response = self.client.get('/api/v1/articles/', {'page': 2, 'limit': 1})
        self.assertEqual(response.data['totalPages'], 2)
        self.assertEqual([item['id'] for item in response.data['data']], [self.first.id])

    def test_new_article_visible(self):
        """Test publishing drops cached pages"""
        self.client.get('/api/v1/articles/')
        TestDataFactory.create_article('Najnovší')
        self.assertEqual(self.client.get('/api/v1/articles/').data['total'], 3)


class ArticleDetailAPITests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.article = TestDataFactory.create_article('Púť k prameňu')
        ArticleBlock.objects.create(article=self.article, block_type='image', data={'images': ['a.jpg']}, position=1)
        ArticleBlock.objects.create(article=self.article, block_type='text', data={'content': '<p>Úvod</p>'},
                                    position=0)

    def test_blocks_in_position_order(self):
        response = self.client.get(f'/api/v1/articles/{self.article.slug}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([block['block_type'] for block in response.data['blocks']], ['text', 'image'])

    def test_draft_is_missing(self):
        draft = TestDataFactory.create_article('Koncept', status='draft')
        response = self.client.get(f'/api/v1/articles/{draft.slug}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_language_filter(self):
        response = self.client.get(f'/api/v1/articles/{self.article.slug}/', {'lang': 'en'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class CategoryAPITests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()

    def test_categories_by_name(self):
        TestDataFactory.create_article_category('Svedectvá')
        TestDataFactory.create_article_category('Modlitba')
        response = self.client.get('/api/v1/categories/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['name'] for item in response.data['data']], ['Modlitba', 'Svedectvá'])
        self.assertEqual(response.data['total'], 2)

    def test_renamed_category_refreshes_articles(self):
        """Test category changes drop cached article pages"""
        category = TestDataFactory.create_article_category('Modlitba')
        TestDataFactory.create_article('Ticho', category=category)
        self.client.get('/api/v1/articles/')
        category.name = 'Modlitby'
        category.save()
        response = self.client.get('/api/v1/articles/')
        self.assertEqual(response.data['data'][0]['category_detail']['name'], 'Modlitby')


class ArticleAdminAPITests(TestCase):
    """Test article administration"""

    def setUp(self):
        self.editor = TestDataFactory.create_editor()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.editor)

    def test_create_with_blocks(self):
        response = self.client.post('/api/v1/admin/articles/', {
            'title': 'Nový článok', 'status': 'draft', 'tags': [' advent ', 'advent', ''],
            'blocks': [
                {'block_type': 'text', 'data': {'content': 'Prvý'}},
                {'block_type': 'button', 'data': {'label': 'Viac', 'url': 'https://example.org'}},
            ],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        article = Article.objects.get(pk=response.data['id'])
        self.assertEqual(article.author, self.editor)
        self.assertEqual(article.tags, ['advent'])
        self.assertEqual(list(article.blocks.values_list('block_type', 'position')), [('text', 0), ('button', 1)])
        self.assertTrue(AuditLog.objects.filter(model_name='Article', action='create').exists())

    def test_invalid_block_type(self):
        response = self.client.post('/api/v1/admin/articles/', {
            'title': 'Článok', 'blocks': [{'block_type': 'poll', 'data': {}}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Article.objects.exists())

    def test_update_replaces_blocks(self):
        article = TestDataFactory.create_article('Článok')
        ArticleBlock.objects.create(article=article, block_type='text', data={}, position=0)
        response = self.client.patch(f'/api/v1/admin/articles/{article.id}/', {
            'blocks': [{'block_type': 'video', 'data': {'url': 'https://youtu.be/x'}}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([block['block_type'] for block in response.data['blocks']], ['video'])
        self.assertEqual(article.blocks.count(), 1)

    def test_update_without_blocks_keeps_them(self):
        article = TestDataFactory.create_article('Článok')
        ArticleBlock.objects.create(article=article, block_type='text', data={}, position=0)
        response = self.client.patch(f'/api/v1/admin/articles/{article.id}/', {'excerpt': 'Nový úvod'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(article.blocks.count(), 1)

    def test_list_includes_drafts(self):
        TestDataFactory.create_article('Koncept', status='draft')
        TestDataFactory.create_article('Hotový')
        response = self.client.get('/api/v1/admin/articles/', {'status': 'draft'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_delete_category_keeps_articles(self):
        category = TestDataFactory.create_article_category('Zrušená')
        article = TestDataFactory.create_article('Článok', category=category)
        response = self.client.delete(f'/api/v1/admin/article-categories/{category.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertIsNone(Article.objects.get(pk=article.pk).category)

    def test_create_category_generates_slug(self):
        response = self.client.post('/api/v1/admin/article-categories/', {'name': 'Duchovný život'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(ArticleCategory.objects.get(pk=response.data['id']).slug, 'duchovny-zivot')

    def test_invalidate(self):
        response = self.client.post('/api/v1/articles/invalidate/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])

    def test_invalidate_categories(self):
        response = self.client.post('/api/v1/categories/invalidate/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(AuditLog.objects.filter(model_name='ArticleCategory', action='cache_invalidate').exists())

    def test_plain_user_cannot_write(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.post('/api/v1/admin/articles/', {'title': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
