"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from divina.core.permissions import ADMIN_GROUP, EDITOR_GROUP, MODERATOR_GROUP
from divina.i18n.models import Locale
from divina.liturgy.models import LiturgicalYear, LiturgicalCalendarDay
from divina.liturgy.services import liturgical_year_bounds, lectionary_cycle_for_year, ferial_lectionary_for_year
from divina.lectio.models import LectioSource
from divina.rosary.models import RosaryDecade
from divina.programs.models import ProgramCategory, Program, ProgramSession, SessionMedia
from divina.programs.services import next_order
from divina.news.models import News
from divina.articles.models import ArticleCategory, Article
from divina.exercises.models import SpiritualExercise
from divina.notes.models import Note
from divina.shop.models import ShippingZone
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False,
                    groups=None, preferred_language='sk'):
        """Create a test user, optionally placed in groups"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser,
            preferred_language=preferred_language,
        )
        for group_name in groups or []:
            group, _ = Group.objects.get_or_create(name=group_name)
            user.groups.add(group)
        return user

    @staticmethod
    def create_admin(**kwargs):
        return TestDataFactory.create_user(groups=[ADMIN_GROUP], **kwargs)

    @staticmethod
    def create_editor(**kwargs):
        return TestDataFactory.create_user(groups=[EDITOR_GROUP], **kwargs)

    @staticmethod
    def create_moderator(**kwargs):
        return TestDataFactory.create_user(groups=[MODERATOR_GROUP], **kwargs)

    @staticmethod
    def create_locale(code='sk', name='Slovak', native_name='Slovenčina', is_active=True):
        locale, _ = Locale.objects.get_or_create(
            code=code,
            defaults={'name': name, 'native_name': native_name, 'is_active': is_active},
        )
        return locale

    @staticmethod
    def create_liturgical_year(year=2025, locale_code='sk', lectionary_cycle=None):
        """Liturgical year with cycle and Advent bounds computed from ``year``"""
        start_date, end_date = liturgical_year_bounds(year)
        return LiturgicalYear.objects.create(
            year=year,
            locale_code=locale_code,
            lectionary_cycle=lectionary_cycle or lectionary_cycle_for_year(year),
            ferial_lectionary=ferial_lectionary_for_year(year),
            start_date=start_date,
            end_date=end_date,
        )

    @staticmethod
    def create_calendar_day(date, locale_code='sk', liturgical_year=None, lectio_key='MT1',
                            celebration_title='Pondelok 1. týždňa v Cezročnom období', celebration_rank_num=13.0,
                            season='ordinary', **kwargs):
        """Create a calendar day; defaults describe an ordinary weekday"""
        return LiturgicalCalendarDay.objects.create(
            date=date,
            locale_code=locale_code,
            liturgical_year=liturgical_year,
            lectio_key=lectio_key,
            celebration_title=celebration_title,
            celebration_rank=kwargs.pop('celebration_rank', 'ferial'),
            celebration_rank_num=celebration_rank_num,
            celebration_colour=kwargs.pop('celebration_colour', 'green'),
            season=season,
            weekday=kwargs.pop('weekday', date.strftime('%A').lower()),
            **kwargs
        )

    @staticmethod
    def create_lectio_source(chapter_key='MT1', lang='sk', cycle='N', checked=True, **kwargs):
        defaults = {
            'book': 'Matúš',
            'chapter': '1',
            'scripture_reference': 'Mt 1, 1-17',
            'bible_1_title': 'Jeruzalemská Biblia',
            'bible_1': f'Text {chapter_key} {lang} {cycle}',
            'lectio_text': f'Lectio {chapter_key} {lang} {cycle}',
        }
        defaults.update(kwargs)
        return LectioSource.objects.create(chapter_key=chapter_key, lang=lang, cycle=cycle, checked=checked,
                                           **defaults)

    @staticmethod
    def create_rosary_decade(category='joyful', lang='sk', order=1, is_published=True, title=None, **kwargs):
        if not title:
            title = f'Mystery {category} {order} – Lk 1, 26-38'
        return RosaryDecade.objects.create(
            category=category,
            lang=lang,
            order=order,
            is_published=is_published,
            title=title,
            bible_text=kwargs.pop('bible_text', 'Anjel Gabriel bol poslaný...'),
            **kwargs
        )

    @staticmethod
    def create_program_category(name=None, slug=None, display_order=0):
        if not name:
            name = f'Category {TestDataFactory.random_string(6)}'
        return ProgramCategory.objects.create(name=name, slug=slug or '', display_order=display_order)

    @staticmethod
    def create_program(title=None, category=None, lang='sk', is_published=True, **kwargs):
        if not title:
            title = f'Program {TestDataFactory.random_string(6)}'
        if category is None:
            category = TestDataFactory.create_program_category()
        return Program.objects.create(title=title, category=category, lang=lang, is_published=is_published,
                                      **kwargs)

    @staticmethod
    def create_session(program, title=None, duration_minutes=0, is_published=True):
        """Append a session to the end of a program"""
        return ProgramSession.objects.create(
            program=program,
            title=title or f'Session {TestDataFactory.random_string(4)}',
            session_order=next_order(ProgramSession, program.pk),
            duration_minutes=duration_minutes,
            is_published=is_published,
        )

    @staticmethod
    def create_media(session, media_type='text', content='<p>Text</p>', duration_minutes=None, is_published=True,
                     title=''):
        """Append a media item to the end of a session"""
        return SessionMedia.objects.create(
            session=session,
            media_type=media_type,
            title=title,
            content=content,
            media_order=next_order(SessionMedia, session.pk),
            duration_minutes=duration_minutes,
            is_published=is_published,
        )

    @staticmethod
    def create_news(title=None, lang='sk', published_at=None, **kwargs):
        if not title:
            title = f'News {TestDataFactory.random_string(6)}'
        if published_at is not None:
            kwargs['published_at'] = published_at
        return News.objects.create(title=title, lang=lang, **kwargs)

    @staticmethod
    def create_article_category(name=None, **kwargs):
        if not name:
            name = f'Category {TestDataFactory.random_string(6)}'
        return ArticleCategory.objects.create(name=name, **kwargs)

    @staticmethod
    def create_article(title=None, status='published', lang='sk', **kwargs):
        if not title:
            title = f'Article {TestDataFactory.random_string(6)}'
        return Article.objects.create(title=title, status=status, lang=lang, **kwargs)

    @staticmethod
    def create_exercise(title=None, start_date=None, locale=None, is_published=True, is_active=True, **kwargs):
        """Create a retreat; defaults to a published weekend starting in a month"""
        if not title:
            title = f'Exercise {TestDataFactory.random_string(6)}'
        start_date = start_date or timezone.now() + timedelta(days=30)
        return SpiritualExercise.objects.create(
            title=title,
            start_date=start_date,
            end_date=kwargs.pop('end_date', start_date + timedelta(days=2)),
            location_name=kwargs.pop('location_name', 'Exercičný dom'),
            locale=locale,
            is_published=is_published,
            is_active=is_active,
            **kwargs
        )

    @staticmethod
    def create_note(user, title='Poznámka', content='Obsah poznámky', **kwargs):
        return Note.objects.create(user=user, title=title, content=content, **kwargs)

    @staticmethod
    def create_shipping_zone(zone_id=None, countries=None, price='2.99', free_threshold='50.00',
                             sort_order=0, is_active=True, name=None):
        if not zone_id:
            zone_id = f'zone_{TestDataFactory.random_string(4).lower()}'
        return ShippingZone.objects.create(
            id=zone_id,
            name=name or f'Zone {zone_id}',
            countries=countries if countries is not None else ['SK', 'CZ'],
            price=Decimal(price),
            free_threshold=Decimal(free_threshold),
            delivery_days='2-4',
            sort_order=sort_order,
            is_active=is_active,
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
