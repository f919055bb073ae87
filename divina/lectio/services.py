"""
Resolution of a calendar date to its Lectio Divina reading.

The calendar day supplies the chapter key and the liturgical year supplies the
Sunday cycle. Readings are looked up with a cascading fallback: first the
requested language and cycle, then the weekday cycle for special days, then
Slovak, which is the language every reading is authored in first.
"""
import logging

from divina.i18n.translations import FALLBACK_LANGUAGE
from divina.liturgy.services import (
    ORDINARY_CYCLE, find_calendar_day, is_special_day, reading_cycle,
)
from .models import LectioSource

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 300

ERROR_NO_LECTIO_KEY = 'Calendar day has no assigned lectio chapter key'
ERROR_YEAR_NOT_FOUND = 'Liturgical year not found'
ERROR_SOURCE_NOT_FOUND = 'Lectio source not found for any language'


class CalendarDayNotFound(Exception):
    """No calendar entry exists for the date in the requested or fallback language"""


class LectioResolution:
    """Outcome of resolving a date: the source found (or an error) and how it was found"""

    def __init__(self, day, lang, requested_lang, cycle=None, special=False, source=None, error=None):
        self.day = day
        self.lang = lang
        self.requested_lang = requested_lang
        self.cycle = cycle
        self.special = special
        self.source = source
        self.error = error

    @property
    def found(self):
        return self.source is not None

    def meta(self):
        return {
            'date': self.day.date.isoformat(),
            'requested_lang': self.requested_lang,
            'lang': self.source.lang if self.source else self.lang,
            'cycle': self.source.cycle if self.source else self.cycle,
            'lectionary_cycle': self.day.liturgical_year.lectionary_cycle if self.day.liturgical_year else None,
            'is_special_day': self.special,
            'lectio_key': self.day.lectio_key,
            'celebration_title': self.day.celebration_title,
            'celebration_colour': self.day.celebration_colour,
        }


def source_lookup_order(lang, cycle, special):
    """(lang, cycle) pairs to try, in order, for one chapter key"""
    attempts = [(lang, cycle)]
    if special and cycle != ORDINARY_CYCLE:
        attempts.append((lang, ORDINARY_CYCLE))
    if lang != FALLBACK_LANGUAGE:
        attempts.append((FALLBACK_LANGUAGE, cycle))
        if special:
            attempts.append((FALLBACK_LANGUAGE, ORDINARY_CYCLE))

    ordered = []
    for attempt in attempts:
        if attempt not in ordered:
            ordered.append(attempt)
    return ordered


def find_source(chapter_key, attempts, checked_only=False):
    queryset = LectioSource.objects.filter(chapter_key=chapter_key)
    if checked_only:
        queryset = queryset.filter(checked=True)
    for lang, cycle in attempts:
        source = queryset.filter(lang=lang, cycle=cycle).first()
        if source is not None:
            logger.debug(f"Lectio source for {chapter_key} found as {lang}/{cycle}")
            return source
    return None


def resolve_lectio(day_date, lang):
    """
    Resolve the reading for ``day_date`` in ``lang``.

    Raises CalendarDayNotFound when no calendar day exists. Every other
    failure is reported through ``LectioResolution.error``.
    """
    day, day_lang = find_calendar_day(day_date, lang, FALLBACK_LANGUAGE)
    if day is None:
        raise CalendarDayNotFound(f"No calendar day for {day_date} ({lang})")

    resolution = LectioResolution(day, day_lang, requested_lang=lang)

    if not day.lectio_key:
        resolution.error = ERROR_NO_LECTIO_KEY
        return resolution

    if day.liturgical_year is None:
        resolution.error = ERROR_YEAR_NOT_FOUND
        return resolution

    resolution.special = is_special_day(day.celebration_title, day.celebration_rank_num)
    resolution.cycle = reading_cycle(day, day.liturgical_year)

    attempts = source_lookup_order(day_lang, resolution.cycle, resolution.special)
    resolution.source = find_source(day.lectio_key, attempts)
    if resolution.source is None:
        logger.warning(f"No lectio source for key {day.lectio_key} on {day_date} (tried {attempts})")
        resolution.error = ERROR_SOURCE_NOT_FOUND
    return resolution


def make_preview(text, length=PREVIEW_LENGTH):
    if not text:
        return ''
    if len(text) <= length:
        return text
    return text[:length] + '...'


def today_preview(day_date, lang):
    """
    Compact reading for the home screen. Only reviewed (checked) sources are
    shown and only the weekday-cycle fallback is tried.
    """
    day, day_lang = find_calendar_day(day_date, lang, FALLBACK_LANGUAGE)
    if day is None:
        raise CalendarDayNotFound(f"No calendar day for {day_date} ({lang})")

    liturgical_day = {
        'date': day.date.isoformat(),
        'season': day.season,
        'celebration_title': day.celebration_title,
        'celebration_rank': day.celebration_rank,
        'celebration_colour': day.celebration_colour,
    }

    source = None
    if day.lectio_key and day.liturgical_year is not None:
        cycle = reading_cycle(day, day.liturgical_year)
        attempts = [(day_lang, cycle)]
        if cycle != ORDINARY_CYCLE:
            attempts.append((day_lang, ORDINARY_CYCLE))
        source = find_source(day.lectio_key, attempts, checked_only=True)

    lectio = None
    if source is not None:
        lectio = {
            'id': source.id,
            'chapter_key': source.chapter_key,
            'scripture_reference': source.scripture_reference,
            'book': source.book,
            'chapter': source.chapter,
            'bible_1_title': source.bible_1_title,
            'bible_1': source.bible_1,
            'bible_1_audio': source.bible_1_audio,
            'lectio_preview': make_preview(source.lectio_text),
            'actio_text': source.actio_text,
            'reference': source.reference,
            'has_meditatio': bool(source.meditatio_text),
            'has_oratio': bool(source.oratio_text),
            'has_contemplatio': bool(source.contemplatio_text),
            'has_actio': bool(source.actio_text),
            'has_audio': source.has_audio,
        }

    return {'lang': day_lang, 'liturgicalDay': liturgical_day, 'lectio': lectio}
