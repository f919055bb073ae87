"""
Liturgical calendar rules and queries.

A day's reading cycle depends on what kind of day it is: Sundays and
celebrations ranked above an ordinary weekday read from the Sunday cycle of
their liturgical year (A, B or C), while ordinary weekdays share cycle N.
"""
import re
from datetime import date, timedelta

from .models import LiturgicalYear, LiturgicalCalendarDay

ORDINARY_CYCLE = 'N'
SUNDAY_CYCLES = ['C', 'A', 'B']

WEEKDAY_NAMES = [
    # sk
    'pondelok', 'utorok', 'streda', 'štvrtok', 'piatok', 'sobota',
    # cz
    'pondělí', 'úterý', 'středa', 'čtvrtek', 'pátek',
    # en
    'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday',
    # es
    'lunes', 'martes', 'miércoles', 'jueves', 'viernes', 'sábado',
]
ORDINARY_TIME_PHRASES = [
    'v cezročnom období',  # sk
    'v mezidobí',  # cz
    'in ordinary time',  # en
    'del tiempo ordinario',  # es
]
SUNDAY_NAMES = ['nedeľa', 'neděle', 'sunday', 'domingo']

WEEKDAY_TITLE_RE = re.compile(
    r'(%s).+(%s)' % ('|'.join(WEEKDAY_NAMES), '|'.join(ORDINARY_TIME_PHRASES)),
    re.IGNORECASE,
)
SUNDAY_TITLE_RE = re.compile(r'(%s)' % '|'.join(SUNDAY_NAMES), re.IGNORECASE)


def is_ordinary_weekday(title):
    """True for weekdays of Ordinary Time, e.g. 'Monday of the 3rd week in Ordinary Time'"""
    return bool(title) and bool(WEEKDAY_TITLE_RE.search(title))


def is_special_day(title, rank_num=None):
    """Sundays and days ranked above an ordinary weekday, excluding ordinary weekdays"""
    if is_ordinary_weekday(title):
        return False
    names_sunday = bool(title) and bool(SUNDAY_TITLE_RE.search(title))
    return names_sunday or (rank_num is not None and rank_num > 1)


def reading_cycle(day, liturgical_year):
    """Cycle used to look up the readings of ``day``"""
    if is_special_day(day.celebration_title, day.celebration_rank_num):
        return liturgical_year.lectionary_cycle
    return ORDINARY_CYCLE


def lectionary_cycle_for_year(year):
    """Sunday cycle of the liturgical year ending in ``year`` (2025 -> C, 2026 -> A)"""
    return SUNDAY_CYCLES[year % 3]


def ferial_lectionary_for_year(year):
    """Weekday lectionary: I in odd years, II in even years"""
    return 1 if year % 2 else 2


def first_sunday_of_advent(civil_year):
    """First Sunday of Advent falling in ``civil_year`` (fourth Sunday before Christmas)"""
    christmas = date(civil_year, 12, 25)
    days_back = (christmas.weekday() + 1) % 7 or 7
    fourth_sunday = christmas - timedelta(days=days_back)
    return fourth_sunday - timedelta(weeks=3)


def liturgical_year_bounds(year):
    """Start and end dates of the liturgical year that ends in civil ``year``"""
    start = first_sunday_of_advent(year - 1)
    end = first_sunday_of_advent(year) - timedelta(days=1)
    return start, end


def liturgical_year_for_date(day_date):
    """Civil year number of the liturgical year containing ``day_date``"""
    if day_date >= first_sunday_of_advent(day_date.year):
        return day_date.year + 1
    return day_date.year


def get_or_create_liturgical_year(year, locale_code, is_generated=False):
    start_date, end_date = liturgical_year_bounds(year)
    liturgical_year, _ = LiturgicalYear.objects.update_or_create(
        year=year,
        locale_code=locale_code,
        defaults={
            'lectionary_cycle': lectionary_cycle_for_year(year),
            'ferial_lectionary': ferial_lectionary_for_year(year),
            'start_date': start_date,
            'end_date': end_date,
            'is_generated': is_generated,
        },
    )
    return liturgical_year


def find_calendar_day(day_date, lang, fallback_lang='sk'):
    """
    Calendar day for (date, lang), retrying with ``fallback_lang`` when the
    requested language has no entry. Returns (day, language actually used);
    day is None when neither exists.
    """
    day = LiturgicalCalendarDay.objects.select_related('liturgical_year').filter(
        date=day_date, locale_code=lang
    ).first()
    if day is not None:
        return day, lang

    if fallback_lang and lang != fallback_lang:
        day = LiturgicalCalendarDay.objects.select_related('liturgical_year').filter(
            date=day_date, locale_code=fallback_lang
        ).first()
        if day is not None:
            return day, fallback_lang

    return None, lang


def serialize_celebrations(day):
    celebrations = [{
        'title': day.celebration_title,
        'rank': day.celebration_rank,
        'rank_num': day.celebration_rank_num,
        'colour': day.celebration_colour,
    }]
    if day.alternative_celebration_title:
        celebrations.append({
            'title': day.alternative_celebration_title,
            'rank': day.alternative_celebration_rank,
            'rank_num': day.alternative_celebration_rank_num,
            'colour': day.alternative_celebration_colour,
        })
    return [celebration for celebration in celebrations if celebration['title']]


def serialize_day(day):
    """Public shape of a stored calendar day"""
    return {
        'date': day.date.isoformat(),
        'season': day.season,
        'season_week': day.season_week,
        'weekday': day.weekday,
        'celebrations': serialize_celebrations(day),
    }


def days_between(locale_code, start, end):
    return LiturgicalCalendarDay.objects.filter(
        locale_code=locale_code, date__gte=start, date__lte=end
    ).order_by('date')


def month_bounds(year, month):
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1) - timedelta(days=1)
    else:
        end = date(year, month + 1, 1) - timedelta(days=1)
    return start, end


def calendar_day_from_remote(payload, locale_code, liturgical_year=None, source_api='calapi'):
    """Unsaved LiturgicalCalendarDay built from a CalAPI day payload"""
    celebrations = payload.get('celebrations') or []
    main = celebrations[0] if celebrations else {}
    alternative = celebrations[1] if len(celebrations) > 1 else {}
    return LiturgicalCalendarDay(
        date=date.fromisoformat(payload['date']),
        locale_code=locale_code,
        season=payload.get('season') or '',
        season_week=payload.get('season_week'),
        weekday=payload.get('weekday') or '',
        celebration_title=main.get('title') or '',
        celebration_rank=main.get('rank') or '',
        celebration_rank_num=main.get('rank_num'),
        celebration_colour=main.get('colour') or '',
        alternative_celebration_title=alternative.get('title'),
        alternative_celebration_rank=alternative.get('rank'),
        alternative_celebration_rank_num=alternative.get('rank_num'),
        alternative_celebration_colour=alternative.get('colour'),
        liturgical_year=liturgical_year,
        source_api=source_api,
        is_custom_edit=False,
    )
