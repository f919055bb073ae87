import logging
from datetime import date
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.throttling import UserRateThrottle
from django.shortcuts import get_object_or_404
from django.db import IntegrityError
from django.utils import timezone
from divina.core.cache_utils import (
    cache_query, invalidate_resource_cache, CALENDAR_PREFIX, SEMI_STATIC_CACHE_TTL,
)
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset
from .calapi import CalAPIClient, CalendarServiceError, VALID_LANGUAGES
from .models import LiturgicalYear, LiturgicalCalendarDay
from .serializers import LiturgicalYearSerializer, LiturgicalCalendarDaySerializer
from .services import days_between, month_bounds, serialize_day

logger = logging.getLogger('divina.liturgy')


class CalendarProxyThrottle(UserRateThrottle):
    scope = 'calendar_proxy'


def _int_param(request, name):
    value = request.query_params.get(name)
    if value in (None, ''):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{name}' must be a number")


def _multi_day(request, client, year, month, day):
    """One day from several language calendars; 502 only when every language fails"""
    if not (year or month or day):
        today = timezone.localdate()
        year, month, day = today.year, today.month, today.day
    elif not (year and month and day):
        return Response({'error': 'Year, month and day are required'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        day_date = date(year, month, day)
    except ValueError:
        return Response({'error': 'Invalid date'}, status=status.HTTP_400_BAD_REQUEST)

    requested = request.query_params.get('langs', '')
    languages = [code.strip().lower() for code in requested.split(',') if code.strip()] or VALID_LANGUAGES
    unsupported = [code for code in languages if code not in VALID_LANGUAGES]
    if unsupported:
        return Response({'error': f"Unsupported languages: {', '.join(unsupported)}. "
                                  f"Supported: {', '.join(VALID_LANGUAGES)}"},
                        status=status.HTTP_400_BAD_REQUEST)

    days, errors = client.multi_day(year, month, day, languages)
    payload = {'date': day_date.isoformat(), 'languages': languages, 'days': days, 'errors': errors}
    if not days:
        return Response(payload, status=status.HTTP_502_BAD_GATEWAY)
    return Response(payload)


@api_view(['GET'])
@permission_classes([AllowAny])
@throttle_classes([CalendarProxyThrottle])
def calendar_proxy(request):
    """
    Proxy to the remote CalAPI calendar.

    GET ?action=lectionary&year=2025&lang=cs
    GET ?action=year&year=2025
    GET ?action=month&year=2025&month=12
    GET ?action=day&year=2025&month=12&day=8
    GET ?action=today
    GET ?action=multi&year=2025&month=12&day=8&langs=cs,en,la  (same day in several languages)
    """
    action = request.query_params.get('action', 'day')
    lang = request.query_params.get('lang', 'cs')

    if lang not in VALID_LANGUAGES:
        return Response({'error': f"Invalid language. Supported: {', '.join(VALID_LANGUAGES)}"},
                        status=status.HTTP_400_BAD_REQUEST)

    try:
        year = _int_param(request, 'year')
        month = _int_param(request, 'month')
        day = _int_param(request, 'day')
    except ValueError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    client = CalAPIClient()
    try:
        if action == 'lectionary':
            if not year:
                return Response({'error': 'Year is required'}, status=status.HTTP_400_BAD_REQUEST)
            return Response(client.lectionary(year, lang))
        elif action == 'year':
            if not year:
                return Response({'error': 'Year is required'}, status=status.HTTP_400_BAD_REQUEST)
            days = client.year(year, lang)
            return Response({'year': year, 'lang': lang, 'total_days': len(days), 'days': days})
        elif action == 'month':
            if not year or not month:
                return Response({'error': 'Year and month are required'}, status=status.HTTP_400_BAD_REQUEST)
            return Response({'year': year, 'month': month, 'lang': lang, 'days': client.month(year, month, lang)})
        elif action == 'day':
            if not year or not month or not day:
                return Response({'error': 'Year, month and day are required'}, status=status.HTTP_400_BAD_REQUEST)
            return Response(client.day(year, month, day, lang))
        elif action == 'today':
            return Response(client.today(lang))
        elif action == 'multi':
            return _multi_day(request, client, year, month, day)
        return Response({'error': 'Invalid action. Supported: lectionary, year, month, day, today, multi'},
                        status=status.HTTP_400_BAD_REQUEST)
    except CalendarServiceError as e:
        logger.error(f"Calendar proxy failed for action={action}: {str(e)}")
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)


@api_view(['GET'])
@permission_classes([AllowAny])
def calendar_db(request):
    """
    Stored (pregenerated) calendar, same shapes as the proxy.

    GET ?action=lectionary|year|month|day&year=...&month=...&day=...&lang=sk
    """
    action = request.query_params.get('action', 'day')
    lang = request.query_params.get('lang', 'sk').strip().lower()

    try:
        year = _int_param(request, 'year')
        month = _int_param(request, 'month')
        day = _int_param(request, 'day')
    except ValueError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if action not in ('lectionary', 'year', 'month', 'day'):
        return Response({'error': 'Invalid action. Supported: lectionary, year, month, day'},
                        status=status.HTTP_400_BAD_REQUEST)
    if not year:
        return Response({'error': 'Year is required'}, status=status.HTTP_400_BAD_REQUEST)

    if action == 'lectionary':
        liturgical_year = LiturgicalYear.objects.filter(year=year, locale_code=lang).first()
        if liturgical_year is None:
            return Response({'error': 'Year not found in database'}, status=status.HTTP_404_NOT_FOUND)
        return Response({
            'year': year,
            'lectionary': liturgical_year.lectionary_cycle,
            'ferial_lectionary': liturgical_year.ferial_lectionary,
        })

    if action == 'year':
        def fetch_year():
            days = [serialize_day(d) for d in days_between(lang, date(year, 1, 1), date(year, 12, 31))]
            return {'year': year, 'lang': lang, 'total_days': len(days), 'days': days,
                    'source': 'database-pregenerated'}
        return Response(cache_query(f"{CALENDAR_PREFIX}:year:{year}:lang:{lang}", fetch_year, SEMI_STATIC_CACHE_TTL))

    if action == 'month':
        if not month:
            return Response({'error': 'Year and month are required'}, status=status.HTTP_400_BAD_REQUEST)
        try:
            start, end = month_bounds(year, month)
        except ValueError:
            return Response({'error': 'Invalid month'}, status=status.HTTP_400_BAD_REQUEST)

        def fetch_month():
            days = [serialize_day(d) for d in days_between(lang, start, end)]
            return {'year': year, 'month': month, 'lang': lang, 'days': days, 'source': 'database-pregenerated'}
        return Response(cache_query(f"{CALENDAR_PREFIX}:month:{year}-{month}:lang:{lang}", fetch_month, SEMI_STATIC_CACHE_TTL))

    if not month or not day:
        return Response({'error': 'Year, month and day are required'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        day_date = date(year, month, day)
    except ValueError:
        return Response({'error': 'Invalid date'}, status=status.HTTP_400_BAD_REQUEST)

    calendar_day = LiturgicalCalendarDay.objects.filter(date=day_date, locale_code=lang).first()
    if calendar_day is None:
        return Response({'error': 'Day not found in database'}, status=status.HTTP_404_NOT_FOUND)
    data = serialize_day(calendar_day)
    data.update({'lang': lang, 'source': 'database-pregenerated'})
    return Response(data)


# Admin: liturgical years
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def liturgical_year_list_create(request):
    if request.method == 'GET':
        queryset = LiturgicalYear.objects.all()
        locale_code = request.query_params.get('locale')
        if locale_code:
            queryset = queryset.filter(locale_code=locale_code)
        return Response(LiturgicalYearSerializer(queryset, many=True).data)

    serializer = LiturgicalYearSerializer(data=request.data)
    if serializer.is_valid():
        liturgical_year = serializer.save()
        create_audit_log(request, 'create', 'LiturgicalYear', liturgical_year.id, changes=request.data,
                         object_name=str(liturgical_year))
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def liturgical_year_detail(request, pk):
    liturgical_year = get_object_or_404(LiturgicalYear, pk=pk)

    if request.method == 'GET':
        return Response(LiturgicalYearSerializer(liturgical_year).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = LiturgicalYearSerializer(liturgical_year, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'LiturgicalYear', liturgical_year.id, changes=request.data,
                             object_name=str(liturgical_year))
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'LiturgicalYear', liturgical_year.id, object_name=str(liturgical_year))
        liturgical_year.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# Admin: calendar days
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def calendar_day_list_create(request):
    """List calendar days (paginated, filterable) or create one"""
    if request.method == 'GET':
        queryset = LiturgicalCalendarDay.objects.select_related('liturgical_year')

        locale_code = request.query_params.get('locale')
        if locale_code:
            queryset = queryset.filter(locale_code=locale_code)
        date_from = request.query_params.get('date_from')
        if date_from:
            queryset = queryset.filter(date__gte=date_from)
        date_to = request.query_params.get('date_to')
        if date_to:
            queryset = queryset.filter(date__lte=date_to)
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(celebration_title__icontains=search)
        if request.query_params.get('missing_lectio') in ('1', 'true'):
            queryset = queryset.filter(lectio_key__isnull=True)

        queryset = queryset.order_by('date', 'locale_code')
        return Response(paginate_queryset(request, queryset, LiturgicalCalendarDaySerializer, default_limit=50))

    serializer = LiturgicalCalendarDaySerializer(data=request.data)
    if serializer.is_valid():
        try:
            day = serializer.save(is_custom_edit=True)
        except IntegrityError:
            return Response({'error': 'A calendar day for this date and locale already exists'},
                            status=status.HTTP_400_BAD_REQUEST)
        create_audit_log(request, 'create', 'LiturgicalCalendarDay', day.id, changes=request.data, object_name=str(day))
        return Response(LiturgicalCalendarDaySerializer(day).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def calendar_day_detail(request, pk):
    """Retrieve, edit or delete a calendar day. Edits mark the day as custom."""
    day = get_object_or_404(LiturgicalCalendarDay, pk=pk)

    if request.method == 'GET':
        return Response(LiturgicalCalendarDaySerializer(day).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = LiturgicalCalendarDaySerializer(day, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save(is_custom_edit=True)
            logger.info(f"Calendar day {day.date} ({day.locale_code}) edited by {request.user.username}")
            create_audit_log(request, 'update', 'LiturgicalCalendarDay', day.id, changes=request.data, object_name=str(day))
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'LiturgicalCalendarDay', day.id, object_name=str(day))
        day.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def calendar_cache_invalidate(request):
    invalidate_resource_cache('calendar')
    create_audit_log(request, 'cache_invalidate', 'LiturgicalCalendarDay', 'all')
    return Response({'success': True, 'message': 'Calendar cache invalidated'})
