import logging
from datetime import date
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.shortcuts import get_object_or_404
from django.db import IntegrityError, transaction
from django.utils import timezone
from divina.core.cache_signals import suspend_cache_signals
from divina.core.cache_utils import (
    cache_query, get_cached, set_cached, make_cache_key, invalidate_resource_cache,
    LECTIO_PREFIX, SOURCES_PREFIX, SEMI_STATIC_CACHE_TTL,
)
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset
from divina.i18n.translations import resolve_language, translate
from .filters import LectioSourceFilter
from .models import LectioSource
from .playlist import PlaylistError, lectio_playlist
from .serializers import LectioSourceSerializer, LectioSourceListSerializer
from .services import (
    CalendarDayNotFound, resolve_lectio, today_preview,
    ERROR_NO_LECTIO_KEY, ERROR_YEAR_NOT_FOUND, ERROR_SOURCE_NOT_FOUND,
)

logger = logging.getLogger('divina.lectio')

ERROR_MESSAGE_KEYS = {
    ERROR_NO_LECTIO_KEY: 'error.no_lectio_key',
    ERROR_YEAR_NOT_FOUND: 'error.year_not_found',
    ERROR_SOURCE_NOT_FOUND: 'error.source_not_found',
}


def _parse_date(value):
    if not value:
        raise ValueError('Date parameter is required (YYYY-MM-DD)')
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _resolution_error_response(resolution, lang):
    return Response({
        'data': None,
        'error': resolution.error,
        'message': translate(ERROR_MESSAGE_KEYS.get(resolution.error, ''), lang),
        'meta': resolution.meta(),
    }, status=status.HTTP_404_NOT_FOUND)


def _calendar_missing_response(day_date, lang):
    return Response({
        'data': None,
        'error': 'Calendar day not found',
        'message': translate('error.calendar_day_not_found', lang),
        'meta': {'date': day_date.isoformat(), 'requested_lang': lang},
    }, status=status.HTTP_404_NOT_FOUND)


@api_view(['GET'])
@permission_classes([AllowAny])
def lectio_by_date(request):
    """Full lectio reading for a calendar date: GET ?date=2025-03-02&lang=sk"""
    try:
        day_date = _parse_date(request.query_params.get('date'))
    except ValueError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    lang = resolve_language(request)

    cache_key = f"{LECTIO_PREFIX}:date:{day_date.isoformat()}:lang:{lang}"
    cached = get_cached(cache_key)
    if cached is not None:
        return Response(cached)

    try:
        resolution = resolve_lectio(day_date, lang)
    except CalendarDayNotFound:
        logger.info(f"No calendar day for {day_date} ({lang})")
        return _calendar_missing_response(day_date, lang)

    if not resolution.found:
        return _resolution_error_response(resolution, lang)

    payload = {
        'data': LectioSourceSerializer(resolution.source).data,
        'meta': resolution.meta(),
    }
    set_cached(cache_key, payload, SEMI_STATIC_CACHE_TTL)
    return Response(payload)


@api_view(['GET'])
@permission_classes([AllowAny])
def lectio_today(request):
    """Home screen preview of today's reading"""
    lang = resolve_language(request)
    today = timezone.localdate()

    try:
        data = cache_query(
            f"{LECTIO_PREFIX}:today:{today.isoformat()}:lang:{lang}",
            lambda: today_preview(today, lang),
            SEMI_STATIC_CACHE_TTL,
        )
    except CalendarDayNotFound:
        return _calendar_missing_response(today, lang)
    return Response(data)


@api_view(['GET'])
@permission_classes([AllowAny])
def lectio_playlist_view(request):
    """Audio playlist for a date: GET ?date=...&lang=...&bible=bible_1&mode=none|short|long"""
    try:
        day_date = _parse_date(request.query_params.get('date'))
    except ValueError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    lang = resolve_language(request)
    mode = request.query_params.get('mode', 'none')
    bible = request.query_params.get('bible')

    try:
        resolution = resolve_lectio(day_date, lang)
    except CalendarDayNotFound:
        return _calendar_missing_response(day_date, lang)

    if not resolution.found:
        return _resolution_error_response(resolution, lang)

    try:
        playlist = lectio_playlist(resolution.source, bible=bible, mode=mode, lang=lang)
    except PlaylistError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    playlist['meta'] = resolution.meta()
    return Response(playlist)


@api_view(['GET'])
@permission_classes([AllowAny])
def lectio_source_list(request):
    """Paginated public list of lectio sources"""
    params = {key: request.query_params.get(key) for key in
              ['lang', 'chapter_key', 'cycle', 'checked', 'search', 'page', 'limit']}

    def fetch():
        queryset = LectioSourceFilter(request.query_params, queryset=LectioSource.objects.all()).qs
        return paginate_queryset(request, queryset.order_by('chapter_key', 'lang', 'cycle'),
                                 LectioSourceListSerializer, default_limit=50)

    return Response(cache_query(make_cache_key(f"{SOURCES_PREFIX}:list", **params), fetch, SEMI_STATIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def lectio_source_detail(request, pk):
    source = get_object_or_404(LectioSource, pk=pk)
    return Response(LectioSourceSerializer(source).data)


# Admin views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_lectio_source_list_create(request):
    """List all lectio sources or create a new one"""
    if request.method == 'GET':
        queryset = LectioSourceFilter(request.query_params, queryset=LectioSource.objects.all()).qs
        return Response(paginate_queryset(request, queryset.order_by('-updated_at'),
                                          LectioSourceListSerializer, default_limit=50))

    serializer = LectioSourceSerializer(data=request.data)
    if serializer.is_valid():
        try:
            source = serializer.save()
        except IntegrityError:
            return Response({'error': 'A lectio source with this chapter key, language and cycle already exists'},
                            status=status.HTTP_400_BAD_REQUEST)
        logger.info(f"Lectio source {source} created by {request.user.username}")
        create_audit_log(request, 'create', 'LectioSource', source.id, object_name=str(source))
        return Response(LectioSourceSerializer(source).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_lectio_source_detail(request, pk):
    """Retrieve, update or delete a lectio source"""
    source = get_object_or_404(LectioSource, pk=pk)

    if request.method == 'GET':
        return Response(LectioSourceSerializer(source).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = LectioSourceSerializer(source, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            try:
                serializer.save()
            except IntegrityError:
                return Response({'error': 'A lectio source with this chapter key, language and cycle already exists'},
                                status=status.HTTP_400_BAD_REQUEST)
            create_audit_log(request, 'update', 'LectioSource', source.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=str(source))
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'LectioSource', source.id, object_name=str(source))
        source.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_lectio_source_import(request):
    """
    Bulk create or update lectio sources.

    Body: a list of source objects. Items are matched on
    (chapter_key, lang, cycle); the whole import is rolled back when any item
    is invalid.
    """
    items = request.data
    if not isinstance(items, list) or not items:
        return Response({'error': 'Expected a non-empty list of lectio sources'}, status=status.HTTP_400_BAD_REQUEST)

    created = 0
    updated = 0
    errors = {}
    with suspend_cache_signals(), transaction.atomic():
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                errors[index] = {'non_field_errors': ['Expected an object']}
                continue
            existing = LectioSource.objects.filter(
                chapter_key=str(item.get('chapter_key', '')).strip(),
                lang=item.get('lang', 'sk'),
                cycle=item.get('cycle', 'N'),
            ).first()
            serializer = LectioSourceSerializer(existing, data=item, partial=existing is not None)
            if not serializer.is_valid():
                errors[index] = serializer.errors
                continue
            serializer.save()
            if existing is None:
                created += 1
            else:
                updated += 1
        if errors:
            transaction.set_rollback(True)

    if errors:
        logger.warning(f"Lectio import rejected: {len(errors)} invalid items")
        return Response({'error': 'Import failed, no sources were saved', 'details': errors},
                        status=status.HTTP_400_BAD_REQUEST)

    invalidate_resource_cache('lectio')
    create_audit_log(request, 'import', 'LectioSource', 'bulk', changes={'created': created, 'updated': updated})
    logger.info(f"Lectio import by {request.user.username}: {created} created, {updated} updated")
    return Response({'created': created, 'updated': updated}, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def lectio_cache_invalidate(request):
    """Drop cached readings and source lists"""
    invalidate_resource_cache('lectio')
    create_audit_log(request, 'cache_invalidate', 'LectioSource', 'all')
    return Response({'success': True, 'message': 'Lectio cache invalidated'})
