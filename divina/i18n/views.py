import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.shortcuts import get_object_or_404
from divina.core.cache_utils import (
    cache_query, invalidate_resource_cache,
    LOCALES_PREFIX, TRANSLATIONS_PREFIX, STATIC_CACHE_TTL,
)
from divina.core.permissions import IsAdmin
from divina.core.utils import create_audit_log
from .models import Locale
from .serializers import LocaleSerializer
from .translations import SUPPORTED_LANGUAGES, get_translations, normalize_language, resolve_language

logger = logging.getLogger('divina.i18n')


@api_view(['GET'])
@permission_classes([AllowAny])
def locale_list(request):
    """Active content languages"""
    def fetch():
        locales = Locale.objects.filter(is_active=True).order_by('name')
        return LocaleSerializer(locales, many=True).data

    return Response(cache_query(f"{LOCALES_PREFIX}:active", fetch, STATIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def translation_table(request):
    """Server-side labels for one language"""
    requested = request.query_params.get('lang')
    if requested and not normalize_language(requested):
        return Response(
            {'error': f"Unsupported language '{requested}'. Supported: {', '.join(SUPPORTED_LANGUAGES)}"},
            status=status.HTTP_400_BAD_REQUEST
        )
    lang = resolve_language(request)
    data = cache_query(f"{TRANSLATIONS_PREFIX}:{lang}", lambda: get_translations(lang), STATIC_CACHE_TTL)
    return Response({'lang': lang, 'translations': data})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_locale_list_create(request):
    """List all locales (including inactive) or create one"""
    if request.method == 'GET':
        serializer = LocaleSerializer(Locale.objects.all().order_by('name'), many=True)
        return Response(serializer.data)

    serializer = LocaleSerializer(data=request.data)
    if serializer.is_valid():
        locale = serializer.save()
        logger.info(f"Locale '{locale.code}' created by {request.user.username}")
        create_audit_log(request, 'create', 'Locale', locale.id, changes=request.data, object_name=locale.code)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_locale_detail(request, pk):
    """Retrieve, update or delete a locale"""
    locale = get_object_or_404(Locale, pk=pk)

    if request.method == 'GET':
        return Response(LocaleSerializer(locale).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = LocaleSerializer(locale, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Locale', locale.id, changes=request.data, object_name=locale.code)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'Locale', locale.id, object_name=locale.code)
        locale.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def locale_cache_invalidate(request):
    invalidate_resource_cache('locales')
    create_audit_log(request, 'cache_invalidate', 'Locale', 'all')
    return Response({'success': True, 'message': 'Locale cache invalidated'})
