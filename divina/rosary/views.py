import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.shortcuts import get_object_or_404
from django.db.models import Count, Q
from divina.core.cache_utils import (
    cache_query, invalidate_resource_cache, ROSARY_PREFIX, DYNAMIC_CACHE_TTL,
)
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset, parse_bool
from divina.i18n.translations import resolve_language
from divina.lectio.playlist import PlaylistError
from .models import RosaryDecade
from .serializers import RosaryDecadeSerializer, RosaryDecadeListSerializer
from .services import (
    CATEGORIES, DECADES_PER_CATEGORY,
    category_info, decade_playlist, decade_slides, get_decade, is_valid_category,
    lectio_steps, navigation, published_decades,
)

logger = logging.getLogger('divina.rosary')


@api_view(['GET'])
@permission_classes([AllowAny])
def rosary_overview(request):
    """Categories with their published decade counts and the prayer steps"""
    lang = resolve_language(request)

    def fetch():
        counts = dict(
            RosaryDecade.objects.filter(lang=lang, is_published=True)
            .order_by()
            .values_list('category')
            .annotate(total=Count('id'))
        )
        categories = []
        for category in CATEGORIES:
            info = category_info(category, lang)
            info['decade_count'] = min(counts.get(category, 0), DECADES_PER_CATEGORY)
            categories.append(info)
        return {'lang': lang, 'categories': categories, 'lectio': lectio_steps(lang)}

    return Response(cache_query(f"{ROSARY_PREFIX}:overview:{lang}", fetch, DYNAMIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def rosary_category(request, category):
    """Published decades of one category, numbered in prayer order"""
    if not is_valid_category(category):
        return Response({'error': f"Unknown category '{category}'. Supported: {', '.join(CATEGORIES)}"},
                        status=status.HTTP_404_NOT_FOUND)
    lang = resolve_language(request)

    def fetch():
        decades = published_decades(category, lang)[:DECADES_PER_CATEGORY]
        items = []
        for number, decade in enumerate(decades, start=1):
            data = RosaryDecadeListSerializer(decade).data
            data['number'] = number
            items.append(data)
        return {'lang': lang, 'category': category_info(category, lang), 'decades': items}

    return Response(cache_query(f"{ROSARY_PREFIX}:category:{category}:{lang}", fetch, DYNAMIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def rosary_decade(request, category, number):
    """One decade with its slides, audio playlist and previous/next navigation"""
    if not is_valid_category(category):
        return Response({'error': f"Unknown category '{category}'"}, status=status.HTTP_404_NOT_FOUND)
    if number < 1 or number > DECADES_PER_CATEGORY:
        return Response({'error': f'Decade number must be between 1 and {DECADES_PER_CATEGORY}'},
                        status=status.HTTP_404_NOT_FOUND)

    lang = resolve_language(request)
    mode = request.query_params.get('mode', 'none')

    decade = get_decade(category, number, lang)
    if decade is None:
        return Response({'error': 'Decade not found'}, status=status.HTTP_404_NOT_FOUND)

    slides = decade_slides(decade, lang)
    try:
        playlist = decade_playlist(slides, mode, lang)
    except PlaylistError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'lang': lang,
        'category': category_info(category, lang),
        'number': number,
        'decade': RosaryDecadeSerializer(decade).data,
        'slides': slides,
        'playlist': {'mode': mode, 'tracks': playlist},
        'navigation': navigation(category, number, lang),
    })


# Admin views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_rosary_list_create(request):
    """List all decades (filterable) or create a new one"""
    if request.method == 'GET':
        queryset = RosaryDecade.objects.all()
        category = request.query_params.get('category')
        if category:
            queryset = queryset.filter(category=category)
        lang = request.query_params.get('lang')
        if lang:
            queryset = queryset.filter(lang=lang)
        published = parse_bool(request.query_params.get('is_published'))
        if published is not None:
            queryset = queryset.filter(is_published=published)
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(bible_text__icontains=search))
        queryset = queryset.order_by('category', 'lang', 'order', 'id')
        return Response(paginate_queryset(request, queryset, RosaryDecadeListSerializer, default_limit=50))

    serializer = RosaryDecadeSerializer(data=request.data)
    if serializer.is_valid():
        decade = serializer.save()
        logger.info(f"Rosary decade '{decade.title}' created by {request.user.username}")
        create_audit_log(request, 'create', 'RosaryDecade', decade.id, object_name=decade.title)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_rosary_detail(request, pk):
    """Retrieve, update or delete a decade"""
    decade = get_object_or_404(RosaryDecade, pk=pk)

    if request.method == 'GET':
        return Response(RosaryDecadeSerializer(decade).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = RosaryDecadeSerializer(decade, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'RosaryDecade', decade.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=decade.title)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'RosaryDecade', decade.id, object_name=decade.title)
        decade.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def rosary_cache_invalidate(request):
    invalidate_resource_cache('rosary')
    create_audit_log(request, 'cache_invalidate', 'RosaryDecade', 'all')
    return Response({'success': True, 'message': 'Rosary cache invalidated'})
