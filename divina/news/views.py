import logging
import math
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.shortcuts import get_object_or_404
from divina.core.cache_utils import cache_query, make_cache_key, invalidate_resource_cache, NEWS_PREFIX, DYNAMIC_CACHE_TTL
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset, parse_positive_int
from .filters import NewsFilter
from .models import News
from .serializers import NewsSerializer

logger = logging.getLogger('divina.news')

NEWS_QUERY_PARAMS = ['search', 'title', 'summary', 'content', 'dateFrom', 'dateTo']


@api_view(['GET'])
@permission_classes([AllowAny])
def news_list(request):
    """
    Newest news first: GET ?lang=sk&page=1&limit=20&search=...
    Response: {data, total, page, limit, totalPages}
    """
    lang = request.query_params.get('lang') or 'sk'
    page = parse_positive_int(request.query_params.get('page'), 1)
    limit = parse_positive_int(request.query_params.get('limit'), 20, maximum=100)

    filterset = NewsFilter(request.query_params, queryset=News.objects.filter(lang=lang))
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)

    def fetch():
        queryset = filterset.qs.order_by('-published_at', '-id')
        total = queryset.count()
        offset = (page - 1) * limit
        return {
            'data': NewsSerializer(queryset[offset:offset + limit], many=True).data,
            'total': total,
            'page': page,
            'limit': limit,
            'totalPages': math.ceil(total / limit),
        }

    params = {key: request.query_params.get(key, '') for key in NEWS_QUERY_PARAMS}
    cache_key = make_cache_key(f"{NEWS_PREFIX}:list", lang=lang, page=page, limit=limit, **params)
    return Response(cache_query(cache_key, fetch, DYNAMIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def news_detail(request, pk):
    news = get_object_or_404(News, pk=pk)
    return Response(NewsSerializer(news).data)


# Admin views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_news_list_create(request):
    """List all news (any language) or create a news item"""
    if request.method == 'GET':
        queryset = NewsFilter(request.query_params, queryset=News.objects.all()).qs
        lang = request.query_params.get('lang')
        if lang:
            queryset = queryset.filter(lang=lang)
        return Response(paginate_queryset(request, queryset.order_by('-published_at', '-id'),
                                          NewsSerializer, default_limit=20))

    serializer = NewsSerializer(data=request.data)
    if serializer.is_valid():
        news = serializer.save()
        logger.info(f"News '{news.title}' created by {request.user.username}")
        create_audit_log(request, 'create', 'News', news.id, object_name=news.title)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_news_detail(request, pk):
    news = get_object_or_404(News, pk=pk)

    if request.method == 'GET':
        return Response(NewsSerializer(news).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = NewsSerializer(news, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'News', news.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=news.title)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'News', news.id, object_name=news.title)
        news.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def news_cache_invalidate(request):
    """Drop every cached news page"""
    invalidate_resource_cache('news')
    create_audit_log(request, 'cache_invalidate', 'News', 'all')
    return Response({'success': True, 'message': 'News cache invalidated'})
