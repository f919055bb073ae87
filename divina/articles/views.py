import logging
import math
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.shortcuts import get_object_or_404
from divina.core.cache_utils import (
    cache_query, make_cache_key, invalidate_resource_cache,
    ARTICLES_PREFIX, CATEGORIES_PREFIX, DYNAMIC_CACHE_TTL, STATIC_CACHE_TTL,
)
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset, parse_positive_int
from .filters import ArticleFilter
from .models import ArticleCategory, Article
from .serializers import ArticleCategorySerializer, ArticleSerializer, ArticleDetailSerializer

logger = logging.getLogger('divina.articles')

ARTICLE_QUERY_PARAMS = ['search', 'category', 'author', 'lang', 'tag']


def _articles():
    return Article.objects.select_related('category', 'author')


@api_view(['GET'])
@permission_classes([AllowAny])
def article_list(request):
    """
    Published articles, newest first: GET ?category=<id>&author=<id>&lang=&tag=&search=&page=1&limit=20
    Response: {data, total, page, limit, totalPages}
    """
    page = parse_positive_int(request.query_params.get('page'), 1)
    limit = parse_positive_int(request.query_params.get('limit'), 20, maximum=100)

    params = {key: request.query_params.get(key, '') for key in ARTICLE_QUERY_PARAMS}
    filterset = ArticleFilter(params, queryset=_articles().filter(status='published'))
    if not filterset.is_valid():
        return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)

    def fetch():
        queryset = filterset.qs.order_by('-created_at', '-id')
        total = queryset.count()
        offset = (page - 1) * limit
        return {
            'data': ArticleSerializer(queryset[offset:offset + limit], many=True).data,
            'total': total,
            'page': page,
            'limit': limit,
            'totalPages': math.ceil(total / limit),
        }

    cache_key = make_cache_key(f"{ARTICLES_PREFIX}:list", page=page, limit=limit, **params)
    return Response(cache_query(cache_key, fetch, DYNAMIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def article_detail(request, slug):
    """Published article with its blocks: GET /articles/<slug>/?lang=sk"""
    lang = request.query_params.get('lang', '')

    def fetch():
        queryset = _articles().prefetch_related('blocks').filter(slug=slug, status='published')
        if lang:
            queryset = queryset.filter(lang=lang)
        article = queryset.order_by('-published_at', '-id').first()
        return ArticleDetailSerializer(article).data if article else None

    data = cache_query(make_cache_key(f"{ARTICLES_PREFIX}:detail", slug=slug, lang=lang), fetch, DYNAMIC_CACHE_TTL)
    if data is None:
        return Response({'error': 'Article not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(data)


@api_view(['GET'])
@permission_classes([AllowAny])
def category_list(request):
    """All article categories by name: {data, total}"""
    def fetch():
        data = ArticleCategorySerializer(ArticleCategory.objects.order_by('name'), many=True).data
        return {'data': data, 'total': len(data)}

    return Response(cache_query(f"{CATEGORIES_PREFIX}:all", fetch, STATIC_CACHE_TTL))


# Admin views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_article_list_create(request):
    """List articles in any status or create one (blocks included)"""
    if request.method == 'GET':
        filterset = ArticleFilter(request.query_params, queryset=_articles())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        return Response(paginate_queryset(request, filterset.qs.order_by('-created_at', '-id'),
                                          ArticleSerializer, default_limit=20))

    serializer = ArticleDetailSerializer(data=request.data)
    if serializer.is_valid():
        article = serializer.save(author=request.user)
        logger.info(f"Article '{article.title}' created by {request.user.username}")
        create_audit_log(request, 'create', 'Article', article.id, object_name=article.title,
                         changes={'status': article.status, 'blocks': article.blocks.count()})
        return Response(ArticleDetailSerializer(article).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_article_detail(request, pk):
    article = get_object_or_404(_articles().prefetch_related('blocks'), pk=pk)

    if request.method == 'GET':
        return Response(ArticleDetailSerializer(article).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ArticleDetailSerializer(article, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            article = serializer.save()
            create_audit_log(request, 'update', 'Article', article.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=article.title)
            return Response(ArticleDetailSerializer(Article.objects.get(pk=article.pk)).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'Article', article.id, object_name=article.title)
        article.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_category_list_create(request):
    if request.method == 'GET':
        return Response(ArticleCategorySerializer(ArticleCategory.objects.order_by('name'), many=True).data)

    serializer = ArticleCategorySerializer(data=request.data)
    if serializer.is_valid():
        category = serializer.save()
        create_audit_log(request, 'create', 'ArticleCategory', category.id, object_name=category.name)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_category_detail(request, pk):
    """Deleting a category leaves its articles uncategorised"""
    category = get_object_or_404(ArticleCategory, pk=pk)

    if request.method == 'GET':
        return Response(ArticleCategorySerializer(category).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ArticleCategorySerializer(category, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'ArticleCategory', category.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=category.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'ArticleCategory', category.id, object_name=category.name,
                         changes={'articles': category.articles.count()})
        category.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def article_cache_invalidate(request):
    invalidate_resource_cache('articles')
    create_audit_log(request, 'cache_invalidate', 'Article', 'all')
    return Response({'success': True, 'message': 'Articles cache invalidated'})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def category_cache_invalidate(request):
    """Categories are embedded in article payloads, so both caches are dropped"""
    invalidate_resource_cache('categories')
    create_audit_log(request, 'cache_invalidate', 'ArticleCategory', 'all')
    return Response({'success': True, 'message': 'Categories cache invalidated'})
