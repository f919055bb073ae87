"""
Caching utilities for public content queries
Uses Redis (django-redis) in production and local memory elsewhere
"""
from django.core.cache import cache
import hashlib
import logging

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
STATIC_CACHE_TTL = 3600  # 1 hour - locales, translations, article categories
SEMI_STATIC_CACHE_TTL = 900  # 15 minutes - lectio, calendar, lectio sources
DYNAMIC_CACHE_TTL = 300  # 5 minutes - news, programs, rosary, articles, exercises

# Cache key prefixes
NEWS_PREFIX = 'cache:news'
LECTIO_PREFIX = 'cache:lectio'
SOURCES_PREFIX = 'cache:sources'
CALENDAR_PREFIX = 'cache:calendar'
LOCALES_PREFIX = 'cache:locales'
TRANSLATIONS_PREFIX = 'cache:translations'
PROGRAMS_PREFIX = 'cache:programs'
ROSARY_PREFIX = 'cache:rosary'
ARTICLES_PREFIX = 'cache:articles'
CATEGORIES_PREFIX = 'cache:categories'
EXERCISES_PREFIX = 'cache:exercises'

RESOURCE_PREFIXES = {
    'news': [NEWS_PREFIX],
    'lectio': [LECTIO_PREFIX, SOURCES_PREFIX],
    'calendar': [CALENDAR_PREFIX, LECTIO_PREFIX],
    'locales': [LOCALES_PREFIX, TRANSLATIONS_PREFIX],
    'programs': [PROGRAMS_PREFIX],
    'rosary': [ROSARY_PREFIX],
    'articles': [ARTICLES_PREFIX],
    'categories': [CATEGORIES_PREFIX, ARTICLES_PREFIX],
    'exercises': [EXERCISES_PREFIX],
}


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def cache_query(cache_key, fetch, ttl=DYNAMIC_CACHE_TTL):
    """
    Read-through cache. Returns the cached value for ``cache_key`` or calls
    ``fetch`` and stores its result. Cache backend failures fall back to
    ``fetch`` so a broken cache never takes an endpoint down.
    """
    try:
        cached_data = cache.get(cache_key)
    except Exception as e:
        logger.warning(f"Cache read failed for {cache_key}: {str(e)}")
        return fetch()

    if cached_data is not None:
        logger.debug(f"Cache HIT: {cache_key}")
        return cached_data

    logger.debug(f"Cache MISS: {cache_key}")
    result = fetch()
    if result is not None:
        try:
            cache.set(cache_key, result, ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for {cache_key}: {str(e)}")
    return result


def get_cached(cache_key):
    """Cached value or None; backend failures count as a miss"""
    try:
        return cache.get(cache_key)
    except Exception as e:
        logger.warning(f"Cache read failed for {cache_key}: {str(e)}")
        return None


def set_cached(cache_key, data, ttl=DYNAMIC_CACHE_TTL):
    try:
        cache.set(cache_key, data, ttl)
    except Exception as e:
        logger.warning(f"Cache write failed for {cache_key}: {str(e)}")


def invalidate_cache_pattern(pattern):
    """
    Invalidate all cache keys matching a pattern.
    django-redis exposes ``delete_pattern`` (SCAN based); other backends
    cannot enumerate keys, so they are cleared completely.
    """
    try:
        if hasattr(cache, 'delete_pattern'):
            deleted = cache.delete_pattern(f"*{pattern}*")
            logger.info(f"Cache invalidation requested for pattern: {pattern} - Deleted {deleted} keys")
            return deleted
        cache.clear()
        logger.info(f"Cache invalidation requested for pattern: {pattern} - Cleared local cache")
        return None
    except Exception as e:
        logger.warning(f"Could not invalidate cache pattern {pattern}: {str(e)}")
        return None


def invalidate_resource_cache(resource):
    """Invalidate every prefix registered for a resource name"""
    prefixes = RESOURCE_PREFIXES.get(resource)
    if prefixes is None:
        raise ValueError(f"Unknown cache resource: {resource}")
    for prefix in prefixes:
        invalidate_cache_pattern(prefix)
    logger.info(f"Invalidated {resource} cache")
    return prefixes
