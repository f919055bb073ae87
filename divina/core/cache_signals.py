"""
Cache invalidation signals
Automatically invalidate cached content when models change
"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging
import threading
from contextlib import contextmanager

from .cache_utils import invalidate_resource_cache

logger = logging.getLogger(__name__)

# Thread-local storage to track signal suspension
_thread_locals = threading.local()

# Model class name -> cached resources that depend on it
MODEL_RESOURCES = {
    'News': ['news'],
    'LectioSource': ['lectio'],
    'LiturgicalCalendarDay': ['calendar'],
    'LiturgicalYear': ['calendar'],
    'Locale': ['locales'],
    'ProgramCategory': ['programs'],
    'Program': ['programs'],
    'ProgramSession': ['programs'],
    'SessionMedia': ['programs'],
    'RosaryDecade': ['rosary'],
    'ArticleCategory': ['categories'],
    'Article': ['articles'],
    'ArticleBlock': ['articles'],
    'SpiritualExercise': ['exercises'],
    'ExercisePricing': ['exercises'],
    'ExerciseTestimonial': ['exercises'],
    'ExerciseGalleryImage': ['exercises'],
    'ExerciseForm': ['exercises'],
}


@contextmanager
def suspend_cache_signals():
    """
    Context manager to temporarily suspend cache invalidation signals.
    Useful for bulk operations (imports, reorders, calendar generation).
    Remember to manually invalidate cache after the block!
    """
    previous = is_suspended()
    try:
        _thread_locals.suspended = True
        yield
    finally:
        _thread_locals.suspended = previous


def is_suspended():
    return getattr(_thread_locals, 'suspended', False)


@receiver([post_save, post_delete])
def invalidate_content_cache(sender, instance, **kwargs):
    """Invalidate cached content when a content model is saved or deleted"""
    if is_suspended():
        return

    resources = MODEL_RESOURCES.get(sender.__name__)
    if not resources:
        return

    for resource in resources:
        try:
            invalidate_resource_cache(resource)
        except Exception as e:
            logger.warning(f"Error invalidating {resource} cache for {sender.__name__}: {e}")
