"""
Ordering of program sessions and session media.

Sessions are numbered 1..n within their program and media 1..n within their
session; both orders are unique per parent. Moving an item rewrites the whole
sibling list inside one transaction: every sibling is first parked on a
negative temporary order so the final renumbering never collides with the
unique constraint.
"""
import logging

from django.db import transaction
from django.db.models import Count, Max, Sum

from .models import Program, ProgramSession, SessionMedia

logger = logging.getLogger(__name__)

# model -> (parent foreign key, order field)
ORDERED_MODELS = {
    ProgramSession: ('program', 'session_order'),
    SessionMedia: ('session', 'media_order'),
}


class ReorderError(Exception):
    pass


def _ordering_of(model):
    try:
        return ORDERED_MODELS[model]
    except KeyError:
        raise ReorderError(f"{model.__name__} is not an ordered model")


def siblings(model, parent_id):
    parent_field, order_field = _ordering_of(model)
    return model.objects.filter(**{f'{parent_field}_id': parent_id}).order_by(order_field, 'id')


def next_order(model, parent_id):
    """Order for a new item appended to the end of its parent"""
    _, order_field = _ordering_of(model)
    current = siblings(model, parent_id).aggregate(highest=Max(order_field))['highest']
    return (current or 0) + 1


def _write_order(model, order_field, ids):
    for index, pk in enumerate(ids, start=1):
        model.objects.filter(pk=pk).update(**{order_field: -index})
    for index, pk in enumerate(ids, start=1):
        model.objects.filter(pk=pk).update(**{order_field: index})


def move_to(item, target_order):
    """
    Move ``item`` to the 1-based position ``target_order`` among its siblings.

    Returns False when the item already sits at the target. Raises
    ReorderError when the item no longer exists or the target is out of
    range; the transaction is rolled back on any failure.
    """
    model = type(item)
    parent_field, order_field = _ordering_of(model)
    parent_id = getattr(item, f'{parent_field}_id')

    with transaction.atomic():
        locked = list(siblings(model, parent_id).select_for_update())
        current = next((sibling for sibling in locked if sibling.pk == item.pk), None)
        if current is None:
            raise ReorderError(f"{model.__name__} {item.pk} not found")
        if target_order < 1 or target_order > len(locked):
            raise ReorderError(f"Target order must be between 1 and {len(locked)}")
        if getattr(current, order_field) == target_order:
            return False

        ids = [sibling.pk for sibling in locked if sibling.pk != item.pk]
        ids.insert(target_order - 1, item.pk)
        _write_order(model, order_field, ids)

    logger.info(f"Moved {model.__name__} {item.pk} to position {target_order}")
    setattr(item, order_field, target_order)
    return True


def renumber(model, parent_id):
    """Close the gaps left in a parent's ordering, e.g. after a delete"""
    _, order_field = _ordering_of(model)
    with transaction.atomic():
        ids = list(siblings(model, parent_id).select_for_update().values_list('pk', flat=True))
        _write_order(model, order_field, ids)
    return len(ids)


def refresh_program_totals(program_id):
    totals = ProgramSession.objects.filter(program_id=program_id).aggregate(
        count=Count('id'), duration=Sum('duration_minutes'),
    )
    Program.objects.filter(pk=program_id).update(
        total_sessions=totals['count'],
        total_duration_minutes=round(totals['duration'] or 0),
    )


def refresh_session_duration(session_id):
    """
    A session's duration is the sum of its media durations as soon as any
    media item carries one; otherwise the manually entered value stays.
    """
    media = SessionMedia.objects.filter(session_id=session_id, duration_minutes__isnull=False)
    totals = media.aggregate(count=Count('id'), duration=Sum('duration_minutes'))
    if totals['count']:
        ProgramSession.objects.filter(pk=session_id).update(duration_minutes=totals['duration'])

    program_id = ProgramSession.objects.filter(pk=session_id).values_list('program_id', flat=True).first()
    if program_id is not None:
        refresh_program_totals(program_id)


def neighbours(session):
    """Previous and next published session of the same program"""
    published = ProgramSession.objects.filter(program_id=session.program_id, is_published=True)
    previous = published.filter(session_order__lt=session.session_order).order_by('-session_order').first()
    following = published.filter(session_order__gt=session.session_order).order_by('session_order').first()
    return previous, following
