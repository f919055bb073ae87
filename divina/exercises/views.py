import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.http import Http404
from django.shortcuts import get_object_or_404
from divina.core.cache_utils import (
    cache_query, make_cache_key, invalidate_resource_cache, EXERCISES_PREFIX, DYNAMIC_CACHE_TTL,
)
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset
from .models import SpiritualExercise, ExercisePricing, ExerciseTestimonial, ExerciseGalleryImage, ExerciseForm
from .serializers import (
    SpiritualExerciseSerializer, SpiritualExerciseListSerializer,
    ExercisePricingSerializer, ExerciseTestimonialSerializer, ExerciseGalleryImageSerializer,
    ExerciseFormSerializer, exercise_detail_data,
)
from .services import duplicate_exercise

logger = logging.getLogger('divina.exercises')

# URL segment -> (model, serializer, audit model name)
RELATED_KINDS = {
    'pricing': (ExercisePricing, ExercisePricingSerializer, 'ExercisePricing'),
    'testimonials': (ExerciseTestimonial, ExerciseTestimonialSerializer, 'ExerciseTestimonial'),
    'gallery': (ExerciseGalleryImage, ExerciseGalleryImageSerializer, 'ExerciseGalleryImage'),
    'forms': (ExerciseForm, ExerciseFormSerializer, 'ExerciseForm'),
}


def _related_kind(kind):
    if kind not in RELATED_KINDS:
        raise Http404(f"Unknown item type: {kind}")
    return RELATED_KINDS[kind]


def _with_related(queryset):
    return queryset.select_related('locale').prefetch_related('pricing', 'testimonials', 'gallery', 'forms')


@api_view(['GET'])
@permission_classes([AllowAny])
def exercise_list(request):
    """Published, active exercises by start date: GET ?locale=sk"""
    locale_code = request.query_params.get('locale', '').strip().lower()

    def fetch():
        queryset = SpiritualExercise.objects.select_related('locale').filter(is_published=True, is_active=True)
        if locale_code:
            queryset = queryset.filter(locale__code=locale_code)
        return {'exercises': SpiritualExerciseListSerializer(queryset.order_by('start_date', 'id'), many=True).data}

    cache_key = make_cache_key(f"{EXERCISES_PREFIX}:list", locale=locale_code)
    return Response(cache_query(cache_key, fetch, DYNAMIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def exercise_detail(request, slug):
    """Published exercise with pricing, visible testimonials and gallery, active forms"""
    def fetch():
        exercise = _with_related(SpiritualExercise.objects).filter(
            slug=slug, is_published=True, is_active=True,
        ).first()
        return {'exercise': exercise_detail_data(exercise)} if exercise else None

    data = cache_query(make_cache_key(f"{EXERCISES_PREFIX}:detail", slug=slug), fetch, DYNAMIC_CACHE_TTL)
    if data is None:
        return Response({'error': 'Spiritual exercise not found or not available'},
                        status=status.HTTP_404_NOT_FOUND)
    return Response(data)


# Admin views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_exercise_list_create(request):
    """All exercises, latest first: GET ?locale=<code>|all&search=..."""
    if request.method == 'GET':
        queryset = SpiritualExercise.objects.select_related('locale')
        locale_code = request.query_params.get('locale', '').strip().lower()
        if locale_code and locale_code != 'all':
            queryset = queryset.filter(locale__code=locale_code)
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(title__icontains=search)
        return Response(paginate_queryset(request, queryset.order_by('-start_date', '-id'),
                                          SpiritualExerciseSerializer, default_limit=20))

    serializer = SpiritualExerciseSerializer(data=request.data)
    if serializer.is_valid():
        exercise = serializer.save(created_by=request.user)
        logger.info(f"Spiritual exercise '{exercise.title}' created by {request.user.username}")
        create_audit_log(request, 'create', 'SpiritualExercise', exercise.id, object_name=exercise.title)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_exercise_detail(request, pk):
    exercise = get_object_or_404(_with_related(SpiritualExercise.objects), pk=pk)

    if request.method == 'GET':
        return Response(exercise_detail_data(exercise, public=False))
    elif request.method in ('PUT', 'PATCH'):
        serializer = SpiritualExerciseSerializer(exercise, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'SpiritualExercise', exercise.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=exercise.title)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'SpiritualExercise', exercise.id, object_name=exercise.title)
        exercise.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_exercise_duplicate(request, pk):
    exercise = get_object_or_404(SpiritualExercise, pk=pk)
    copy = duplicate_exercise(exercise, user=request.user)
    create_audit_log(request, 'create', 'SpiritualExercise', copy.id, object_name=copy.title,
                     changes={'duplicated_from': exercise.id})
    return Response(exercise_detail_data(_with_related(SpiritualExercise.objects).get(pk=copy.pk), public=False),
                    status=status.HTTP_201_CREATED)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_related_list_create(request, pk, kind):
    """Pricing, testimonials, gallery images or forms of one exercise"""
    model, serializer_class, model_name = _related_kind(kind)
    exercise = get_object_or_404(SpiritualExercise, pk=pk)

    if request.method == 'GET':
        return Response(serializer_class(model.objects.filter(exercise=exercise), many=True).data)

    serializer = serializer_class(data=request.data)
    if serializer.is_valid():
        item = serializer.save(exercise=exercise)
        create_audit_log(request, 'create', model_name, item.id, object_name=exercise.title,
                         changes={'exercise': exercise.id})
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_related_detail(request, pk, kind, item_pk):
    model, serializer_class, model_name = _related_kind(kind)
    item = get_object_or_404(model.objects.select_related('exercise'), pk=item_pk, exercise_id=pk)

    if request.method == 'GET':
        return Response(serializer_class(item).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = serializer_class(item, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', model_name, item.id, object_name=item.exercise.title,
                             changes={'fields': sorted(request.data.keys())})
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', model_name, item.id, object_name=item.exercise.title)
        item.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def exercise_cache_invalidate(request):
    invalidate_resource_cache('exercises')
    create_audit_log(request, 'cache_invalidate', 'SpiritualExercise', 'all')
    return Response({'success': True, 'message': 'Spiritual exercises cache invalidated'})
