import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from django.shortcuts import get_object_or_404
from django.db import transaction
from django.db.models import Count, Q
from django.db.models.deletion import ProtectedError
from divina.core.cache_utils import (
    cache_query, make_cache_key, invalidate_resource_cache, PROGRAMS_PREFIX, DYNAMIC_CACHE_TTL,
)
from divina.core.permissions import IsContentEditor
from divina.core.utils import create_audit_log, paginate_queryset, parse_bool
from .models import ProgramCategory, Program, ProgramSession, SessionMedia
from .serializers import (
    ProgramCategorySerializer, ProgramSerializer, ProgramListSerializer,
    ProgramSessionSerializer, SessionMediaSerializer,
)
from .services import ReorderError, move_to, neighbours, next_order, renumber

logger = logging.getLogger('divina.programs')


def _parse_target_order(request):
    try:
        return int(request.data.get('target_order')), None
    except (TypeError, ValueError):
        return None, Response({'error': 'target_order must be an integer'}, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([AllowAny])
def program_list(request):
    """Published programs, featured first: GET ?lang=&category=&search="""
    lang = request.query_params.get('lang')
    category = request.query_params.get('category')
    search = request.query_params.get('search', '').strip()

    def fetch():
        queryset = Program.objects.filter(is_published=True).select_related('category')
        if lang:
            queryset = queryset.filter(lang=lang)
        if category:
            queryset = queryset.filter(category__slug=category)
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) | Q(description__icontains=search) | Q(author__icontains=search)
            )
        queryset = queryset.order_by('-is_featured', 'category__display_order', 'display_order', 'title')
        return ProgramListSerializer(queryset, many=True).data

    cache_key = make_cache_key(f"{PROGRAMS_PREFIX}:list", lang=lang, category=category, search=search)
    return Response(cache_query(cache_key, fetch, DYNAMIC_CACHE_TTL))


@api_view(['GET'])
@permission_classes([AllowAny])
def program_category_list(request):
    """Active categories with the number of published programs in each"""
    lang = request.query_params.get('lang')

    def fetch():
        published = Q(programs__is_published=True)
        if lang:
            published &= Q(programs__lang=lang)
        queryset = ProgramCategory.objects.filter(is_active=True).annotate(
            program_count=Count('programs', filter=published)
        ).order_by('display_order', 'name')
        data = []
        for category in queryset:
            item = ProgramCategorySerializer(category).data
            item['program_count'] = category.program_count
            data.append(item)
        return data

    return Response(cache_query(f"{PROGRAMS_PREFIX}:categories:{lang or 'all'}", fetch, DYNAMIC_CACHE_TTL))


def _published_program(request, category, slug):
    queryset = Program.objects.filter(category__slug=category, slug=slug, is_published=True).select_related('category')
    lang = request.query_params.get('lang')
    if lang:
        queryset = queryset.filter(lang=lang)
    return queryset.order_by('lang').first()


@api_view(['GET'])
@permission_classes([AllowAny])
def program_detail(request, category, slug):
    """Program with its published sessions"""
    program = _published_program(request, category, slug)
    if program is None:
        return Response({'error': 'Program not found'}, status=status.HTTP_404_NOT_FOUND)

    sessions = program.sessions.filter(is_published=True).annotate(
        published_media=Count('media', filter=Q(media__is_published=True))
    ).order_by('session_order')
    data = ProgramSerializer(program).data
    data['sessions'] = [{
        'id': session.id,
        'title': session.title,
        'description': session.description,
        'session_order': session.session_order,
        'duration_minutes': session.duration_minutes,
        'media_count': session.published_media,
    } for session in sessions]
    return Response(data)


@api_view(['GET'])
@permission_classes([AllowAny])
def program_session_detail(request, category, slug, order):
    """One published session with its published media and previous/next links"""
    program = _published_program(request, category, slug)
    if program is None:
        return Response({'error': 'Program not found'}, status=status.HTTP_404_NOT_FOUND)

    session = program.sessions.filter(session_order=order, is_published=True).first()
    if session is None:
        return Response({'error': 'Session not found'}, status=status.HTTP_404_NOT_FOUND)

    previous, following = neighbours(session)
    data = ProgramSessionSerializer(session).data
    data['media'] = SessionMediaSerializer(
        session.media.filter(is_published=True).order_by('media_order'), many=True
    ).data
    return Response({
        'program': ProgramListSerializer(program).data,
        'session': data,
        'navigation': {
            'previous': {'session_order': previous.session_order, 'title': previous.title} if previous else None,
            'next': {'session_order': following.session_order, 'title': following.title} if following else None,
        },
    })


# Admin views: categories
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_category_list_create(request):
    if request.method == 'GET':
        categories = ProgramCategory.objects.all().order_by('display_order', 'name')
        return Response(ProgramCategorySerializer(categories, many=True).data)

    serializer = ProgramCategorySerializer(data=request.data)
    if serializer.is_valid():
        category = serializer.save()
        create_audit_log(request, 'create', 'ProgramCategory', category.id, object_name=category.name)
        return Response(ProgramCategorySerializer(category).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_category_detail(request, pk):
    category = get_object_or_404(ProgramCategory, pk=pk)

    if request.method == 'GET':
        return Response(ProgramCategorySerializer(category).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ProgramCategorySerializer(category, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'ProgramCategory', category.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=category.name)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            category.delete()
        except ProtectedError:
            return Response({'error': 'Category still has programs and cannot be deleted'},
                            status=status.HTTP_400_BAD_REQUEST)
        create_audit_log(request, 'delete', 'ProgramCategory', pk, object_name=category.name)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Admin views: programs
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_program_list_create(request):
    """List all programs (filterable) or create a new one"""
    if request.method == 'GET':
        queryset = Program.objects.select_related('category')
        lang = request.query_params.get('lang')
        if lang:
            queryset = queryset.filter(lang=lang)
        category = request.query_params.get('category')
        if category:
            queryset = queryset.filter(category__slug=category)
        published = parse_bool(request.query_params.get('is_published'))
        if published is not None:
            queryset = queryset.filter(is_published=published)
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(author__icontains=search))
        queryset = queryset.order_by('display_order', 'title')
        return Response(paginate_queryset(request, queryset, ProgramListSerializer, default_limit=50))

    serializer = ProgramSerializer(data=request.data)
    if serializer.is_valid():
        program = serializer.save()
        logger.info(f"Program '{program.title}' created by {request.user.username}")
        create_audit_log(request, 'create', 'Program', program.id, object_name=program.title)
        return Response(ProgramSerializer(program).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_program_detail(request, pk):
    program = get_object_or_404(Program, pk=pk)

    if request.method == 'GET':
        return Response(ProgramSerializer(program).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ProgramSerializer(program, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'Program', program.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=program.title)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        create_audit_log(request, 'delete', 'Program', program.id, object_name=program.title)
        program.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# Admin views: sessions
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_session_list_create(request, program_pk):
    """Sessions of a program in order; new sessions are appended"""
    program = get_object_or_404(Program, pk=program_pk)

    if request.method == 'GET':
        sessions = program.sessions.order_by('session_order')
        return Response(ProgramSessionSerializer(sessions, many=True).data)

    serializer = ProgramSessionSerializer(data=request.data)
    if serializer.is_valid():
        with transaction.atomic():
            Program.objects.select_for_update().get(pk=program.pk)
            session = serializer.save(program=program, session_order=next_order(ProgramSession, program.pk))
        create_audit_log(request, 'create', 'ProgramSession', session.id, object_name=session.title)
        return Response(ProgramSessionSerializer(session).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_session_detail(request, pk):
    session = get_object_or_404(ProgramSession, pk=pk)

    if request.method == 'GET':
        data = ProgramSessionSerializer(session).data
        data['media'] = SessionMediaSerializer(session.media.order_by('media_order'), many=True).data
        return Response(data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ProgramSessionSerializer(session, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'ProgramSession', session.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=session.title)
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        program_id = session.program_id
        create_audit_log(request, 'delete', 'ProgramSession', session.id, object_name=session.title)
        session.delete()
        renumber(ProgramSession, program_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_session_reorder(request, pk):
    """Move a session to a new position: POST {"target_order": 3}"""
    session = get_object_or_404(ProgramSession, pk=pk)
    target_order, error_response = _parse_target_order(request)
    if error_response:
        return error_response

    previous_order = session.session_order
    try:
        moved = move_to(session, target_order)
    except ReorderError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if moved:
        invalidate_resource_cache('programs')
        create_audit_log(request, 'reorder', 'ProgramSession', session.id, object_name=session.title,
                         changes={'from': previous_order, 'to': target_order})
    sessions = ProgramSession.objects.filter(program_id=session.program_id).order_by('session_order')
    return Response({'moved': moved, 'sessions': ProgramSessionSerializer(sessions, many=True).data})


# Admin views: media
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_media_list_create(request, session_pk):
    session = get_object_or_404(ProgramSession, pk=session_pk)

    if request.method == 'GET':
        return Response(SessionMediaSerializer(session.media.order_by('media_order'), many=True).data)

    serializer = SessionMediaSerializer(data=request.data)
    if serializer.is_valid():
        with transaction.atomic():
            ProgramSession.objects.select_for_update().get(pk=session.pk)
            media = serializer.save(session=session, media_order=next_order(SessionMedia, session.pk))
        create_audit_log(request, 'create', 'SessionMedia', media.id, object_name=str(media))
        return Response(SessionMediaSerializer(media).data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_media_detail(request, pk):
    media = get_object_or_404(SessionMedia, pk=pk)

    if request.method == 'GET':
        return Response(SessionMediaSerializer(media).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = SessionMediaSerializer(media, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request, 'update', 'SessionMedia', media.id,
                             changes={'fields': sorted(request.data.keys())}, object_name=str(media))
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        session_id = media.session_id
        create_audit_log(request, 'delete', 'SessionMedia', media.id, object_name=str(media))
        media.delete()
        renumber(SessionMedia, session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def admin_media_reorder(request, pk):
    """Move a media item within its session: POST {"target_order": 1}"""
    media = get_object_or_404(SessionMedia, pk=pk)
    target_order, error_response = _parse_target_order(request)
    if error_response:
        return error_response

    previous_order = media.media_order
    try:
        moved = move_to(media, target_order)
    except ReorderError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if moved:
        invalidate_resource_cache('programs')
        create_audit_log(request, 'reorder', 'SessionMedia', media.id, object_name=str(media),
                         changes={'from': previous_order, 'to': target_order})
    items = SessionMedia.objects.filter(session_id=media.session_id).order_by('media_order')
    return Response({'moved': moved, 'media': SessionMediaSerializer(items, many=True).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsContentEditor])
def programs_cache_invalidate(request):
    invalidate_resource_cache('programs')
    create_audit_log(request, 'cache_invalidate', 'Program', 'all')
    return Response({'success': True, 'message': 'Programs cache invalidated'})
