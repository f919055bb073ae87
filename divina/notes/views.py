import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from django.db.models import Q
from .models import Note
from .serializers import NoteSerializer

logger = logging.getLogger('divina.notes')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def note_list_create(request):
    """The user's own notes, most recently edited first: GET ?q=..."""
    if request.method == 'GET':
        notes = Note.objects.filter(user=request.user)
        query = request.query_params.get('q', '').strip()
        if query:
            notes = notes.filter(
                Q(title__icontains=query) |
                Q(content__icontains=query) |
                Q(bible_reference__icontains=query) |
                Q(bible_quote__icontains=query)
            )
        return Response(NoteSerializer(notes.order_by('-updated_at', '-id'), many=True).data)

    serializer = NoteSerializer(data=request.data)
    if serializer.is_valid():
        serializer.save(user=request.user)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def note_detail(request, pk):
    """Notes of other users are reported as missing"""
    note = get_object_or_404(Note, pk=pk, user=request.user)

    if request.method == 'GET':
        return Response(NoteSerializer(note).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = NoteSerializer(note, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        logger.debug(f"Note {note.id} deleted by {request.user.username}")
        note.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
