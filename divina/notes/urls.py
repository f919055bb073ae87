from django.urls import path
from .views import note_list_create, note_detail

urlpatterns = [
    path('notes/', note_list_create, name='note-list-create'),
    path('notes/<int:pk>/', note_detail, name='note-detail'),
]
