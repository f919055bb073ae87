from django.urls import path
from .views import (
    program_list, program_category_list, program_detail, program_session_detail,
    admin_category_list_create, admin_category_detail,
    admin_program_list_create, admin_program_detail,
    admin_session_list_create, admin_session_detail, admin_session_reorder,
    admin_media_list_create, admin_media_detail, admin_media_reorder,
    programs_cache_invalidate,
)

urlpatterns = [
    path('programs/', program_list, name='program-list'),
    path('programs/invalidate/', programs_cache_invalidate, name='programs-cache-invalidate'),
    path('program-categories/', program_category_list, name='program-category-list'),
    path('programs/<slug:category>/<slug:slug>/', program_detail, name='program-detail'),
    path('programs/<slug:category>/<slug:slug>/sessions/<int:order>/', program_session_detail,
         name='program-session-detail'),
    path('admin/program-categories/', admin_category_list_create, name='admin-program-category-list-create'),
    path('admin/program-categories/<int:pk>/', admin_category_detail, name='admin-program-category-detail'),
    path('admin/programs/', admin_program_list_create, name='admin-program-list-create'),
    path('admin/programs/<int:pk>/', admin_program_detail, name='admin-program-detail'),
    path('admin/programs/<int:program_pk>/sessions/', admin_session_list_create, name='admin-session-list-create'),
    path('admin/sessions/<int:pk>/', admin_session_detail, name='admin-session-detail'),
    path('admin/sessions/<int:pk>/reorder/', admin_session_reorder, name='admin-session-reorder'),
    path('admin/sessions/<int:session_pk>/media/', admin_media_list_create, name='admin-media-list-create'),
    path('admin/media/<int:pk>/', admin_media_detail, name='admin-media-detail'),
    path('admin/media/<int:pk>/reorder/', admin_media_reorder, name='admin-media-reorder'),
]
