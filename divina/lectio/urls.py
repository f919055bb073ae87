from django.urls import path
from .views import (
    lectio_by_date, lectio_today, lectio_playlist_view,
    lectio_source_list, lectio_source_detail,
    admin_lectio_source_list_create, admin_lectio_source_detail, admin_lectio_source_import,
    lectio_cache_invalidate,
)

urlpatterns = [
    path('lectio/', lectio_by_date, name='lectio-by-date'),
    path('lectio/today/', lectio_today, name='lectio-today'),
    path('lectio/playlist/', lectio_playlist_view, name='lectio-playlist'),
    path('lectio/invalidate/', lectio_cache_invalidate, name='lectio-cache-invalidate'),
    path('lectio-sources/', lectio_source_list, name='lectio-source-list'),
    path('lectio-sources/<int:pk>/', lectio_source_detail, name='lectio-source-detail'),
    path('admin/lectio-sources/', admin_lectio_source_list_create, name='admin-lectio-source-list-create'),
    path('admin/lectio-sources/import/', admin_lectio_source_import, name='admin-lectio-source-import'),
    path('admin/lectio-sources/<int:pk>/', admin_lectio_source_detail, name='admin-lectio-source-detail'),
]
