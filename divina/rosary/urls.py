from django.urls import path
from .views import (
    rosary_overview, rosary_category, rosary_decade,
    admin_rosary_list_create, admin_rosary_detail, rosary_cache_invalidate,
)

urlpatterns = [
    path('rosary/', rosary_overview, name='rosary-overview'),
    path('rosary/invalidate/', rosary_cache_invalidate, name='rosary-cache-invalidate'),
    path('rosary/<str:category>/', rosary_category, name='rosary-category'),
    path('rosary/<str:category>/<int:number>/', rosary_decade, name='rosary-decade'),
    path('admin/rosary/', admin_rosary_list_create, name='admin-rosary-list-create'),
    path('admin/rosary/<int:pk>/', admin_rosary_detail, name='admin-rosary-detail'),
]
