from django.urls import path
from .views import (
    locale_list, translation_table,
    admin_locale_list_create, admin_locale_detail, locale_cache_invalidate,
)

urlpatterns = [
    path('locales/', locale_list, name='locale-list'),
    path('locales/invalidate/', locale_cache_invalidate, name='locale-cache-invalidate'),
    path('translations/', translation_table, name='translation-table'),
    path('admin/locales/', admin_locale_list_create, name='admin-locale-list-create'),
    path('admin/locales/<int:pk>/', admin_locale_detail, name='admin-locale-detail'),
]
