"""
URL configuration for the divina project.

Every app exposes its REST endpoints under ``api/v1/``.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "Lectio Divina Administration"
admin.site.site_title = "Lectio Divina Admin Portal"
admin.site.index_title = "Content management"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('divina.core.urls')),
    path('api/v1/', include('divina.i18n.urls')),
    path('api/v1/', include('divina.liturgy.urls')),
    path('api/v1/', include('divina.lectio.urls')),
    path('api/v1/', include('divina.rosary.urls')),
    path('api/v1/', include('divina.programs.urls')),
    path('api/v1/', include('divina.news.urls')),
    path('api/v1/', include('divina.notes.urls')),
    path('api/v1/', include('divina.shop.urls')),
    path('api/v1/', include('divina.articles.urls')),
    path('api/v1/', include('divina.exercises.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
]
