from django.urls import path
from .views import (
    calendar_proxy, calendar_db,
    liturgical_year_list_create, liturgical_year_detail,
    calendar_day_list_create, calendar_day_detail,
    calendar_cache_invalidate,
)

urlpatterns = [
    path('liturgical-calendar/', calendar_proxy, name='liturgical-calendar-proxy'),
    path('liturgical-calendar/db/', calendar_db, name='liturgical-calendar-db'),
    path('liturgical-calendar/invalidate/', calendar_cache_invalidate, name='liturgical-calendar-invalidate'),
    path('admin/liturgical-years/', liturgical_year_list_create, name='liturgical-year-list-create'),
    path('admin/liturgical-years/<int:pk>/', liturgical_year_detail, name='liturgical-year-detail'),
    path('admin/calendar-days/', calendar_day_list_create, name='calendar-day-list-create'),
    path('admin/calendar-days/<int:pk>/', calendar_day_detail, name='calendar-day-detail'),
]
