from django.urls import path
from .views import (
    exercise_list, exercise_detail, exercise_cache_invalidate,
    admin_exercise_list_create, admin_exercise_detail, admin_exercise_duplicate,
    admin_related_list_create, admin_related_detail,
)

urlpatterns = [
    path('spiritual-exercises/', exercise_list, name='exercise-list'),
    path('spiritual-exercises/invalidate/', exercise_cache_invalidate, name='exercise-cache-invalidate'),
    path('spiritual-exercises/<slug:slug>/', exercise_detail, name='exercise-detail'),
    path('admin/spiritual-exercises/', admin_exercise_list_create, name='admin-exercise-list-create'),
    path('admin/spiritual-exercises/<int:pk>/', admin_exercise_detail, name='admin-exercise-detail'),
    path('admin/spiritual-exercises/<int:pk>/duplicate/', admin_exercise_duplicate, name='admin-exercise-duplicate'),
    path('admin/spiritual-exercises/<int:pk>/<slug:kind>/', admin_related_list_create,
         name='admin-exercise-related-list-create'),
    path('admin/spiritual-exercises/<int:pk>/<slug:kind>/<int:item_pk>/', admin_related_detail,
         name='admin-exercise-related-detail'),
]
