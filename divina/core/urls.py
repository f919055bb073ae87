from django.urls import path
from .views import (
    CustomTokenObtainPairView, CustomTokenRefreshView, register, user_me,
    user_list_create, user_detail,
    setting_list_create, setting_detail,
    audit_log_list, audit_log_detail,
    global_search
)

# Account endpoints for any signed-in reader
auth_patterns = [
    path('auth/register/', register, name='register'),
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', user_me, name='user-me'),
]

# Back-office endpoints, grouped with the content admin routes of the other apps
admin_patterns = [
    path('admin/users/', user_list_create, name='user-list-create'),
    path('admin/users/<int:pk>/', user_detail, name='user-detail'),
    path('admin/settings/', setting_list_create, name='setting-list-create'),
    path('admin/settings/<int:pk>/', setting_detail, name='setting-detail'),
    path('admin/audit-logs/', audit_log_list, name='audit-log-list'),
    path('admin/audit-logs/<int:pk>/', audit_log_detail, name='audit-log-detail'),
    path('admin/search/', global_search, name='global-search'),
]

urlpatterns = auth_patterns + admin_patterns
