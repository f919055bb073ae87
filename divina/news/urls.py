from django.urls import path
from .views import news_list, news_detail, admin_news_list_create, admin_news_detail, news_cache_invalidate

urlpatterns = [
    path('news/', news_list, name='news-list'),
    path('news/invalidate/', news_cache_invalidate, name='news-cache-invalidate'),
    path('news/<int:pk>/', news_detail, name='news-detail'),
    path('admin/news/', admin_news_list_create, name='admin-news-list-create'),
    path('admin/news/<int:pk>/', admin_news_detail, name='admin-news-detail'),
]
