from django.urls import path
from .views import (
    article_list, article_detail, category_list,
    admin_article_list_create, admin_article_detail,
    admin_category_list_create, admin_category_detail,
    article_cache_invalidate, category_cache_invalidate,
)

urlpatterns = [
    path('articles/', article_list, name='article-list'),
    path('articles/invalidate/', article_cache_invalidate, name='article-cache-invalidate'),
    path('articles/<slug:slug>/', article_detail, name='article-detail'),
    path('categories/', category_list, name='article-category-list'),
    path('categories/invalidate/', category_cache_invalidate, name='article-category-cache-invalidate'),
    path('admin/articles/', admin_article_list_create, name='admin-article-list-create'),
    path('admin/articles/<int:pk>/', admin_article_detail, name='admin-article-detail'),
    path('admin/article-categories/', admin_category_list_create, name='admin-article-category-list-create'),
    path('admin/article-categories/<int:pk>/', admin_category_detail, name='admin-article-category-detail'),
]
