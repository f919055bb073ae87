from django.contrib import admin
from .models import ArticleCategory, Article, ArticleBlock


class ArticleBlockInline(admin.TabularInline):
    model = ArticleBlock
    extra = 0
    ordering = ['position']


@admin.register(ArticleCategory)
class ArticleCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'color']
    search_fields = ['name']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ['title', 'status', 'lang', 'category', 'author', 'published_at']
    list_filter = ['status', 'lang', 'category']
    search_fields = ['title', 'excerpt', 'content']
    readonly_fields = ['view_count', 'like_count', 'created_at', 'updated_at']
    inlines = [ArticleBlockInline]
