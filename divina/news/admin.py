from django.contrib import admin
from .models import News


@admin.register(News)
class NewsAdmin(admin.ModelAdmin):
    list_display = ['title', 'lang', 'published_at', 'updated_at']
    list_filter = ['lang']
    search_fields = ['title', 'summary', 'content']
    date_hierarchy = 'published_at'
    readonly_fields = ['created_at', 'updated_at']
