from django.contrib import admin
from .models import RosaryDecade


@admin.register(RosaryDecade)
class RosaryDecadeAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'lang', 'order', 'is_published', 'updated_at']
    list_filter = ['category', 'lang', 'is_published']
    search_fields = ['title', 'bible_text', 'author']
    ordering = ['category', 'lang', 'order']
    readonly_fields = ['created_at', 'updated_at']
