from django.contrib import admin
from .models import LectioSource


@admin.register(LectioSource)
class LectioSourceAdmin(admin.ModelAdmin):
    list_display = ['chapter_key', 'lang', 'cycle', 'scripture_reference', 'checked', 'updated_at']
    list_filter = ['lang', 'cycle', 'checked']
    search_fields = ['chapter_key', 'scripture_reference', 'book']
    ordering = ['chapter_key', 'lang', 'cycle']
    readonly_fields = ['created_at', 'updated_at']
