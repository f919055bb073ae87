from django.contrib import admin
from .models import ProgramCategory, Program, ProgramSession, SessionMedia


@admin.register(ProgramCategory)
class ProgramCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'display_order', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']


class ProgramSessionInline(admin.TabularInline):
    model = ProgramSession
    extra = 0
    fields = ['session_order', 'title', 'duration_minutes', 'is_published']
    readonly_fields = ['session_order']


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'lang', 'total_sessions', 'total_duration_minutes',
                    'is_featured', 'is_published', 'display_order']
    list_filter = ['category', 'lang', 'is_featured', 'is_published']
    search_fields = ['title', 'slug', 'author']
    readonly_fields = ['total_sessions', 'total_duration_minutes', 'created_at', 'updated_at']
    inlines = [ProgramSessionInline]


class SessionMediaInline(admin.TabularInline):
    model = SessionMedia
    extra = 0
    fields = ['media_order', 'media_type', 'title', 'duration_minutes', 'is_published']
    readonly_fields = ['media_order']


@admin.register(ProgramSession)
class ProgramSessionAdmin(admin.ModelAdmin):
    list_display = ['title', 'program', 'session_order', 'duration_minutes', 'is_published']
    list_filter = ['is_published', 'program__lang']
    search_fields = ['title', 'program__title']
    readonly_fields = ['session_order', 'created_at', 'updated_at']
    inlines = [SessionMediaInline]


@admin.register(SessionMedia)
class SessionMediaAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'session', 'media_type', 'media_order', 'is_published']
    list_filter = ['media_type', 'is_published']
    readonly_fields = ['media_order', 'created_at', 'updated_at']
