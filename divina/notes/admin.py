from django.contrib import admin
from .models import Note


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'bible_reference', 'updated_at']
    search_fields = ['title', 'content', 'bible_reference', 'user__username']
    readonly_fields = ['created_at', 'updated_at']
