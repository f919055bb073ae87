from django.contrib import admin
from .models import Locale


@admin.register(Locale)
class LocaleAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'native_name', 'is_active', 'updated_at']
    list_filter = ['is_active']
    search_fields = ['code', 'name', 'native_name']
    ordering = ['name']
