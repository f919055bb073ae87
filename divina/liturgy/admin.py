from django.contrib import admin
from .models import LiturgicalYear, LiturgicalCalendarDay


@admin.register(LiturgicalYear)
class LiturgicalYearAdmin(admin.ModelAdmin):
    list_display = ['year', 'locale_code', 'lectionary_cycle', 'ferial_lectionary', 'start_date', 'end_date', 'is_generated']
    list_filter = ['locale_code', 'lectionary_cycle', 'ferial_lectionary', 'is_generated']
    ordering = ['-year', 'locale_code']


@admin.register(LiturgicalCalendarDay)
class LiturgicalCalendarDayAdmin(admin.ModelAdmin):
    list_display = ['date', 'locale_code', 'celebration_title', 'celebration_rank_num', 'season', 'lectio_key', 'is_custom_edit']
    list_filter = ['locale_code', 'season', 'celebration_colour', 'is_custom_edit']
    search_fields = ['celebration_title', 'alternative_celebration_title', 'lectio_key', 'name_days']
    date_hierarchy = 'date'
    ordering = ['date']
    raw_id_fields = ['liturgical_year']
