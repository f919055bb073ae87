from rest_framework import serializers
from .models import LiturgicalYear, LiturgicalCalendarDay


class LiturgicalYearSerializer(serializers.ModelSerializer):
    class Meta:
        model = LiturgicalYear
        fields = ['id', 'year', 'locale_code', 'lectionary_cycle', 'ferial_lectionary',
                  'start_date', 'end_date', 'is_generated', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class LiturgicalCalendarDaySerializer(serializers.ModelSerializer):
    lectionary_cycle = serializers.SerializerMethodField()

    class Meta:
        model = LiturgicalCalendarDay
        fields = ['id', 'date', 'locale_code', 'season', 'season_week', 'weekday',
                  'celebration_title', 'celebration_rank', 'celebration_rank_num', 'celebration_colour',
                  'alternative_celebration_title', 'alternative_celebration_rank',
                  'alternative_celebration_rank_num', 'alternative_celebration_colour',
                  'lectio_key', 'name_days', 'liturgical_year', 'lectionary_cycle',
                  'source_api', 'is_custom_edit', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def get_lectionary_cycle(self, obj):
        return obj.liturgical_year.lectionary_cycle if obj.liturgical_year else None
