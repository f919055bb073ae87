from rest_framework import serializers
from .models import LectioSource


class LectioSourceSerializer(serializers.ModelSerializer):
    has_audio = serializers.BooleanField(read_only=True)

    class Meta:
        model = LectioSource
        fields = [
            'id', 'lang', 'locale', 'book', 'chapter', 'chapter_key', 'scripture_reference', 'cycle', 'id_number',
            'intro', 'intro_audio', 'opening_prayer', 'opening_prayer_audio',
            'bible_1_title', 'bible_1', 'bible_1_audio',
            'bible_2_title', 'bible_2', 'bible_2_audio',
            'bible_3_title', 'bible_3', 'bible_3_audio',
            'lectio_text', 'lectio_audio', 'meditatio_text', 'meditatio_audio',
            'oratio_text', 'oratio_audio', 'contemplatio_text', 'contemplatio_audio',
            'actio_text', 'actio_audio',
            'closing_prayer', 'blessing', 'video_url', 'audio_5_min',
            'reference', 'source_material', 'checked', 'has_audio', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate_chapter_key(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Chapter key is required')
        return value


class LectioSourceListSerializer(serializers.ModelSerializer):
    has_audio = serializers.BooleanField(read_only=True)

    class Meta:
        model = LectioSource
        fields = ['id', 'lang', 'chapter_key', 'cycle', 'book', 'chapter', 'scripture_reference',
                  'checked', 'has_audio', 'updated_at']
