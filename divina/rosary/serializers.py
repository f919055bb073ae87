from rest_framework import serializers
from .models import RosaryDecade


class RosaryDecadeSerializer(serializers.ModelSerializer):
    has_audio = serializers.BooleanField(read_only=True)

    class Meta:
        model = RosaryDecade
        fields = [
            'id', 'lang', 'category', 'title', 'bible_text', 'intro', 'intro_audio', 'illustration_url',
            'opening_prayers', 'opening_prayers_audio', 'lectio_text', 'lectio_audio',
            'commentary', 'commentary_audio', 'meditatio_text', 'meditatio_audio',
            'oratio_html', 'oratio_audio', 'contemplatio_text', 'contemplatio_audio',
            'actio_text', 'actio_audio', 'recording_audio', 'author', 'is_published', 'order',
            'has_audio', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']


class RosaryDecadeListSerializer(serializers.ModelSerializer):
    has_audio = serializers.BooleanField(read_only=True)

    class Meta:
        model = RosaryDecade
        fields = ['id', 'lang', 'category', 'title', 'bible_text', 'illustration_url', 'author',
                  'is_published', 'order', 'has_audio', 'updated_at']
