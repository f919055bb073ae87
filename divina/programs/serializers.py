from rest_framework import serializers
from .models import ProgramCategory, Program, ProgramSession, SessionMedia


class ProgramCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ProgramCategory
        fields = ['id', 'name', 'slug', 'description', 'color', 'icon', 'display_order', 'is_active',
                  'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class SessionMediaSerializer(serializers.ModelSerializer):
    class Meta:
        model = SessionMedia
        fields = ['id', 'session', 'media_type', 'title', 'content', 'media_order', 'duration_minutes',
                  'thumbnail_url', 'file_size_mb', 'is_published', 'created_at', 'updated_at']
        read_only_fields = ['session', 'media_order', 'created_at', 'updated_at']

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError('Content is required')
        return value


class ProgramSessionSerializer(serializers.ModelSerializer):
    media_count = serializers.SerializerMethodField()

    class Meta:
        model = ProgramSession
        fields = ['id', 'program', 'title', 'description', 'session_order', 'duration_minutes',
                  'is_published', 'media_count', 'created_at', 'updated_at']
        read_only_fields = ['program', 'session_order', 'created_at', 'updated_at']

    def get_media_count(self, obj):
        return obj.media.count()


class ProgramSerializer(serializers.ModelSerializer):
    category_slug = serializers.CharField(source='category.slug', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = Program
        fields = ['id', 'title', 'slug', 'category', 'category_slug', 'category_name', 'description',
                  'image_url', 'author', 'lang', 'total_sessions', 'total_duration_minutes', 'is_featured',
                  'is_published', 'display_order', 'published_at', 'created_at', 'updated_at']
        read_only_fields = ['total_sessions', 'total_duration_minutes', 'created_at', 'updated_at']

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Title is required')
        return value


class ProgramListSerializer(serializers.ModelSerializer):
    category_slug = serializers.CharField(source='category.slug', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = Program
        fields = ['id', 'title', 'slug', 'category_slug', 'category_name', 'description', 'image_url',
                  'author', 'lang', 'total_sessions', 'total_duration_minutes', 'is_featured',
                  'is_published', 'published_at']
