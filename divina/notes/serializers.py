from rest_framework import serializers
from .models import Note


class NoteSerializer(serializers.ModelSerializer):
    """Title and content are required after trimming; blank optional fields become null"""
    title = serializers.CharField(max_length=255, trim_whitespace=True)
    content = serializers.CharField(trim_whitespace=True)
    bible_reference = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    bible_quote = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Note
        fields = ['id', 'title', 'content', 'bible_reference', 'bible_quote', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def _blank_to_none(self, value):
        if value is None:
            return None
        value = value.strip()
        return value or None

    def validate_bible_reference(self, value):
        return self._blank_to_none(value)

    def validate_bible_quote(self, value):
        return self._blank_to_none(value)
