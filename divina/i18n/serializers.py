from rest_framework import serializers
from .models import Locale


class LocaleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Locale
        fields = ['id', 'code', 'name', 'native_name', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
