import re
from rest_framework import serializers
from .models import ShippingZone

COUNTRY_CODE_RE = re.compile(r'^[A-Z]{2}$')


class ShippingZoneSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingZone
        fields = ['id', 'name', 'countries', 'price', 'free_threshold', 'delivery_days', 'is_active',
                  'sort_order', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_countries(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError('Countries must be a list of country codes')
        codes = []
        for code in value:
            code = str(code).strip().upper()
            if not COUNTRY_CODE_RE.match(code):
                raise serializers.ValidationError(f"Invalid country code '{code}'")
            if code not in codes:
                codes.append(code)
        return codes

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError('Price cannot be negative')
        return value

    def validate_free_threshold(self, value):
        if value < 0:
            raise serializers.ValidationError('Free shipping threshold cannot be negative')
        return value
