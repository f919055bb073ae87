from django.contrib import admin
from .models import ShippingZone


@admin.register(ShippingZone)
class ShippingZoneAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'price', 'free_threshold', 'delivery_days', 'is_active', 'sort_order']
    list_filter = ['is_active']
    search_fields = ['id', 'name']
    ordering = ['sort_order']
