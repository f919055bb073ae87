"""Shipping zone lookup and shipping cost calculation"""
from decimal import Decimal

from .models import ShippingZone


class ShippingZoneNotFound(Exception):
    pass


def find_zone(country):
    """
    First active zone (by sort order) listing ``country``, otherwise the
    first active default zone (one without countries).
    """
    country = (country or '').strip().upper()
    zones = list(ShippingZone.objects.filter(is_active=True).order_by('sort_order', 'id'))

    # JSON containment lookups are not portable to SQLite, so match in Python
    for zone in zones:
        if country in [code.upper() for code in zone.countries]:
            return zone
    for zone in zones:
        if zone.is_default:
            return zone
    raise ShippingZoneNotFound(f"No shipping zone found for country '{country}'")


def calculate_shipping(country, subtotal):
    zone = find_zone(country)
    subtotal = Decimal(subtotal)
    is_free = subtotal >= zone.free_threshold
    return {
        'zone': {
            'id': zone.id,
            'name': zone.name,
            'price': zone.price,
            'free_threshold': zone.free_threshold,
            'delivery_days': zone.delivery_days,
        },
        'cost': Decimal('0.00') if is_free else zone.price,
        'isFree': is_free,
        'amountUntilFree': Decimal('0.00') if is_free else max(Decimal('0.00'), zone.free_threshold - subtotal),
    }
