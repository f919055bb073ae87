from decimal import Decimal
from django.db import models


class ShippingZone(models.Model):
    """
    A group of destination countries sharing one shipping price.
    A zone with an empty country list is the fallback for every other country.
    """
    id = models.CharField(max_length=50, primary_key=True)
    name = models.CharField(max_length=255)
    countries = models.JSONField(default=list, blank=True, help_text="ISO 3166-1 alpha-2 codes")
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    free_threshold = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    delivery_days = models.CharField(max_length=20, blank=True, help_text="e.g. '2-4'")
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.id})"

    @property
    def is_default(self):
        return not self.countries

    class Meta:
        db_table = 'shipping_zones'
        ordering = ['sort_order', 'id']
