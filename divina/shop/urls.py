from django.urls import path
from .views import shipping_calculate, admin_shipping_zones

urlpatterns = [
    path('shipping/calculate/', shipping_calculate, name='shipping-calculate'),
    path('admin/shipping-zones/', admin_shipping_zones, name='admin-shipping-zones'),
]
