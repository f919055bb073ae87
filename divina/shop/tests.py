"""
Tests for shipping
Tests: zone lookup and fallback, cost calculation, zone administration, default zone seeding
"""
from decimal import Decimal
from io import StringIO
from django.test import TestCase
from django.core.management import call_command
from rest_framework import status
from divina.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from divina.core.models import AuditLog
from divina.shop.models import ShippingZone
from divina.shop.services import ShippingZoneNotFound, calculate_shipping, find_zone


class ShippingServiceTests(TestCase):
    """Test zone lookup and cost calculation"""

    def setUp(self):
        self.home = TestDataFactory.create_shipping_zone('zone1', countries=['SK', 'CZ'], sort_order=1)
        self.europe = TestDataFactory.create_shipping_zone('zone2', countries=['AT', 'DE'], price='5.99',
                                                           free_threshold='80.00', sort_order=2)

    def test_find_zone(self):
        self.assertEqual(find_zone('sk'), self.home)
        self.assertEqual(find_zone(' DE '), self.europe)

    def test_first_zone_wins(self):
        """Test a country listed twice resolves to the lower sort order"""
        TestDataFactory.create_shipping_zone('zone0', countries=['DE'], sort_order=0)
        self.assertEqual(find_zone('DE').id, 'zone0')

    def test_inactive_zones_ignored(self):
        ShippingZone.objects.filter(pk='zone1').update(is_active=False)
        with self.assertRaises(ShippingZoneNotFound):
            find_zone('SK')

    def test_default_zone(self):
        """Test unknown countries use the zone without countries"""
        world = TestDataFactory.create_shipping_zone('world', countries=[], price='24.99', sort_order=9)
        self.assertEqual(find_zone('BR'), world)

    def test_no_zone(self):
        with self.assertRaises(ShippingZoneNotFound):
            find_zone('BR')

    def test_below_threshold(self):
        result = calculate_shipping('SK', Decimal('42.50'))
        self.assertEqual(result['cost'], Decimal('2.99'))
        self.assertFalse(result['isFree'])
        self.assertEqual(result['amountUntilFree'], Decimal('7.50'))
        self.assertEqual(result['zone']['id'], 'zone1')

    def test_threshold_reached(self):
        """Test the threshold itself qualifies for free shipping"""
        result = calculate_shipping('SK', Decimal('50.00'))
        self.assertTrue(result['isFree'])
        self.assertEqual(result['cost'], Decimal('0.00'))
        self.assertEqual(result['amountUntilFree'], Decimal('0.00'))


class ShippingCalculateAPITests(TestCase):
    """Test the public shipping calculation endpoint"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        TestDataFactory.create_shipping_zone('zone1', countries=['SK', 'CZ'])

    def test_calculate(self):
        response = self.client.get('/api/v1/shipping/calculate/', {'country': 'cz', 'subtotal': '10'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['cost'], Decimal('2.99'))
        self.assertEqual(response.data['amountUntilFree'], Decimal('40.00'))

    def test_missing_subtotal_is_zero(self):
        response = self.client.get('/api/v1/shipping/calculate/', {'country': 'SK'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['isFree'])

    def test_country_required(self):
        response = self.client.get('/api/v1/shipping/calculate/', {'subtotal': '10'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_subtotal(self):
        for subtotal in ['abc', '-5', 'NaN', 'Infinity']:
            response = self.client.get('/api/v1/shipping/calculate/', {'country': 'SK', 'subtotal': subtotal})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, subtotal)

    def test_unknown_country(self):
        response = self.client.get('/api/v1/shipping/calculate/', {'country': 'BR'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ShippingZoneAdminAPITests(TestCase):
    """Test shipping zone administration"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())
        self.zone = TestDataFactory.create_shipping_zone('zone1', sort_order=1)

    def test_list(self):
        TestDataFactory.create_shipping_zone('zone0', sort_order=0)
        response = self.client.get('/api/v1/admin/shipping-zones/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data], ['zone0', 'zone1'])

    def test_create_normalizes_countries(self):
        response = self.client.post('/api/v1/admin/shipping-zones/', {
            'id': 'zone2', 'name': 'Stredná Európa', 'countries': ['at', 'HU', 'AT'],
            'price': '5.99', 'free_threshold': '80',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(ShippingZone.objects.get(pk='zone2').countries, ['AT', 'HU'])
        self.assertTrue(AuditLog.objects.filter(model_name='ShippingZone', action='create').exists())

    def test_create_invalid(self):
        response = self.client.post('/api/v1/admin/shipping-zones/', {
            'id': 'zone2', 'name': 'Zlá zóna', 'countries': ['SVK'], 'price': '-1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('countries', response.data)
        self.assertIn('price', response.data)

    def test_patch(self):
        """Test updates name the zone in the body"""
        response = self.client.patch('/api/v1/admin/shipping-zones/', {'id': 'zone1', 'price': '3.49'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(ShippingZone.objects.get(pk='zone1').price, Decimal('3.49'))

    def test_patch_requires_id(self):
        response = self.client.patch('/api/v1/admin/shipping-zones/', {'price': '3.49'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_unknown_zone(self):
        response = self.client.patch('/api/v1/admin/shipping-zones/', {'id': 'nope', 'price': '1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete(self):
        response = self.client.delete('/api/v1/admin/shipping-zones/?id=zone1')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'success': True})
        self.assertFalse(ShippingZone.objects.filter(pk='zone1').exists())

    def test_delete_requires_id(self):
        response = self.client.delete('/api/v1/admin/shipping-zones/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_editor_forbidden(self):
        """Test shipping is limited to administrators"""
        self.client.authenticate_user(TestDataFactory.create_editor())
        response = self.client.get('/api/v1/admin/shipping-zones/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class SeedShippingZonesCommandTests(TestCase):
    def test_seed_creates_default_zones(self):
        """Test eight zones ending with the worldwide fallback"""
        call_command('seed_shipping_zones', stdout=StringIO())
        self.assertEqual(ShippingZone.objects.count(), 8)
        self.assertEqual(find_zone('BR').id, 'zone8')
        self.assertEqual(find_zone('PL').id, 'zone2')

    def test_seed_resets_changed_zones(self):
        call_command('seed_shipping_zones', stdout=StringIO())
        ShippingZone.objects.filter(pk='zone1').update(price=Decimal('9.99'))
        call_command('seed_shipping_zones', stdout=StringIO())
        self.assertEqual(ShippingZone.objects.get(pk='zone1').price, Decimal('2.99'))

    def test_seed_keep_existing(self):
        call_command('seed_shipping_zones', stdout=StringIO())
        ShippingZone.objects.filter(pk='zone1').update(price=Decimal('9.99'))
        call_command('seed_shipping_zones', '--keep-existing', stdout=StringIO())
        self.assertEqual(ShippingZone.objects.get(pk='zone1').price, Decimal('9.99'))
