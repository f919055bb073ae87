from decimal import Decimal
from django.core.management.base import BaseCommand
from django.db import transaction
from divina.shop.models import ShippingZone

DEFAULT_ZONES = [
    ('zone1', 'Slovensko a Česko', ['SK', 'CZ'], '2.99', '50', '2-4'),
    ('zone2', 'Stredná Európa', ['AT', 'HU', 'PL', 'DE'], '5.99', '80', '3-6'),
    ('zone3', 'Západná a Južná Európa',
     ['FR', 'IT', 'ES', 'NL', 'BE', 'GB', 'IE', 'PT', 'GR', 'LU', 'MT', 'CY'], '7.99', '100', '4-8'),
    ('zone4', 'Východná Európa a Balkán',
     ['RO', 'BG', 'HR', 'SI', 'RS', 'BA', 'ME', 'MK', 'AL', 'UA', 'MD', 'BY'], '8.99', '100', '5-10'),
    ('zone5', 'Severná Európa', ['SE', 'NO', 'DK', 'FI', 'IS', 'EE', 'LV', 'LT'], '9.99', '120', '5-10'),
    ('zone6', 'USA a Kanada', ['US', 'CA'], '14.99', '150', '7-14'),
    ('zone7', 'Ázijsko-Pacifický región',
     ['AU', 'NZ', 'JP', 'KR', 'SG', 'HK', 'TW', 'MY', 'TH', 'PH', 'ID', 'VN'], '19.99', '200', '10-20'),
    ('zone8', 'Ostatný svet', [], '24.99', '250', '14-30'),
]


class Command(BaseCommand):
    help = 'Create or reset the default shipping zones'

    def add_arguments(self, parser):
        parser.add_argument(
            '--keep-existing',
            action='store_true',
            help='Only create missing zones, leave existing ones untouched',
        )

    def handle(self, *args, **options):
        created_count = 0
        with transaction.atomic():
            for sort_order, (zone_id, name, countries, price, threshold, days) in enumerate(DEFAULT_ZONES, start=1):
                values = {
                    'name': name,
                    'countries': countries,
                    'price': Decimal(price),
                    'free_threshold': Decimal(threshold),
                    'delivery_days': days,
                    'is_active': True,
                    'sort_order': sort_order,
                }
                if options['keep_existing']:
                    _, created = ShippingZone.objects.get_or_create(id=zone_id, defaults=values)
                else:
                    _, created = ShippingZone.objects.update_or_create(id=zone_id, defaults=values)
                if created:
                    created_count += 1
                    self.stdout.write(self.style.SUCCESS(f'✓ Created zone: {zone_id} ({name})'))
                else:
                    self.stdout.write(f'  Zone already exists: {zone_id}')

        self.stdout.write(self.style.SUCCESS(
            f'\n✓ Shipping zones ready ({created_count} created, {len(DEFAULT_ZONES) - created_count} existing)'
        ))
