from django.core.management.base import BaseCommand
from django.contrib.auth.models import Group, Permission

CONTENT_APPS = ['lectio', 'liturgy', 'rosary', 'programs', 'news', 'articles', 'exercises', 'shop', 'i18n']


class Command(BaseCommand):
    help = 'Create Django user groups for RBAC: Admin, Editor, Moderator'

    def handle(self, *args, **options):
        groups_config = [
            {
                'name': 'Admin',
                'description': 'Full system access including users, settings and the Django admin',
            },
            {
                'name': 'Editor',
                'description': 'Creates and edits content: lectio, calendar, rosary, programs, news, articles, retreats, shipping',
            },
            {
                'name': 'Moderator',
                'description': 'Reviews content and audit logs without changing it',
            },
        ]

        created_count = 0
        existing_count = 0

        for group_config in groups_config:
            group, created = Group.objects.get_or_create(name=group_config['name'])

            if created:
                self.stdout.write(self.style.SUCCESS(f'✓ Created group: {group_config["name"]}'))
                created_count += 1
            else:
                self.stdout.write(f'  Group already exists: {group_config["name"]}')
                existing_count += 1

            if group_config['name'] == 'Admin':
                group.permissions.set(Permission.objects.all())
                self.stdout.write('  Added all permissions to Admin group')
            elif group_config['name'] == 'Editor':
                group.permissions.set(Permission.objects.filter(content_type__app_label__in=CONTENT_APPS))
                self.stdout.write('  Added content permissions to Editor group')
            else:
                group.permissions.set(Permission.objects.filter(
                    content_type__app_label__in=CONTENT_APPS + ['core'],
                    codename__startswith='view_',
                ))
                self.stdout.write('  Added view permissions to Moderator group')

        self.stdout.write(self.style.SUCCESS(
            f'\nCompleted: {created_count} groups created, {existing_count} groups already existed'
        ))
