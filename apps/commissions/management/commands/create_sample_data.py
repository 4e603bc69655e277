"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- The artist account (operator) and three clients, one of them VIP
- The character illustration service with its three priced options
- Tags for styles and subjects
- Requests in every pipeline stage, with commissions and progress updates
"""

from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.catalog.models import Service, ServiceOption
from apps.catalog.pricing import estimate_from_counts
from apps.catalog.services import vip_discount_rate
from apps.commissions.models import (
    Commission,
    CommissionRequest,
    CommissionStatus,
    CommissionUpdate,
    RequestStatus,
    Tag,
)


ILLUSTRATION_OPTIONS = [
    # (name, description, formula, min, max)
    ('Characters', 'Additional characters in the piece', '+3+([value]*2)', 1, 10),
    ('Alternatives', 'Alternative versions (outfits, expressions)', '+3*[value]', 0, 10),
    ('Poses', 'Additional poses', '+5+[value]', 1, 5),
]

SAMPLE_REQUESTS = [
    # (client, description, characters, alternatives, poses, nsfw, status, public)
    ('alice', 'Knight portrait in autumn colors', 1, 0, 1, False, RequestStatus.REQUESTED, False),
    ('bob', 'Two adventurers around a campfire', 2, 1, 2, False, RequestStatus.REQUESTED, False),
    ('charlie', 'Pin-up of my original character', 1, 2, 1, True, RequestStatus.REQUESTED, False),
    ('alice', 'Chibi version of my cat', 1, 0, 1, False, CommissionStatus.ACCEPTED, False),
    ('bob', 'Band poster with all four members', 4, 0, 3, False, CommissionStatus.WORKING, True),
    ('charlie', 'Beach scene, mature', 2, 1, 2, True, CommissionStatus.WAITING, False),
    ('alice', 'Dragon rider full illustration', 3, 2, 4, False, CommissionStatus.FINISHED, True),
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        service = self.create_service()
        tags = self.create_tags()
        self.create_requests(users, service, tags)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  artist / artist123 (operator)')
        self.stdout.write('  alice / password123')
        self.stdout.write('  bob / password123 (VIP)')
        self.stdout.write('  charlie / password123')

    def clear_data(self):
        """Clear all data from the database."""
        CommissionUpdate.objects.all().delete()
        Commission.objects.all().delete()
        CommissionRequest.objects.all().delete()
        Tag.objects.all().delete()
        ServiceOption.objects.all().delete()
        Service.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(username='artist').delete()

    def create_users(self):
        """Create the operator and test clients."""
        self.stdout.write('  Creating users...')

        artist, _ = User.objects.get_or_create(
            username='artist',
            defaults={
                'email': 'artist@example.com',
                'is_staff': True,
                'is_superuser': True,
                'description': 'Illustrator taking commissions',
            }
        )
        artist.set_password('artist123')
        artist.save()

        users = {'artist': artist}
        for username, is_vip in [('alice', False), ('bob', True), ('charlie', False)]:
            user, _ = User.objects.get_or_create(
                username=username,
                defaults={
                    'email': f'{username}@example.com',
                    'is_vip': is_vip,
                }
            )
            user.set_password('password123')
            user.save()
            users[username] = user

        return users

    def create_service(self):
        """Create the character illustration service and its options."""
        self.stdout.write('  Creating services...')

        service, _ = Service.objects.get_or_create(
            name='Character Illustration',
            defaults={
                'description': 'Fully rendered character illustration with a simple background.',
                'base_price': Decimal('35.00'),
            }
        )

        for name, description, formula, min_value, max_value in ILLUSTRATION_OPTIONS:
            ServiceOption.objects.get_or_create(
                service=service,
                name=name,
                defaults={
                    'description': description,
                    'price_formula': formula,
                    'min_value': min_value,
                    'max_value': max_value,
                }
            )

        return service

    def create_tags(self):
        """Create style and subject tags."""
        self.stdout.write('  Creating tags...')

        tags = {}
        for name in ['Portrait', 'Full Body', 'Chibi', 'Fantasy', 'Scenery', 'Group']:
            tag, _ = Tag.objects.get_or_create(name=name)
            tags[name] = tag
        return tags

    def create_requests(self, users, service, tags):
        """Create requests across the pipeline, opening commissions where accepted."""
        self.stdout.write('  Creating requests and commissions...')

        today = timezone.localdate()

        for index, row in enumerate(SAMPLE_REQUESTS):
            username, description, characters, alternatives, poses, nsfw, status, public = row
            client = users[username]

            quote = estimate_from_counts(
                characters, alternatives, poses,
                is_vip=client.is_vip,
                discount_rate=vip_discount_rate(),
            )

            commission_request, created = CommissionRequest.objects.get_or_create(
                user=client,
                service=service,
                description=description,
                defaults={
                    'character_count': characters,
                    'alternative_count': alternatives,
                    'pose_count': poses,
                    'is_nsfw': nsfw,
                    'total_price': quote.total_price,
                    'complexity': quote.complexity,
                    'status': status,
                }
            )
            if not created or status == RequestStatus.REQUESTED:
                continue

            commission = Commission.objects.create(
                request=commission_request,
                status=status,
                progress='Sketch approved' if status != CommissionStatus.ACCEPTED else '',
                expected_completion_date=today + timedelta(days=14 + index),
                actual_completion_date=today if status == CommissionStatus.FINISHED else None,
                complexity=commission_request.complexity,
                is_public_work=public,
            )
            commission.tags.set([tags['Fantasy'], tags['Full Body'] if characters > 1 else tags['Portrait']])

            if status in (CommissionStatus.WORKING, CommissionStatus.WAITING, CommissionStatus.FINISHED):
                CommissionUpdate.objects.create(
                    commission=commission,
                    title='Sketch',
                    description='First rough sketch for review.',
                )
            if status == CommissionStatus.FINISHED:
                CommissionUpdate.objects.create(
                    commission=commission,
                    title='Final',
                    description='Finished piece delivered.',
                )
