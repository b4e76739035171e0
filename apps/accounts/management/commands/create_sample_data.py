"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --industries-only

This creates:
- The industry list (16 categories)
- 5 users (admin, two sellers, two consumers)
- 8 promotions, some still awaiting approval
- A few claims, one of them already redeemed
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from decimal import Decimal
from datetime import date, timedelta

from apps.accounts.models import AccountStatus, Role, User
from apps.claims.models import ClaimedPromotion
from apps.claims.services import claim_promotion
from apps.promotions.icons import INDUSTRY_ICONS
from apps.promotions.models import Industry, Promotion

SAMPLE_PASSWORD = 'password123'

SAMPLE_PROMOTIONS = [
    # (seller, industry, title, description, quantity, original, promotional, days, approved)
    ('bakery', 'Food', 'Half-price croissants', 'Fresh butter croissants every morning.',
     20, '3.00', '1.50', 7, True),
    ('bakery', 'Food', 'Sourdough Saturday', 'Any sourdough loaf with a free jar of jam.',
     10, '6.50', '4.90', 14, True),
    ('bakery', 'Hospitality', 'Brunch for two', 'Two brunch plates and two coffees.',
     5, '32.00', '22.00', 30, True),
    ('bakery', 'Food', 'Cake of the week', 'Whole cake, order a day ahead.',
     4, '28.00', '21.00', 21, False),
    ('techhub', 'Technology', 'Laptop tune-up', 'Cleaning, thermal paste and OS check.',
     8, '60.00', '39.00', 30, True),
    ('techhub', 'Technology', 'Screen protector fitted', 'Tempered glass, fitted while you wait.',
     25, '15.00', '9.00', 10, True),
    ('techhub', 'Telecommunications', 'SIM-only starter', 'First month of a data plan free.',
     50, None, '5.00', 60, False),
    ('techhub', 'Education', 'Intro to Python workshop', 'Three evening sessions, laptops provided.',
     12, '120.00', '80.00', 45, True),
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--industries-only',
            action='store_true',
            help='Only create the industry list',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        industries = self.create_industries()
        if options['industries_only']:
            self.stdout.write(self.style.SUCCESS(f'{len(industries)} industries ready.'))
            return

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        promotions = self.create_promotions(users, industries)
        self.create_claims(users, promotions)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write(f'  admin@example.com / {SAMPLE_PASSWORD} (admin)')
        self.stdout.write(f'  bakery@example.com / {SAMPLE_PASSWORD} (seller)')
        self.stdout.write(f'  techhub@example.com / {SAMPLE_PASSWORD} (seller)')
        self.stdout.write(f'  alice@example.com / {SAMPLE_PASSWORD}')
        self.stdout.write(f'  bob@example.com / {SAMPLE_PASSWORD}')

    def clear_data(self):
        """Clear all marketplace data from the database."""
        ClaimedPromotion.objects.all().delete()
        Promotion.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def create_industries(self):
        """Create the industry list."""
        self.stdout.write('  Creating industries...')
        industries = {}
        for name in INDUSTRY_ICONS:
            industries[name], _ = Industry.objects.get_or_create(name=name)
        return industries

    def create_users(self):
        """Create one account per role, plus a second seller and consumer."""
        self.stdout.write('  Creating users...')

        accounts = {
            'admin': ('admin@example.com', Role.ADMIN, {'name': 'Admin User', 'is_staff': True}),
            'bakery': ('bakery@example.com', Role.SELLER, {
                'business_name': 'Corner Bakery',
                'contact_number': '+420 601 111 222',
                'latitude': Decimal('50.087451'),
                'longitude': Decimal('14.420671'),
            }),
            'techhub': ('techhub@example.com', Role.SELLER, {
                'business_name': 'Tech Hub',
                'contact_number': '+420 602 333 444',
                'latitude': Decimal('49.195060'),
                'longitude': Decimal('16.606837'),
            }),
            'alice': ('alice@example.com', Role.USER, {'name': 'Alice'}),
            'bob': ('bob@example.com', Role.USER, {'name': 'Bob'}),
        }

        users = {}
        for key, (email, role, extra) in accounts.items():
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={
                    'role': role,
                    'status': AccountStatus.ACTIVE,
                    'email_verified': True,
                    **extra,
                }
            )
            user.set_password(SAMPLE_PASSWORD)
            user.save()
            users[key] = user

        return users

    def create_promotions(self, users, industries):
        """Create promotions for both sellers."""
        self.stdout.write('  Creating promotions...')

        promotions = []
        today = date.today()
        for seller, industry, title, description, quantity, original, price, days, approved in SAMPLE_PROMOTIONS:
            promotion, _ = Promotion.objects.get_or_create(
                seller=users[seller],
                title=title,
                defaults={
                    'description': description,
                    'industry': industries[industry],
                    'quantity': quantity,
                    'original_price': Decimal(original) if original else None,
                    'promotional_price': Decimal(price),
                    'start_date': today,
                    'end_date': today + timedelta(days=days),
                    'banner_url': f'/media/promotion-banners/{users[seller].id}/sample.png',
                    'is_approved': approved,
                }
            )
            promotions.append(promotion)

        return promotions

    def create_claims(self, users, promotions):
        """Claim a few approved promotions; the first claim is redeemed."""
        self.stdout.write('  Creating claims...')

        approved = [p for p in promotions if p.is_approved]
        plan = [
            (users['alice'], approved[0]),
            (users['alice'], approved[4]),
            (users['bob'], approved[0]),
            (users['bob'], approved[2]),
        ]

        claims = []
        for user, promotion in plan:
            if ClaimedPromotion.objects.filter(user=user, promotion=promotion).exists():
                continue
            claims.append(claim_promotion(user=user, promotion_id=promotion.id))

        if claims:
            first = claims[0]
            first.scanned = True
            first.scanned_at = timezone.now()
            first.scanned_by = first.promotion.seller
            first.save(update_fields=['scanned', 'scanned_at', 'scanned_by'])
            Promotion.objects.filter(id=first.promotion_id).update(
                pending=F('pending') - 1,
                used_quantity=F('used_quantity') + 1,
            )

        self.stdout.write(f'    {len(claims)} claims created')
