import pytest
from decimal import Decimal
from datetime import date, timedelta
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import AccountStatus, Role, User
from apps.claims.models import ClaimedPromotion
from apps.promotions.models import Industry, Promotion


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

def make_user(email, role, **extra):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        role=role,
        status=AccountStatus.ACTIVE,
        email_verified=True,
        **extra
    )


@pytest.fixture
def consumer(db):
    return make_user('analytics_user@example.com', Role.USER, name='Analytics User')


@pytest.fixture
def other_consumer(db):
    return make_user('other_user@example.com', Role.USER, name='Other User')


@pytest.fixture
def seller(db):
    return make_user('analytics_seller@example.com', Role.SELLER, business_name='Corner Bakery')


@pytest.fixture
def admin_user(db):
    return make_user('analytics_admin@example.com', Role.ADMIN, name='Admin')


# =============================================================================
# Promotions
# =============================================================================

@pytest.fixture
def food(db):
    industry, _ = Industry.objects.get_or_create(name='Food')
    return industry


@pytest.fixture
def technology(db):
    industry, _ = Industry.objects.get_or_create(name='Technology')
    return industry


@pytest.fixture
def promotion_factory(seller, food):
    def create(duration_days=7, **overrides):
        fields = {
            'title': 'Half-price croissants',
            'description': 'Fresh every morning',
            'start_date': date.today(),
            'end_date': date.today() + timedelta(days=duration_days),
            'banner_url': '/media/promotion-banners/banner.png',
            'seller': seller,
            'industry': food,
            'quantity': 10,
            'original_price': Decimal('10.00'),
            'promotional_price': Decimal('6.00'),
            'is_approved': True,
        }
        fields.update(overrides)
        return Promotion.objects.create(**fields)

    return create


@pytest.fixture
def seller_promotions(promotion_factory, consumer, other_consumer):
    """
    Two promotions of the seller:
    - croissants: 2 claims, one of them redeemed
    - coffee: unapproved, no claims
    """
    croissants = promotion_factory(used_quantity=1, pending=1)
    coffee = promotion_factory(title='Free coffee', quantity=5, is_approved=False)

    ClaimedPromotion.objects.create(user=consumer, promotion=croissants, scanned=True)
    ClaimedPromotion.objects.create(user=other_consumer, promotion=croissants)

    return {'croissants': croissants, 'coffee': coffee}


# =============================================================================
# Clients
# =============================================================================

def _authenticate(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def consumer_client(consumer):
    return _authenticate(consumer)


@pytest.fixture
def seller_client(seller):
    return _authenticate(seller)


@pytest.fixture
def admin_client(admin_user):
    return _authenticate(admin_user)
