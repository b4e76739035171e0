import pytest
from datetime import date, timedelta
from decimal import Decimal
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import AccountStatus, Role, User
from apps.claims.models import ClaimedPromotion
from apps.promotions.models import Industry, Promotion


def make_user(email, role, **extra):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        role=role,
        status=AccountStatus.ACTIVE,
        email_verified=True,
        **extra
    )


@pytest.fixture(autouse=True)
def clear_cache():
    """Reset scan cooldowns between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def no_scan_cooldown(settings):
    settings.SCAN_COOLDOWN_SECONDS = 0


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def consumer(db):
    return make_user('consumer@example.com', Role.USER, name='Consumer')


@pytest.fixture
def other_consumer(db):
    return make_user('other-consumer@example.com', Role.USER, name='Other Consumer')


@pytest.fixture
def seller(db):
    return make_user('seller@example.com', Role.SELLER, business_name='Corner Bakery')


@pytest.fixture
def other_seller(db):
    return make_user('other-seller@example.com', Role.SELLER, business_name='Tech Hub')


@pytest.fixture
def admin_user(db):
    return make_user('admin@example.com', Role.ADMIN, name='Admin')


@pytest.fixture
def industry(db):
    industry, _ = Industry.objects.get_or_create(name='Food')
    return industry


@pytest.fixture
def promotion_factory(seller, industry):
    def create(**overrides):
        fields = {
            'title': 'Half-price croissants',
            'description': 'Fresh every morning',
            'start_date': date.today(),
            'end_date': date.today() + timedelta(days=7),
            'banner_url': '/media/promotion-banners/banner.png',
            'seller': seller,
            'industry': industry,
            'quantity': 10,
            'original_price': Decimal('4.00'),
            'promotional_price': Decimal('2.50'),
            'is_approved': True,
        }
        fields.update(overrides)
        return Promotion.objects.create(**fields)

    return create


@pytest.fixture
def promotion(promotion_factory):
    return promotion_factory()


@pytest.fixture
def last_unit_promotion(promotion_factory):
    """Approved promotion with exactly one unit left."""
    return promotion_factory(title='Last loaf', quantity=1)


@pytest.fixture
def claim(consumer, promotion):
    """Unscanned claim with the counters a real claim would leave."""
    Promotion.objects.filter(id=promotion.id).update(pending=1)
    return ClaimedPromotion.objects.create(user=consumer, promotion=promotion)


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
def other_seller_client(other_seller):
    return _authenticate(other_seller)
