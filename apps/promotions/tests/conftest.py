import io
import pytest
from datetime import date, timedelta
from decimal import Decimal
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import AccountStatus, Role, User
from apps.promotions.models import Industry, Promotion


def make_banner(name='banner.png'):
    """Return a small PNG upload."""
    buffer = io.BytesIO()
    Image.new('RGB', (16, 9), color='blue').save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


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
def media_root(settings, tmp_path):
    """Write uploads to a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def consumer(db):
    return make_user('consumer@example.com', Role.USER, name='Consumer')


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
def food(db):
    industry, _ = Industry.objects.get_or_create(name='Food')
    return industry


@pytest.fixture
def technology(db):
    industry, _ = Industry.objects.get_or_create(name='Technology')
    return industry


@pytest.fixture
def promotion_factory(seller, food):
    """Create promotions directly, bypassing the service layer."""

    def create(**overrides):
        fields = {
            'title': 'Half-price croissants',
            'description': 'Fresh every morning',
            'start_date': date.today(),
            'end_date': date.today() + timedelta(days=7),
            'banner_url': '/media/promotion-banners/banner.png',
            'seller': seller,
            'industry': food,
            'quantity': 10,
            'original_price': Decimal('4.00'),
            'promotional_price': Decimal('2.00'),
            'is_approved': True,
        }
        fields.update(overrides)
        return Promotion.objects.create(**fields)

    return create


@pytest.fixture
def promotion(promotion_factory):
    """An approved promotion with 10 units."""
    return promotion_factory()


@pytest.fixture
def unapproved_promotion(promotion_factory):
    return promotion_factory(title='Free coffee', is_approved=False)


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


@pytest.fixture
def admin_client(admin_user):
    return _authenticate(admin_user)
