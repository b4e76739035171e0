import pytest
from datetime import timedelta
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import AccountStatus, CodePurpose, Role, User


@pytest.fixture(autouse=True)
def clear_cache():
    """Reset rate-limit windows between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a confirmed consumer."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        name='Test User',
        contact_number='+15550001',
        role=Role.USER,
        status=AccountStatus.ACTIVE,
        email_verified=True,
    )


@pytest.fixture
def seller(db):
    """Create and return a confirmed seller."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        business_name='Corner Bakery',
        role=Role.SELLER,
        status=AccountStatus.ACTIVE,
        email_verified=True,
    )


@pytest.fixture
def admin_user(db):
    """Create and return a marketplace admin."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        name='Admin',
        role=Role.ADMIN,
        status=AccountStatus.ACTIVE,
        email_verified=True,
    )


@pytest.fixture
def user_pending(db):
    """Create a user who has not confirmed the sign-up code ('123456')."""
    user = User.objects.create_user(
        email='pending@example.com',
        password='TestPass123!',
        name='Pending User',
    )
    user.set_one_time_code('123456', CodePurpose.SIGNUP, timezone.now() + timedelta(minutes=10))
    user.save()
    return user


@pytest.fixture
def user_inactive(db):
    """Create and return a deactivated user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        status=AccountStatus.ACTIVE,
        is_active=False,
    )


@pytest.fixture
def user_with_recovery_code(user):
    """Consumer with an active recovery code ('654321')."""
    user.set_one_time_code('654321', CodePurpose.RECOVERY, timezone.now() + timedelta(minutes=10))
    user.save()
    return user


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as the consumer."""
    return _authenticate(api_client, user)


@pytest.fixture
def seller_client(seller):
    return _authenticate(APIClient(), seller)


@pytest.fixture
def admin_client(admin_user):
    return _authenticate(APIClient(), admin_user)
