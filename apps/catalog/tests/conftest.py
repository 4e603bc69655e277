import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from apps.accounts.models import User
from apps.accounts.tokens import CommissionRefreshToken
from apps.catalog.models import Service, ServiceOption


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def client_user(db):
    return User.objects.create_user(
        username='client',
        email='client@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def vip_user(db):
    return User.objects.create_user(
        username='vipclient',
        email='vip@example.com',
        password='TestPass123!',
        is_vip=True,
    )


def _authenticate(user):
    client = APIClient()
    refresh = CommissionRefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(client_user):
    """Return an API client authenticated as a regular client."""
    return _authenticate(client_user)


@pytest.fixture
def vip_client(vip_user):
    """Return an API client authenticated as a VIP client."""
    return _authenticate(vip_user)


@pytest.fixture
def service(db):
    """Character illustration with base price 35."""
    return Service.objects.create(
        name='Character Illustration',
        description='Fully rendered character',
        base_price=Decimal('35.00'),
    )


@pytest.fixture
def character_option(service):
    return ServiceOption.objects.create(
        service=service,
        name='Characters',
        price_formula='+3+([value]*2)',
        min_value=1,
        max_value=10,
    )


@pytest.fixture
def alternative_option(service):
    return ServiceOption.objects.create(
        service=service,
        name='Alternatives',
        price_formula='+3*[value]',
        min_value=0,
        max_value=10,
    )


@pytest.fixture
def inactive_option(service):
    return ServiceOption.objects.create(
        service=service,
        name='Retired',
        price_formula='+100',
        is_active=False,
    )


@pytest.fixture
def inactive_service(db):
    return Service.objects.create(
        name='Old Service',
        base_price=Decimal('10.00'),
        is_active=False,
    )
