import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from apps.accounts.models import User
from apps.accounts.tokens import CommissionRefreshToken
from apps.catalog.models import Service, ServiceOption
from apps.commissions.models import (
    Commission,
    CommissionRequest,
    CommissionStatus,
    CommissionUpdate,
)


def _authenticate(user):
    client = APIClient()
    refresh = CommissionRefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def operator(db):
    """The artist account."""
    return User.objects.create_user(
        username='artist',
        email='artist@example.com',
        password='ArtistPass123!',
        is_staff=True,
    )


@pytest.fixture
def client_user(db):
    return User.objects.create_user(
        username='client',
        email='client@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def other_client(db):
    return User.objects.create_user(
        username='otherclient',
        email='other@example.com',
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


@pytest.fixture
def operator_client(operator):
    return _authenticate(operator)


@pytest.fixture
def authenticated_client(client_user):
    return _authenticate(client_user)


@pytest.fixture
def other_client_api(other_client):
    return _authenticate(other_client)


@pytest.fixture
def vip_client(vip_user):
    return _authenticate(vip_user)


@pytest.fixture
def service(db):
    """Character illustration with its three options."""
    service = Service.objects.create(
        name='Character Illustration',
        base_price=Decimal('35.00'),
    )
    ServiceOption.objects.create(
        service=service, name='Characters', price_formula='+3+([value]*2)', min_value=1, max_value=10,
    )
    ServiceOption.objects.create(
        service=service, name='Alternatives', price_formula='+3*[value]', min_value=0, max_value=10,
    )
    ServiceOption.objects.create(
        service=service, name='Poses', price_formula='+5+[value]', min_value=1, max_value=5,
    )
    return service


@pytest.fixture
def character_option(service):
    return service.options.get(name='Characters')


@pytest.fixture
def pending_request(client_user, service):
    """A safe-for-work request waiting for a decision."""
    return CommissionRequest.objects.create(
        user=client_user,
        service=service,
        description='Knight portrait',
        character_count=2,
        alternative_count=0,
        pose_count=1,
        total_price=Decimal('40.00'),
        complexity='Low',
    )


@pytest.fixture
def nsfw_request(client_user, service):
    """An NSFW request waiting for a decision."""
    return CommissionRequest.objects.create(
        user=client_user,
        service=service,
        description='Mature piece',
        is_nsfw=True,
        total_price=Decimal('35.00'),
        complexity='Low',
    )


def _open_commission(commission_request, status=CommissionStatus.ACCEPTED, **extra):
    commission_request.status = status
    commission_request.save()
    return Commission.objects.create(
        request=commission_request,
        status=status,
        complexity=commission_request.complexity,
        **extra,
    )


@pytest.fixture
def commission(client_user, service):
    """Safe-for-work commission in progress."""
    commission_request = CommissionRequest.objects.create(
        user=client_user,
        service=service,
        description='Dragon rider',
        references=['/uploads/references/reference-abc.png'],
        total_price=Decimal('48.00'),
        complexity='Mid',
    )
    return _open_commission(commission_request, CommissionStatus.WORKING, progress='Lineart')


@pytest.fixture
def nsfw_commission(client_user, service):
    """NSFW commission not marked as public work."""
    commission_request = CommissionRequest.objects.create(
        user=client_user,
        service=service,
        description='Private mature piece',
        is_nsfw=True,
        total_price=Decimal('35.00'),
    )
    return _open_commission(commission_request, CommissionStatus.WORKING)


@pytest.fixture
def public_nsfw_commission(client_user, service):
    """NSFW commission the artist marked as public work."""
    commission_request = CommissionRequest.objects.create(
        user=client_user,
        service=service,
        description='Public mature piece',
        is_nsfw=True,
        total_price=Decimal('35.00'),
    )
    return _open_commission(commission_request, CommissionStatus.FINISHED, is_public_work=True)


@pytest.fixture
def commission_update(commission):
    return CommissionUpdate.objects.create(
        commission=commission,
        title='Sketch',
        description='First sketch',
        image_path='/uploads/commissions/commission-1-sketch.png',
    )


@pytest.fixture
def media_root(settings, tmp_path):
    """Store uploads in a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


@pytest.fixture
def artist_email(settings):
    settings.COMMISSIONS = {**settings.COMMISSIONS, 'ARTIST_EMAIL': 'studio@example.com'}
    return 'studio@example.com'


