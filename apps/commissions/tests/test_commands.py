import pytest
from django.core.management import call_command
from django.urls import reverse

from apps.accounts.models import User
from apps.catalog.models import Service
from apps.commissions.models import Commission, CommissionRequest


@pytest.mark.django_db
class TestCreateSampleData:

    def test_seeds_pipeline(self):
        call_command('create_sample_data')

        assert User.objects.get(username='artist').is_staff
        assert User.objects.get(username='bob').is_vip

        service = Service.objects.get(name='Character Illustration')
        assert service.options.count() == 3

        assert CommissionRequest.objects.filter(status='Requested').count() == 3
        assert set(Commission.objects.values_list('status', flat=True)) == {
            'Accepted', 'Working', 'Waiting', 'Finished',
        }

    def test_rerun_is_idempotent(self):
        call_command('create_sample_data')
        call_command('create_sample_data')

        assert CommissionRequest.objects.count() == 7
        assert Commission.objects.count() == 4

    def test_clear(self):
        call_command('create_sample_data')
        call_command('create_sample_data', '--clear')

        assert CommissionRequest.objects.count() == 7


@pytest.mark.django_db
def test_health_check(client):
    response = client.get(reverse('health-check'))

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
